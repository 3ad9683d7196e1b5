# -*- coding: utf-8 -*-

# This file is part of RQMap.
# Licensed under MIT License.

""" RQMap count

"""
import logging as lg
import os
from time import time

from . import BUILD_OPTS, configure_logging
from ..annotation.bed import read_bed
from ..core.reporter import counts_table, output_table
from .build import BuildOptions, build_map
from .console import Stopwatch


class CountOptions(BuildOptions):

    OPTS = """
    - Input Options:
        - samfile:
            positional: True
            help: Path to alignment file (SAM, BAM or CRAM). A region scan is
                  used when the file is coordinate sorted and indexed.
        - bedfile:
            positional: True
            help: BED file of regions to count reads in.
""" + BUILD_OPTS


def run(args):
    opts = CountOptions(args)
    console = configure_logging(opts)
    lg.info('\n{}\n'.format(opts))
    total_time = time()
    stopwatch = Stopwatch()

    console.banner(opts.version)

    stopwatch.start('Regions')
    regions = read_bed(opts.bedfile)
    console.item('Regions', '{:,} ({})'.format(len(regions), os.path.basename(opts.bedfile)))

    stopwatch.start('Build')
    rqmap = build_map(opts, [r.locus for r in regions], console)

    stopwatch.start('Count')
    table = counts_table(rqmap, regions, stranded=opts.stranded)
    _outfile = opts.outfile_path('counts.tsv')
    output_table(table, rqmap.run_info, _outfile)
    stopwatch.stop()

    console.section('Output')
    console.output_file(_outfile)
    console.blank()
    console.timing_table(stopwatch)
    console.status('Completed in {:.1f}s'.format(time() - total_time))
    lg.info('rqmap count complete (%.1fs)' % (time() - total_time))
