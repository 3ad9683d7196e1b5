# -*- coding: utf-8 -*-

# This file is part of RQMap.
# Licensed under MIT License.

""" RQMap coverage

"""
import logging as lg
from time import time

from . import BUILD_OPTS, configure_logging
from ..annotation.bed import parse_region
from ..core.reporter import coverage_summary, coverage_table, output_table
from .build import BuildOptions, build_map
from .console import Stopwatch


class CoverageOptions(BuildOptions):

    OPTS = """
    - Input Options:
        - samfile:
            positional: True
            help: Path to alignment file (SAM, BAM or CRAM).
        - region:
            positional: True
            help: Region to profile, as chrom:start-end (0-based, half-open),
                  optionally followed by (+) or (-).
""" + BUILD_OPTS


def run(args):
    opts = CoverageOptions(args)
    console = configure_logging(opts)
    lg.info('\n{}\n'.format(opts))
    total_time = time()
    stopwatch = Stopwatch()

    console.banner(opts.version)
    locus = parse_region(opts.region)
    console.item('Region', str(locus))

    stopwatch.start('Build')
    rqmap = build_map(opts, [locus], console)

    stopwatch.start('Coverage')
    table = coverage_table(rqmap, locus, stranded=opts.stranded)
    _outfile = opts.outfile_path('coverage.tsv')
    output_table(table, rqmap.run_info, _outfile)
    stopwatch.stop()

    _summ = coverage_summary(table)
    console.section('Coverage')
    console.item('Mean', '{:.2f}'.format(_summ['mean']))
    console.item('Max', _summ['max'])
    console.item('Covered', '{:.1%}'.format(_summ['covered']))
    console.blank()
    console.section('Output')
    console.output_file(_outfile)
    console.blank()
    console.timing_table(stopwatch)
    console.status('Completed in {:.1f}s'.format(time() - total_time))
    lg.info('rqmap coverage complete (%.1fs)' % (time() - total_time))
