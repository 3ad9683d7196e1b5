# This file is part of RQMap.
# Licensed under MIT License.

"""Shared map construction for the ``count`` and ``coverage`` subcommands."""

import logging as lg
import os
import sys
from time import time

import pysam

from . import SubcommandOptions
from .. import __version__
from ..core.library import LibraryType
from ..core.rqmap import ErrorPolicy, RQMap
from ..hooks import AllOf, Chain, MapqFilter
from ..plugins.registry import HookRegistry


class BuildOptions(SubcommandOptions):

    def __init__(self, args):
        super().__init__(args)
        self.version = __version__
        if getattr(self, 'logfile', None) is None:
            self.logfile = sys.stderr

    def outfile_path(self, suffix):
        basename = '%s-%s' % (self.exp_tag, suffix)
        return os.path.join(self.outdir, basename)


def make_hooks(opts, registry=None):
    """Build the read filter and locus transform requested on the command line.

    Returns:
        (read_filter, transform), either of which may be None.
    """
    _filter_names = getattr(opts, 'filter', None) or []
    _transform_names = getattr(opts, 'transform', None) or []
    if registry is None and (_filter_names or _transform_names):
        registry = HookRegistry().discover()

    filters = []
    if getattr(opts, 'min_mapq', None) is not None:
        filters.append(MapqFilter(opts.min_mapq))
    filters.extend(registry.make_filter(n) for n in _filter_names)
    transforms = [registry.make_transform(n) for n in _transform_names]

    read_filter = filters[0] if len(filters) == 1 else (AllOf(*filters) if filters else None)
    transform = transforms[0] if len(transforms) == 1 else (Chain(*transforms) if transforms else None)
    return read_filter, transform


def check_index(samfile):
    """Return True if ``samfile`` is indexed, creating a .bai for sorted BAMs."""
    with pysam.AlignmentFile(samfile, check_sq=False) as sf:
        has_index = sf.has_index()
        _is_coordinate_sorted = sf.header.to_dict().get('HD', {}).get('SO') == 'coordinate'
        _is_bam = sf.is_bam

    if not has_index and _is_coordinate_sorted and _is_bam:
        lg.info('Coordinate-sorted BAM without index, creating .bai')
        pysam.index(samfile)
        has_index = True
    return has_index


def build_map(opts, regions, console):
    """Construct an :class:`RQMap` for ``regions`` according to ``opts``.

    Uses a region scan when the alignment file is indexed and
    ``--full_scan`` was not given; otherwise streams the whole file.
    """
    read_filter, transform = make_hooks(opts)
    _kwargs = dict(
        read_filter=read_filter,
        transform=transform,
        on_error=ErrorPolicy(opts.on_error),
        collapse_pairs=opts.collapse_pairs,
    )
    _lt = LibraryType.parse(opts.library_type)

    console.section('Input')
    console.item('Alignments', os.path.basename(opts.samfile))
    console.item('Library', _lt.value)
    console.item('Mode', 'fragments' if opts.fragments else 'reads')
    if read_filter is not None:
        console.item('Filter', repr(read_filter))
    if transform is not None:
        console.item('Transform', repr(transform))
    console.blank()

    stime = time()
    if not opts.full_scan and check_index(opts.samfile):
        lg.info(f'Indexed alignment file, scanning {len(regions)} regions')
        rqmap = RQMap.from_indexed(opts.samfile, opts.fragments, regions, _lt, **_kwargs)
    else:
        lg.info('Streaming full alignment file')
        rqmap = RQMap.from_reader(opts.samfile, opts.fragments, _lt, **_kwargs)
    _elapsed = time() - stime

    _ri = rqmap.run_info
    console.status('Building map... done ({:.1f}s)'.format(_elapsed))
    console.detail('{:,} records, {:,} filtered, {:,} loci indexed'.format(
        _ri['records'], _ri['filtered'], _ri['inserted']))
    if _ri['dropped']:
        console.detail('{:,} records dropped (could not be converted)'.format(_ri['dropped']))
    if _ri['regions'] or _ri['regions_skipped']:
        console.verbose('{:,} regions scanned, {:,} on unknown references'.format(
            _ri['regions'], _ri['regions_skipped']))
    if _ri['paired_skipped']:
        console.verbose('{:,} second mates skipped (pairs collapsed)'.format(_ri['paired_skipped']))
    console.blank()
    return rqmap
