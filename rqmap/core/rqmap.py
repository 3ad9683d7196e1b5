# This file is part of RQMap.
# Licensed under MIT License.

"""Read quantification map: construction from alignments and overlap queries.

A map is built in a single construction call, either by streaming every
record of a read source or by fetching only the records overlapping a
list of regions from an indexed source. Both paths push records through
the same pipeline::

    record -> filter -> locus_from_read -> transform -> index.insert

The index is frozen at the end of construction; afterwards the map only
answers queries.
"""

import logging as lg
import os
from collections import OrderedDict
from contextlib import contextmanager
from enum import Enum

import pysam

from ..annotation import get_index_class
from .convert import locus_from_read
from .errors import ConversionError
from .library import LibraryType, Mate
from .locus import Locus
from .scaffold import ScaffoldDict


class ErrorPolicy(Enum):
    """What to do with a record that cannot be converted to a locus."""
    ABORT = 'abort'
    SKIP = 'skip'


def _print_progress(nrecs, infolev=5000000):
    mrecs = nrecs / 1e6
    msg = f'...processed {mrecs:.1f}M records'
    if nrecs % infolev == 0:
        lg.info(msg)
    else:
        lg.debug(msg)


@contextmanager
def _open_source(source, require_index=False):
    """Yield an open read source, opening (and later closing) paths with pysam."""
    if isinstance(source, (str, os.PathLike)):
        with pysam.AlignmentFile(os.fspath(source), check_sq=False) as sf:
            if require_index and not sf.has_index():
                raise ValueError(f'{source} has no index; region scan needs a sorted, indexed file')
            yield sf
    else:
        yield source


def _stream_records(source):
    # A separate iterator always starts at the first record, whatever the
    # handle has read before.
    if isinstance(source, pysam.AlignmentFile):
        return source.fetch(until_eof=True, multiple_iterators=True)
    return iter(source)


def region_bounds(region):
    """Return ``(chrom, lo, hi)`` for a region request.

    Regions may be :class:`Locus` objects or ``(chrom, a, b[, strand])``
    tuples whose endpoints are in either order. A zero-width region is
    widened to its single position.
    """
    if isinstance(region, Locus):
        chrom, a, b = region.chrom, region.start, region.end
    else:
        chrom, a, b = region[0], int(region[1]), int(region[2])
    lo, hi = min(a, b), max(a, b)
    return chrom, lo, max(hi, lo + 1)


class RQMap:
    """Library of aligned reads indexed as stranded loci.

    Use :meth:`from_reader` or :meth:`from_indexed` to build one.
    """

    def __init__(self, library_type, index, run_info=None):
        self.library_type = LibraryType.parse(library_type)
        self.index = index.freeze()
        self.run_info = run_info if run_info is not None else OrderedDict()

    # -- Construction --------------------------------------------------------

    @classmethod
    def from_reader(cls, source, as_fragments, library_type, read_filter=None, transform=None,
                    on_error=ErrorPolicy.ABORT, collapse_pairs=False, index_class='intervaltree'):
        """Build a map from every record of ``source``, in source order.

        Args:
            source: Open ``pysam.AlignmentFile`` (or any iterable of records
                exposing ``references``), or a path to one.
            as_fragments: Index the insert of each read pair instead of the read.
            library_type: :class:`LibraryType` (or a name it parses).
            read_filter: Optional predicate; rejected records are skipped.
            transform: Optional map applied to each locus before insertion.
            on_error: :class:`ErrorPolicy` for records that fail conversion.
            collapse_pairs: In fragment mode, convert only the first mate of
                each pair so that a pair is counted once.

        Raises:
            ConversionError: a record failed conversion and ``on_error`` is ABORT.
        """
        library_type = LibraryType.parse(library_type)
        index = get_index_class(index_class)()
        run_info = _new_run_info(library_type, as_fragments)
        with _open_source(source) as sf:
            scaffolds = ScaffoldDict.from_source(sf)
            lg.info(f'Full scan over {len(scaffolds)} references')
            _populate(index, _stream_records(sf), scaffolds, run_info, as_fragments, library_type,
                      read_filter, transform, ErrorPolicy(on_error), collapse_pairs)
        _log_summary(run_info)
        return cls(library_type, index, run_info)

    @classmethod
    def from_indexed(cls, source, as_fragments, regions, library_type, read_filter=None, transform=None,
                     on_error=ErrorPolicy.ABORT, collapse_pairs=False, index_class='intervaltree'):
        """Build a map from the records overlapping each of ``regions``.

        Regions are processed in order into one shared index. Regions on
        references missing from the header are skipped. A record lying in
        two requested regions is inserted once per region.

        Args:
            source: Indexed ``pysam.AlignmentFile`` (anything with
                ``references`` and ``fetch(tid=, start=, stop=)``), or a path.
            regions: Sequence of :class:`Locus` or ``(chrom, a, b[, strand])``.

        Other arguments are as for :meth:`from_reader`.
        """
        library_type = LibraryType.parse(library_type)
        index = get_index_class(index_class)()
        run_info = _new_run_info(library_type, as_fragments)
        _policy = ErrorPolicy(on_error)
        with _open_source(source, require_index=True) as sf:
            scaffolds = ScaffoldDict.from_source(sf)
            for region in regions:
                chrom, lo, hi = region_bounds(region)
                tid = scaffolds.name_to_id(chrom)
                if tid is None:
                    lg.debug(f'Skipping region {chrom}:{lo}-{hi}: reference not in header')
                    run_info['regions_skipped'] += 1
                    continue
                run_info['regions'] += 1
                _populate(index, sf.fetch(tid=tid, start=lo, stop=hi), scaffolds, run_info, as_fragments,
                          library_type, read_filter, transform, _policy, collapse_pairs)
        _log_summary(run_info)
        return cls(library_type, index, run_info)

    # -- Queries -------------------------------------------------------------

    def overlap_count(self, locus, strand=None):
        """Number of stored loci overlapping ``locus``.

        Every stored locus counts once, whatever its strand, unless
        ``strand`` is given. Unknown references give 0.
        """
        return self.index.count(Locus.coerce(locus), strand=strand)

    def point_coverage(self, position, strand=None):
        """Number of stored loci covering a single position.

        ``position`` is a zero-length :class:`Locus` or ``(chrom, pos[, strand])``.
        """
        if not isinstance(position, Locus):
            chrom, pos, *rest = position
            position = Locus(chrom, pos, pos, *rest)
        elif not position.is_point:
            position = Locus.point(position.chrom, position.start, position.strand)
        return self.overlap_count(position, strand=strand)

    def coverage_profile(self, locus, strand=None):
        """Point coverage at each unit position of ``locus``, in coordinate order."""
        return [self.point_coverage(p, strand=strand) for p in Locus.coerce(locus).positions()]

    def counts_for(self, regions, strand=None):
        return [self.overlap_count(r, strand=strand) for r in regions]

    def __len__(self):
        return len(self.index)

    def __repr__(self):
        return f'RQMap(library_type={self.library_type.value}, loci={len(self)})'


def _new_run_info(library_type, as_fragments):
    run_info = OrderedDict()
    run_info['library_type'] = library_type.value
    run_info['as_fragments'] = bool(as_fragments)
    for k in ('records', 'filtered', 'paired_skipped', 'dropped', 'inserted', 'regions', 'regions_skipped'):
        run_info[k] = 0
    return run_info


def _populate(index, records, scaffolds, run_info, as_fragments, library_type,
              read_filter, transform, on_error, collapse_pairs):
    """Filter, convert, transform and insert each record into ``index``."""
    _skip_second = as_fragments and collapse_pairs
    for read in records:
        run_info['records'] += 1
        if run_info['records'] % 1000000 == 0:
            _print_progress(run_info['records'])

        if read_filter is not None and not read_filter(read):
            run_info['filtered'] += 1
            continue

        if _skip_second and Mate.of(read) is Mate.SECOND:
            run_info['paired_skipped'] += 1
            continue

        try:
            locus = locus_from_read(read, library_type, as_fragments, scaffolds)
        except ConversionError as exc:
            if on_error is ErrorPolicy.ABORT:
                raise
            lg.debug(f'Dropping record: {exc}')
            run_info['dropped'] += 1
            continue

        if transform is not None:
            _new = transform(locus)
            if _new.chrom != locus.chrom:
                raise ValueError(f'Transform moved {locus} to another reference ({_new.chrom})')
            locus = _new

        index.insert(locus)
        run_info['inserted'] += 1


def _log_summary(run_info):
    lg.info('Construction: {records} records, {filtered} filtered, {inserted} loci indexed'.format(**run_info))
    if run_info['dropped']:
        lg.warning(f"{run_info['dropped']} records could not be converted and were dropped")
    if run_info['regions_skipped']:
        lg.info(f"{run_info['regions_skipped']} regions on unknown references were skipped")
