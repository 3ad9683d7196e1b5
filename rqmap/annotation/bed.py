# This file is part of RQMap.
# Licensed under MIT License.

"""Region requests from BED files and region strings."""

import logging as lg
import os
import re
from collections import namedtuple

from ..core.locus import Locus, Strand

BEDRegion = namedtuple('BEDRegion', ['locus', 'name'])

_REGION_RE = re.compile(r'^(?P<chrom>[^:\s]+)(:(?P<start>[\d,]+)-(?P<end>[\d,]+))?(\((?P<strand>[+\-.])\))?$')


def read_bed(bed_file):
    """Read regions from a BED file (path or open handle).

    Only the first six columns are used. Missing names default to
    ``chrom:start-end``; missing or ``.`` strands are read as forward.

    Returns:
        (list of BEDRegion): Regions in file order.
    """
    _opened = isinstance(bed_file, (str, os.PathLike))
    fh = open(bed_file) if _opened else bed_file  # noqa: SIM115
    ret = []
    try:
        for rownum, line in enumerate(fh):
            if not line.strip() or line.startswith(('#', 'track', 'browser')):
                continue
            f = line.rstrip('\n').split('\t')
            if len(f) < 3:
                lg.warning(f'Skipping row {rownum}: fewer than 3 columns')
                continue
            start, end = int(f[1]), int(f[2])
            strand = Strand.parse(f[5]) if len(f) > 5 else Strand.FORWARD
            locus = Locus(f[0], min(start, end), max(start, end), strand)
            name = f[3] if len(f) > 3 and f[3] != '.' else f'{f[0]}:{start}-{end}'
            ret.append(BEDRegion(locus, name))
    finally:
        if _opened:
            fh.close()
    lg.debug(f'Read {len(ret)} regions')
    return ret


def parse_region(region):
    """Parse ``chrom:start-end`` (optionally suffixed with ``(+)``/``(-)``).

    A bare ``chrom`` is not accepted here; a coverage profile needs bounds.
    """
    m = _REGION_RE.match(region.strip())
    if m is None or m.group('start') is None:
        raise ValueError(f'Cannot parse region "{region}"; expected chrom:start-end')
    start = int(m.group('start').replace(',', ''))
    end = int(m.group('end').replace(',', ''))
    return Locus(m.group('chrom'), min(start, end), max(start, end), Strand.parse(m.group('strand')))
