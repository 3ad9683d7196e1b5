# This file is part of RQMap.
# Licensed under MIT License.

"""Built-in read filters."""

import pysam

from .abc import ReadFilter

# Secondary, supplementary, QC-fail and duplicate alignments
DEFAULT_EXCLUDE_FLAGS = pysam.FSECONDARY | pysam.FSUPPLEMENTARY | pysam.FQCFAIL | pysam.FDUP


class MapqFilter(ReadFilter):
    """Keep reads whose mapping quality is strictly above ``min_mapq``."""

    description = 'Keep reads with MAPQ above a threshold'

    def __init__(self, min_mapq=30):
        self.min_mapq = int(min_mapq)

    def __call__(self, read):
        return read.mapping_quality > self.min_mapq

    def __repr__(self):
        return f'MapqFilter(min_mapq={self.min_mapq})'


class FlagFilter(ReadFilter):
    """Drop reads carrying any of the ``exclude`` SAM flag bits."""

    description = 'Drop secondary, supplementary, QC-fail and duplicate reads'

    def __init__(self, exclude=DEFAULT_EXCLUDE_FLAGS):
        self.exclude = int(exclude)

    def __call__(self, read):
        return not (read.flag & self.exclude)

    def __repr__(self):
        return f'FlagFilter(exclude={self.exclude:#x})'


class ProperPairFilter(ReadFilter):
    """Keep reads flagged as part of a proper pair."""

    description = 'Keep properly paired reads'

    def __call__(self, read):
        return read.is_proper_pair


class AllOf(ReadFilter):
    """Keep a read only if every wrapped filter keeps it."""

    def __init__(self, *filters):
        self.filters = [f for f in filters if f is not None]

    @property
    def description(self):
        return ' and '.join(getattr(f, 'name', repr(f)) for f in self.filters)

    def __call__(self, read):
        return all(f(read) for f in self.filters)

    def __repr__(self):
        return 'AllOf({})'.format(', '.join(repr(f) for f in self.filters))
