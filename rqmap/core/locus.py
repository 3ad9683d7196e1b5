# This file is part of RQMap.
# Licensed under MIT License.

"""Stranded genomic intervals.

Coordinates are 0-based and half-open, matching ``pysam``. A locus with
``start == end`` is zero-length and stands for the single position
``start``; every locus therefore covers at least one unit position.
"""

from dataclasses import dataclass, replace
from enum import Enum


class Strand(Enum):
    FORWARD = '+'
    REVERSE = '-'

    def invert(self):
        return Strand.REVERSE if self is Strand.FORWARD else Strand.FORWARD

    @classmethod
    def parse(cls, value):
        """Parse ``'+'``, ``'-'`` or ``'.'`` (unstranded, read as forward)."""
        if isinstance(value, cls):
            return value
        if value in ('+', '.', None):
            return cls.FORWARD
        if value == '-':
            return cls.REVERSE
        raise ValueError(f'Unknown strand "{value}"')

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Locus:
    chrom: str
    start: int
    end: int
    strand: Strand = Strand.FORWARD

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f'Negative start coordinate: {self.start}')
        if self.end < self.start:
            raise ValueError(f'End {self.end} is before start {self.start}')
        if not isinstance(self.strand, Strand):
            object.__setattr__(self, 'strand', Strand.parse(self.strand))

    @classmethod
    def point(cls, chrom, pos, strand=Strand.FORWARD):
        return cls(chrom, pos, pos, strand)

    @classmethod
    def coerce(cls, value):
        """Build a locus from a ``Locus`` or a ``(chrom, start, end[, strand])`` tuple."""
        if isinstance(value, cls):
            return value
        chrom, start, end, *rest = value
        return cls(chrom, start, end, Strand.parse(rest[0]) if rest else Strand.FORWARD)

    @property
    def span(self):
        """Half-open span of the unit positions covered."""
        return self.start, max(self.end, self.start + 1)

    @property
    def n_positions(self):
        return max(1, self.end - self.start)

    @property
    def is_point(self):
        return self.start == self.end

    def positions(self):
        """Yield a zero-length locus for each unit position, in coordinate order."""
        _begin, _end = self.span
        for pos in range(_begin, _end):
            yield Locus(self.chrom, pos, pos, self.strand)

    def shift(self, n):
        """Move the locus ``n`` bases downstream with respect to its strand.

        Forward loci move toward higher coordinates, reverse loci toward
        lower ones. The start is clipped at 0.
        """
        delta = n if self.strand is Strand.FORWARD else -n
        start = max(0, self.start + delta)
        return replace(self, start=start, end=start + (self.end - self.start))

    def first_pos(self):
        """Zero-length locus at the 5'-most position."""
        if self.strand is Strand.REVERSE and not self.is_point:
            return Locus(self.chrom, self.end - 1, self.end - 1, self.strand)
        return Locus(self.chrom, self.start, self.start, self.strand)

    def __str__(self):
        return f'{self.chrom}:{self.start}-{self.end}({self.strand})'
