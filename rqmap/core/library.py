# This file is part of RQMap.
# Licensed under MIT License.

"""Library types and the strand-derivation table.

The library type says which mate of a read pair carries the sense
strand of the original molecule. It is attached to a map as metadata and
is not checked against the reads.
"""

from enum import Enum

from .locus import Strand


class LibraryType(Enum):
    R1_SENSE = 'R1Sense'
    R2_SENSE = 'R2Sense'
    UNSTRANDED = 'Unstranded'

    @classmethod
    def parse(cls, value):
        """Accept enum values, their names, or the FR/RF shorthands."""
        if isinstance(value, cls):
            return value
        _aliases = {
            'r1sense': cls.R1_SENSE,
            'r1_sense': cls.R1_SENSE,
            'fr': cls.R1_SENSE,
            'f': cls.R1_SENSE,
            'r2sense': cls.R2_SENSE,
            'r2_sense': cls.R2_SENSE,
            'rf': cls.R2_SENSE,
            'r': cls.R2_SENSE,
            'unstranded': cls.UNSTRANDED,
            'none': cls.UNSTRANDED,
        }
        try:
            return _aliases[str(value).lower()]
        except KeyError:
            raise ValueError(f'Unknown library type "{value}"') from None


class Mate(Enum):
    FIRST = 1
    SECOND = 2

    @classmethod
    def of(cls, read):
        """Mate identity of a record; unpaired reads count as the first mate."""
        return cls.SECOND if read.is_paired and read.is_read2 else cls.FIRST


_F, _R = Strand.FORWARD, Strand.REVERSE

# (library type, mate, alignment strand) -> locus strand
STRAND_TABLE = {
    (LibraryType.R1_SENSE, Mate.FIRST, _F): _F,
    (LibraryType.R1_SENSE, Mate.FIRST, _R): _R,
    (LibraryType.R1_SENSE, Mate.SECOND, _F): _R,
    (LibraryType.R1_SENSE, Mate.SECOND, _R): _F,
    (LibraryType.R2_SENSE, Mate.FIRST, _F): _R,
    (LibraryType.R2_SENSE, Mate.FIRST, _R): _F,
    (LibraryType.R2_SENSE, Mate.SECOND, _F): _F,
    (LibraryType.R2_SENSE, Mate.SECOND, _R): _R,
    (LibraryType.UNSTRANDED, Mate.FIRST, _F): _F,
    (LibraryType.UNSTRANDED, Mate.FIRST, _R): _F,
    (LibraryType.UNSTRANDED, Mate.SECOND, _F): _F,
    (LibraryType.UNSTRANDED, Mate.SECOND, _R): _F,
}


def derive_strand(library_type, mate, aln_strand):
    return STRAND_TABLE[(library_type, mate, aln_strand)]
