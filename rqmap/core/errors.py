# This file is part of RQMap.
# Licensed under MIT License.

"""Exception types raised while building or mutating a read quantification map."""


class RQMapError(Exception):
    """Base class for RQMap errors."""


class ConversionError(RQMapError):
    """An alignment record could not be turned into a locus.

    Attributes:
        query_name: Name of the offending record (may be None).
        chrom: Reference name of the record, if known.
        reason: Short description of what was wrong.
    """

    def __init__(self, reason, query_name=None, chrom=None):
        self.reason = reason
        self.query_name = query_name
        self.chrom = chrom
        super().__init__(f'{query_name or "<unnamed>"} ({chrom or "*"}): {reason}')


class FrozenIndexError(RQMapError):
    """Insertion attempted on an index that has been frozen for queries."""
