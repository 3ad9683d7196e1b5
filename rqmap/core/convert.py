# This file is part of RQMap.
# Licensed under MIT License.

"""Conversion of alignment records into stranded loci."""

from .errors import ConversionError
from .library import Mate, derive_strand
from .locus import Locus, Strand


def alignment_strand(read):
    return Strand.REVERSE if read.is_reverse else Strand.FORWARD


def fragment_span(read):
    """Return the ``(start, end)`` insert span of a read pair, or None.

    The span runs from the leftmost mate start for ``|template_length|``
    bases. None when the mate is unmapped, on another reference, or the
    template length is missing.
    """
    if not read.is_paired or read.mate_is_unmapped:
        return None
    if read.next_reference_id != read.reference_id:
        return None
    if not read.template_length:
        return None
    _start = min(read.reference_start, read.next_reference_start)
    return _start, _start + abs(read.template_length)


def locus_from_read(read, library_type, as_fragment, scaffolds):
    """Convert an alignment record into a :class:`Locus`.

    Args:
        read: ``pysam.AlignedSegment`` (or anything with the same attributes).
        library_type: :class:`LibraryType` used to derive the strand.
        as_fragment: If True, index the whole insert of the read pair.
        scaffolds: :class:`ScaffoldDict` resolving ``read.reference_id``.

    Raises:
        ConversionError: the read is unmapped, its reference is unknown, or
            fragment mode was requested and the mate span is unavailable.
    """
    _qname = getattr(read, 'query_name', None)
    if read.is_unmapped:
        raise ConversionError('record is unmapped', _qname)

    chrom = scaffolds.id_to_name(read.reference_id)
    if chrom is None:
        raise ConversionError(f'reference id {read.reference_id} not in header', _qname)

    strand = derive_strand(library_type, Mate.of(read), alignment_strand(read))

    if as_fragment:
        span = fragment_span(read)
        if span is None:
            raise ConversionError('mate span unavailable for fragment', _qname, chrom)
        return Locus(chrom, span[0], span[1], strand)

    if read.reference_end is None:
        raise ConversionError('record has no aligned span', _qname, chrom)
    return Locus(chrom, read.reference_start, read.reference_end, strand)
