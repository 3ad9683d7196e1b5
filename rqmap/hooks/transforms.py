# This file is part of RQMap.
# Licensed under MIT License.

"""Built-in locus transforms."""

from ..core.locus import Strand
from .abc import LocusTransform


class StrandShift(LocusTransform):
    """Shift loci by a strand-dependent offset.

    Offsets are strand-aware (see :meth:`Locus.shift`): a positive
    ``reverse`` offset moves reverse-strand loci toward lower coordinates.
    With ``collapse`` the result is reduced to its 5'-most position.
    """

    description = 'Shift loci by strand-specific offsets'

    def __init__(self, forward=0, reverse=0, collapse=False):
        self.forward = int(forward)
        self.reverse = int(reverse)
        self.collapse = collapse

    def __call__(self, locus):
        _n = self.forward if locus.strand is Strand.FORWARD else self.reverse
        shifted = locus.shift(_n)
        return shifted.first_pos() if self.collapse else shifted

    def __repr__(self):
        return f'StrandShift(forward={self.forward}, reverse={self.reverse}, collapse={self.collapse})'


class Tn5Shift(StrandShift):
    """Tn5 insertion-site correction for ATAC-seq.

    Forward reads move +4 and reverse reads -5, then each read is reduced
    to its cut site.
    """

    description = 'Tn5 cut-site correction (+4/-5) collapsed to one base'

    def __init__(self):
        super().__init__(forward=4, reverse=5, collapse=True)


class Chain(LocusTransform):
    """Apply transforms left to right."""

    def __init__(self, *transforms):
        self.transforms = [t for t in transforms if t is not None]

    @property
    def description(self):
        return ' then '.join(getattr(t, 'name', repr(t)) for t in self.transforms)

    def __call__(self, locus):
        for t in self.transforms:
            locus = t(locus)
        return locus
