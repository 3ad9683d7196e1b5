# This file is part of RQMap.
# Licensed under MIT License.

import logging as lg
import pickle
from collections import Counter, defaultdict
from itertools import count

from intervaltree import Interval, IntervalTree

from ..core.errors import FrozenIndexError, RQMapError
from ..core.locus import Locus, Strand


class LocusIndex:
    """Per-reference interval trees holding stranded loci.

    Loci are collected during construction and the trees are built in one
    pass by :meth:`freeze`. A frozen index is read-only and may be shared
    between threads for queries.
    """

    def __init__(self):
        lg.debug('Using intervaltree for locus index.')
        self._pending = defaultdict(list)
        self._serial = count()
        self.itree = {}
        self.frozen = False

    def insert(self, locus):
        if self.frozen:
            raise FrozenIndexError(f'Cannot insert {locus}: index is frozen')
        _begin, _end = locus.span
        # Serial number keeps identical loci distinct inside the tree
        self._pending[locus.chrom].append(Interval(_begin, _end, (next(self._serial), locus)))

    def freeze(self):
        if self.frozen:
            return self
        for chrom, ivs in self._pending.items():
            self.itree[chrom] = IntervalTree(ivs)
        self._pending = None
        self.frozen = True
        lg.debug(f'Froze index: {len(self)} loci on {len(self.itree)} references')
        return self

    def _overlap(self, query):
        if not self.frozen:
            raise RQMapError('Index must be frozen before it is queried')
        query = Locus.coerce(query)
        tree = self.itree.get(query.chrom)
        if tree is None:
            return []
        _begin, _end = query.span
        return tree.overlap(_begin, _end)

    def find(self, query):
        """Loci overlapping ``query``, in insertion order."""
        return [iv.data[1] for iv in sorted(self._overlap(query), key=lambda iv: iv.data[0])]

    def count(self, query, strand=None):
        """Number of stored loci overlapping ``query``, optionally on one strand only."""
        hits = self._overlap(query)
        if strand is None:
            return len(hits)
        strand = Strand.parse(strand)
        return sum(1 for iv in hits if iv.data[1].strand is strand)

    def references(self):
        if self.frozen:
            return list(self.itree.keys())
        return list(self._pending.keys())

    def reference_counts(self):
        """Number of loci stored per reference."""
        ret = Counter()
        _trees = self.itree if self.frozen else self._pending
        for chrom, tree in _trees.items():
            ret[chrom] += len(tree)
        return ret

    def __len__(self):
        return sum(self.reference_counts().values())

    def save(self, filename):
        self.freeze()
        with open(filename, 'wb') as outh:
            pickle.dump({'itree': self.itree}, outh)

    @classmethod
    def load(cls, filename):
        with open(filename, 'rb') as fh:
            loader = pickle.load(fh)
        obj = cls.__new__(cls)
        obj.itree = loader['itree']
        obj._pending = None
        obj._serial = count(sum(len(t) for t in obj.itree.values()))
        obj.frozen = True
        return obj
