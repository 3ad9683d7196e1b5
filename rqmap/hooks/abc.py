# -*- coding: utf-8 -*-

# This file is part of RQMap.
# Licensed under MIT License.

"""Abstract base classes for read filters and locus transforms."""

from abc import ABC, abstractmethod


class ReadFilter(ABC):
    """Predicate over alignment records.

    Applied before conversion; records for which it returns False are
    never converted or indexed. Any plain callable with the same
    signature can be used in its place.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def description(self) -> str:
        """One-line human-readable description."""
        return ""

    @abstractmethod
    def __call__(self, read) -> bool:
        """Return True to keep ``read``."""


class LocusTransform(ABC):
    """Map over converted loci, applied before insertion.

    Implementations may change the span of a locus (including collapsing
    it to a single position) but must keep its reference.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def __call__(self, locus):
        """Return the transformed locus."""
