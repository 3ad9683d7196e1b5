# This file is part of RQMap.
# Licensed under MIT License.

"""Read filters and locus transforms applied while building a map."""

from .abc import LocusTransform, ReadFilter  # noqa: F401
from .filters import AllOf, FlagFilter, MapqFilter, ProperPairFilter  # noqa: F401
from .transforms import Chain, StrandShift, Tn5Shift  # noqa: F401
