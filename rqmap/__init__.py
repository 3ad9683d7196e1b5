# -*- coding: utf-8 -*-

# This file is part of RQMap.
# Licensed under MIT License.

"""Read quantification maps: overlap counts and coverage from aligned reads."""

__version__ = '0.3.0'

from .core.errors import ConversionError, FrozenIndexError, RQMapError  # noqa: E402,F401
from .core.library import LibraryType, Mate  # noqa: E402,F401
from .core.locus import Locus, Strand  # noqa: E402,F401
from .core.rqmap import ErrorPolicy, RQMap  # noqa: E402,F401
