# This file is part of RQMap.
# Licensed under MIT License.

"""Plugin infrastructure for named filters and transforms."""

from .registry import HookRegistry  # noqa: F401
