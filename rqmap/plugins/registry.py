# This file is part of RQMap.
# Licensed under MIT License.

"""Discovery of named read filters and locus transforms."""

import logging as lg
from importlib.metadata import entry_points

from ..hooks.abc import LocusTransform, ReadFilter

FILTER_GROUP = 'rqmap.filters'
TRANSFORM_GROUP = 'rqmap.transforms'


class HookRegistry:
    """Discovers filters and transforms registered as entry points.

    Hooks are discovered via ``importlib.metadata.entry_points`` using the
    groups ``rqmap.filters`` and ``rqmap.transforms``. Each entry point
    names a class that can be instantiated without arguments (or with
    the keyword arguments passed to :meth:`make_filter` /
    :meth:`make_transform`).
    """

    def __init__(self):
        self._filter_eps = {}  # name -> entry_point
        self._transform_eps = {}

    # -- Discovery -----------------------------------------------------------

    def discover(self):
        for ep in entry_points(group=FILTER_GROUP):
            self._filter_eps[ep.name] = ep
        for ep in entry_points(group=TRANSFORM_GROUP):
            self._transform_eps[ep.name] = ep
        lg.debug(f'Discovered {len(self._filter_eps)} filters, {len(self._transform_eps)} transforms')
        return self

    def register_filter(self, name, cls):
        """Register a filter class directly, bypassing entry points."""
        self._filter_eps[name] = _Loaded(cls)

    def register_transform(self, name, cls):
        self._transform_eps[name] = _Loaded(cls)

    # -- Construction --------------------------------------------------------

    def make_filter(self, name, **kwargs):
        return self._make(self._filter_eps, name, ReadFilter, 'filter', kwargs)

    def make_transform(self, name, **kwargs):
        return self._make(self._transform_eps, name, LocusTransform, 'transform', kwargs)

    @staticmethod
    def _make(eps, name, base, kind, kwargs):
        if name not in eps:
            raise KeyError(f"Unknown {kind} '{name}'. Available: {sorted(eps)}")
        cls = eps[name].load()
        instance = cls(**kwargs)
        if not isinstance(instance, base):
            raise TypeError(f"'{name}' is not a {base.__name__} subclass")
        lg.info(f'Loaded {kind}: {name}')
        return instance

    # -- Introspection -------------------------------------------------------

    def list_available(self):
        """Return dicts of all discoverable filters and transforms."""
        return self._describe(self._filter_eps), self._describe(self._transform_eps)

    @staticmethod
    def _describe(eps):
        ret = {}
        for name, ep in eps.items():
            try:
                inst = ep.load()()
                ret[name] = {
                    'description': inst.description,
                    'builtin': getattr(ep, 'value', '').startswith('rqmap.hooks'),
                }
            except Exception as exc:
                lg.warning(f"Failed to load '{name}': {exc}", exc_info=True)
                ret[name] = {'description': '(load failed)', 'builtin': False}
        return ret

    @property
    def filters(self):
        return sorted(self._filter_eps)

    @property
    def transforms(self):
        return sorted(self._transform_eps)


class _Loaded:
    """Stand-in for an entry point whose class is already imported."""

    def __init__(self, cls):
        self.cls = cls
        self.value = f'{cls.__module__}:{cls.__qualname__}'

    def load(self):
        return self.cls
