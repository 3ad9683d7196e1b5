# This file is part of RQMap.
# Licensed under MIT License.


class ScaffoldDict:
    """Bidirectional mapping between reference names and numeric ids.

    Built once from the header of a read source. Ids follow the order of
    the references in the header, as in SAM/BAM ``tid`` values.
    """

    def __init__(self, names, lengths=None):
        self._names = list(names)
        self._ids = {name: tid for tid, name in enumerate(self._names)}
        self._lengths = dict(zip(self._names, lengths)) if lengths is not None else {}

    @classmethod
    def from_source(cls, source):
        """Build from anything exposing ``references`` (and optionally ``lengths``)."""
        return cls(source.references, getattr(source, 'lengths', None))

    def name_to_id(self, name):
        return self._ids.get(name)

    def id_to_name(self, tid):
        if tid is None or tid < 0 or tid >= len(self._names):
            return None
        return self._names[tid]

    def length(self, name):
        return self._lengths.get(name)

    @property
    def names(self):
        return tuple(self._names)

    def __contains__(self, name):
        return name in self._ids

    def __len__(self):
        return len(self._names)
