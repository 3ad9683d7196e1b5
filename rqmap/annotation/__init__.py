# This file is part of RQMap.
# Licensed under MIT License.


def get_index_class(index_class_name):
    """Get index class matching provided name

    Args:
        index_class_name (str): Name of index class.

    Returns:
        Index class storing loci and finding overlaps
    """
    if index_class_name == 'intervaltree':
        from .intervaltree import LocusIndex

        return LocusIndex
    else:
        raise NotImplementedError(
            f'Unknown index class "{index_class_name}". Only "intervaltree" is supported.'
        )
