import math
from typing import List, Optional, Sequence

from exactdt._typing import Region


def split_axis(shape: Sequence[int], excluded_axis: int) -> Optional[int]:
    """
    The outermost axis that can be cut into chunks: extent larger than one
    and not the sweep axis. None if every axis is ruled out.
    """
    for axis, n in enumerate(shape):
        if axis != excluded_axis and n > 1:
            return axis
    return None


def partition(shape: Sequence[int], excluded_axis: int, n_workers: int) -> List[Region]:
    """
    Split a grid into disjoint hyper-rectangular regions, one per worker task.

    Lines along `excluded_axis` are never cut. The result depends only on
    the arguments, so identical calls give identical region boundaries.

    Args:
        shape: extents of the grid.
        excluded_axis: the current sweep axis.
        n_workers: requested number of regions.
    Returns:
        list of tuples of slices, at most n_workers of them, all non-empty.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")

    whole = tuple(slice(0, n) for n in shape)
    axis = split_axis(shape, excluded_axis)
    if axis is None:
        return [whole]

    size = shape[axis]
    chunk = math.ceil(size / n_workers)
    regions = []
    for start in range(0, size, chunk):
        sl = list(whole)
        sl[axis] = slice(start, min(start + chunk, size))
        regions.append(tuple(sl))
    return regions
