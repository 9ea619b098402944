import os
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from exactdt._typing import SpacingLike


def _spec_sentinel(dtype, shape: Sequence[int], weights: Sequence[float],
                   squared: bool = True):
    """
    Check the output dtype and return its "infinite" value.

    The largest squared distance the grid can produce must stay strictly
    below the sentinel, otherwise a legitimate value could be read as
    "not reached yet".
    """
    dtype = np.dtype(dtype)
    if dtype.kind == 'f':
        if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
            raise TypeError(f"unsupported floating dtype {dtype}, use float32 or float64.")
        sentinel = np.finfo(dtype).max
    elif dtype.kind == 'i':
        if dtype.itemsize > 4:
            raise TypeError(
                f"{dtype} is not exactly representable in float64 working precision, "
                "use int32 or a floating type.")
        if not squared:
            raise TypeError(f"integer dtype {dtype} can only hold squared distances.")
        if not all(float(w).is_integer() for w in weights):
            raise TypeError(f"integer dtype {dtype} requires integral spacing.")
        sentinel = np.iinfo(dtype).max
    else:
        raise TypeError(f"unsupported output dtype {dtype}, use a signed integer or floating type.")

    max_sq = sum(((max(n, 1) - 1) * float(w)) ** 2 for n, w in zip(shape, weights))
    if max_sq >= float(sentinel):
        raise ValueError(
            f"{dtype} is too narrow for grid extent {tuple(shape)}: squared distances "
            f"up to {max_sq:g} reach the sentinel {sentinel}.")
    return sentinel


@dataclass
class DistanceOptions:
    """
    Settings of one distance transform.

    background_value: label of the background (outside) cells.
    spacing: per-axis cell widths, unit spacing if None.
    use_spacing: scale positions by spacing before squaring.
    squared_distance: keep squared distances, no square root.
    inside_is_positive: sign of the cells whose label is not background.
    dtype: output numeric type.
    n_workers: threads per pass, os.cpu_count() if None.
    verbose: show a progress bar over the passes.
    """
    background_value: object = 0
    spacing: SpacingLike = None
    use_spacing: bool = False
    squared_distance: bool = True
    inside_is_positive: bool = False
    dtype: object = np.float64
    n_workers: Optional[int] = None
    verbose: bool = False

    def resolve_workers(self) -> int:
        n_workers = self.n_workers
        if n_workers is None:
            n_workers = os.cpu_count() or 1
        n_workers = int(n_workers)
        if n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {n_workers}")
        return n_workers

    def validate(self, shape: Sequence[int], weights: Sequence[float]):
        """Check all settings against the grid and return the sentinel."""
        if len(shape) < 1:
            raise ValueError("the grid must have at least one dimension.")
        if self.spacing is not None and not self.use_spacing:
            print("WARNING: spacing is given but use_spacing is False, spacing is ignored.")
        return _spec_sentinel(self.dtype, shape, weights, self.squared_distance)
