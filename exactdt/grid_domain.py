import numpy as np
from typing import Tuple, Optional

from torch import Tensor

from exactdt._typing import TensorLike, SpacingLike


def _as_numpy(x: TensorLike) -> np.ndarray:
    if isinstance(x, Tensor):
        return x.detach().cpu().numpy()
    return np.asarray(x)


class GridDomain:

    """
    An n-dimensional grid of labels together with the per-axis spacing
    and the feature cells the distance transform propagates from.
    """

    def __init__(self, labels: TensorLike, spacing: SpacingLike = None,
                 background_value=0, features: Optional[TensorLike] = None):
        """
        Arguments:
            labels: array or tensor, the label grid. Cells equal to
                background_value are outside, all others inside.
            spacing: sequence of floats, physical width of a cell along each axis.
                Unit spacing if None.
            background_value: the label value marking background cells.
            features: bool array of the same shape as labels, the zero-distance
                cells. Defaults to the inside cells.
        """
        labels = _as_numpy(labels)
        if labels.ndim < 1:
            raise ValueError("labels must have at least one dimension.")
        # read-only view, the caller's array is left untouched
        self.labels = labels.view()
        self.labels.flags.writeable = False
        self.dim = labels.ndim
        self.shape: Tuple[int, ...] = tuple(labels.shape)
        self.n_cells = int(np.prod(self.shape))
        self.background_value = background_value

        if spacing is None:
            self.spacing = np.ones(self.dim)
        else:
            self.spacing = np.asarray(_as_numpy(spacing), dtype=np.float64).reshape(-1)
        if len(self.spacing) != self.dim:
            raise ValueError("spacing does not match the dimension.")
        if not np.all(np.isfinite(self.spacing)) or np.any(self.spacing <= 0.):
            raise ValueError(f"spacing must be positive and finite, got {self.spacing.tolist()}")

        self.inside = np.asarray(self.labels != background_value, dtype=bool)
        if features is None:
            self.features = self.inside
        else:
            features = np.asarray(_as_numpy(features), dtype=bool)
            if features.shape != self.shape:
                raise ValueError(
                    f"features shape {features.shape} does not match labels shape {self.shape}.")
            self.features = features

    @property
    def is_empty(self) -> bool:
        return self.n_cells == 0

    def axis_weights(self, use_spacing: bool) -> np.ndarray:
        """Per-axis scale applied to positions along a line."""
        if use_spacing:
            return self.spacing.copy()
        return np.ones(self.dim)

    def init_distance(self, dtype, sentinel) -> np.ndarray:
        """Zero at the feature cells, sentinel everywhere else."""
        distance = np.full(self.shape, sentinel, dtype=dtype)
        distance[self.features] = 0
        return distance
