from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
import torch
from torch import Tensor
from tqdm import tqdm

from exactdt._typing import TensorLike
from exactdt.grid_domain import GridDomain
from exactdt.calc.partition import partition
from exactdt.calc.envelope import process_region
from exactdt.calc.finalize import finalize
from exactdt.models.specs import DistanceOptions


@dataclass
class DistanceField:
    """A finished distance grid and the geometry it was computed with."""
    values: Union[np.ndarray, Tensor]
    spacing: Tuple[float, ...]
    squared: bool
    inside_is_positive: bool


class MaurerDistanceTransform:

    def __init__(self, options: Optional[DistanceOptions] = None):
        """
        Args:
            options: DistanceOptions, defaults are used if None.
        """
        self.options = DistanceOptions() if options is None else options

    def run(self, labels: TensorLike, features: Optional[TensorLike] = None) -> DistanceField:
        """
        Signed exact Euclidean distance transform of a label grid.

        Args:
            labels: array or tensor, D >= 1 dimensions. Cells different from
                options.background_value are inside.
            features: bool array of the same shape, the zero-distance cells.
                Defaults to the inside cells.
        Returns:
            DistanceField, values of the same shape as labels. A tensor is
            returned if labels is a tensor.
        """
        opts = self.options
        domain = GridDomain(labels, opts.spacing, opts.background_value, features)
        weights = domain.axis_weights(opts.use_spacing)
        n_workers = opts.resolve_workers()
        sentinel = opts.validate(domain.shape, weights)

        distance = domain.init_distance(opts.dtype, sentinel)
        if not domain.is_empty:
            with ThreadPoolExecutor(max_workers=n_workers) as executor:
                for axis in tqdm(range(domain.dim), desc="Distance Sweep", disable=not opts.verbose):
                    self._sweep_axis(executor, distance, axis, float(weights[axis]),
                                     sentinel, n_workers)
            finalize(distance, domain.inside, sentinel,
                     squared=opts.squared_distance,
                     inside_is_positive=opts.inside_is_positive)

        values = distance
        if isinstance(labels, Tensor):
            values = torch.as_tensor(distance, device=labels.device)
        return DistanceField(values=values,
                             spacing=tuple(float(w) for w in weights),
                             squared=opts.squared_distance,
                             inside_is_positive=opts.inside_is_positive)

    @staticmethod
    def _sweep_axis(executor: ThreadPoolExecutor, distance: np.ndarray, axis: int,
                    weight: float, sentinel, n_workers: int) -> None:
        """One pass: all regions of the axis, then wait for every one of them."""
        regions = partition(distance.shape, axis, n_workers)
        futures = [executor.submit(process_region, distance, region, axis, weight, sentinel)
                   for region in regions]
        for future in futures:
            future.result()


def transform(labels: TensorLike, features: Optional[TensorLike] = None,
              **options) -> DistanceField:
    """
    Shortcut for MaurerDistanceTransform(DistanceOptions(**options)).run(...).

    Example:
        >>> transform([0, 0, 1, 0, 0]).values
        array([ 4.,  1., -0.,  1.,  4.])
    """
    return MaurerDistanceTransform(DistanceOptions(**options)).run(labels, features)
