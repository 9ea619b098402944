import numpy as np
from typing import Optional
from numpy.typing import NDArray

from torch import Tensor

from exactdt._typing import TensorLike, SpacingLike
from exactdt.models.specs import DistanceOptions
from exactdt.models.sweep import MaurerDistanceTransform, DistanceField


def binary_threshold(image: TensorLike, background_value=0) -> NDArray[np.bool_]:
    """True where the image differs from the background value."""
    if isinstance(image, Tensor):
        image = image.detach().cpu().numpy()
    return np.asarray(image) != background_value


def inner_contour(inside: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """
    Inside cells with at least one face-connected outside neighbour.

    Cells beyond the grid edge count as copies of the edge cell, so the
    grid border itself does not create contour cells.
    """
    m = np.asarray(inside, dtype=bool)
    if m.size == 0:
        return m.copy()
    ndim = m.ndim
    # Step 1: pad the outside mask by replicating the edge
    padded_out = np.pad(~m, pad_width=1, mode='edge')
    # Step 2: mark cells that have an outside neighbour along any axis
    touches = np.zeros_like(m)
    for dim in range(ndim):
        for shift in [-1, 1]:
            index = tuple(
                slice(1 + (shift if i == dim else 0),
                      padded_out.shape[i] - 1 + (shift if i == dim else 0))
                for i in range(ndim)
            )
            touches |= padded_out[index]
    # Step 3: keep the inside ones
    return m & touches


def signed_distance_map(image: TensorLike, background_value=0,
                        spacing: SpacingLike = None, use_spacing: bool = False,
                        squared_distance: bool = True, inside_is_positive: bool = False,
                        dtype=np.float64, n_workers: Optional[int] = None,
                        verbose: bool = False) -> DistanceField:
    """
    Signed distance of every cell to the contour of the non-background region.

    Parameters
    ----------
    image : array or tensor
        Label image; every value other than background_value is inside.
    background_value :
        Label of the outside cells.
    spacing, use_spacing, squared_distance, inside_is_positive, dtype, n_workers, verbose :
        See DistanceOptions.

    Returns
    -------
    DistanceField
        Zero on the contour, inside and outside cells signed according to
        inside_is_positive.
    """
    contour = inner_contour(binary_threshold(image, background_value))
    options = DistanceOptions(background_value=background_value, spacing=spacing,
                              use_spacing=use_spacing, squared_distance=squared_distance,
                              inside_is_positive=inside_is_positive, dtype=dtype,
                              n_workers=n_workers, verbose=verbose)
    return MaurerDistanceTransform(options).run(image, features=contour)
