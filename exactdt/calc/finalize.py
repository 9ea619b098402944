import numpy as np
from numpy.typing import NDArray


def finalize(distance: NDArray, inside: NDArray[np.bool_], sentinel,
             squared: bool = True, inside_is_positive: bool = False) -> None:
    """
    Turn accumulated squared magnitudes into the requested output, in place.

    Args:
        distance: squared distances after the last pass.
        inside: bool array, True where the label is not the background value.
        sentinel: the "infinite" value; cells still holding it keep its
            magnitude, only the sign is applied.
        squared: bool, skip the square root.
        inside_is_positive: bool, sign of the inside cells.
    """
    magnitude = np.abs(distance)
    if not squared:
        reached = distance != sentinel
        magnitude = np.where(reached, np.sqrt(magnitude), magnitude)
    positive = inside == inside_is_positive
    distance[...] = np.where(positive, magnitude, -magnitude)
