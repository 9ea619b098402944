from numpy.typing import ArrayLike
from torch import Tensor

from typing import Union, List, Tuple, Optional

TensorLike = Union[ArrayLike, Tensor]
SpacingLike = Optional[Union[List[float], Tuple[float, ...], ArrayLike]]
Region = Tuple[slice, ...]  # one hyper-rectangle of the grid
