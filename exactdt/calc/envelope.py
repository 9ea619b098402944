import numba as nb
import numpy as np
from numpy.typing import NDArray

from exactdt._typing import Region

# Per-line lower envelope of the parabolas f_k(x) = g_k + (x - h_k)^2,
# one parabola per finite site on the line.


@nb.njit(cache=True, nogil=True)
def remove_site(g1, g2, gf, h1, h2, hf):
    """
    True if the middle site (g2, h2) is never the lowest parabola once
    (gf, hf) is on the stack, given the previous site (g1, h1).
    Positions must satisfy h1 < h2 < hf.
    """
    a = h2 - h1
    b = hf - h2
    c = hf - h1
    return c * abs(g2) - b * abs(g1) - a * abs(gf) - a * b * c > 0


@nb.njit(cache=True, nogil=True)
def voronoi_line(line, weight, sentinel, g, h):
    """
    Fold the nearest-site contribution along one line into `line` in place.

    Args:
        line: 1d float array, squared distances accumulated over the previous
            axes, sentinel where no site has been reached yet.
        weight: float, distance between two neighbouring cells on this axis.
        sentinel: float, the "infinite" value.
        g, h: 1d float scratch buffers, at least as long as line.
    """
    n = line.shape[0]
    if n == 1:
        return

    # build the envelope
    l = -1
    for i in range(n):
        di = line[i]
        if di != sentinel:
            iw = i * weight
            while l >= 1 and remove_site(g[l - 1], g[l], di, h[l - 1], h[l], iw):
                l -= 1
            l += 1
            g[l] = di
            h[l] = iw
    ns = l + 1
    if ns == 0:
        return

    # evaluate it; the cursor only moves forward
    l = 0
    for i in range(n):
        iw = i * weight
        d1 = abs(g[l]) + (h[l] - iw) ** 2
        while l < ns - 1:
            d2 = abs(g[l + 1]) + (h[l + 1] - iw) ** 2
            if d1 <= d2:
                break
            l += 1
            d1 = d2
        line[i] = d1


@nb.njit(cache=True, nogil=True)
def voronoi_lines(lines, weight, sentinel):
    """Run voronoi_line on every row of a (n_lines, n) block."""
    n = lines.shape[1]
    g = np.empty(n, dtype=np.float64)
    h = np.empty(n, dtype=np.float64)
    for k in range(lines.shape[0]):
        voronoi_line(lines[k], weight, sentinel, g, h)


def process_region(distance: NDArray, region: Region, axis: int,
                   weight: float, sentinel: float) -> None:
    """
    Process every line along `axis` inside one region of the distance grid.

    The region is copied into a contiguous float64 block with the sweep axis
    last, swept by the compiled kernel, and written back in place.
    """
    view = np.moveaxis(distance[region], axis, -1)
    n = view.shape[-1]
    if n <= 1 or view.size == 0:
        return
    work = np.ascontiguousarray(view, dtype=np.float64).reshape(-1, n)
    voronoi_lines(work, float(weight), float(sentinel))
    view[...] = work.reshape(view.shape)
