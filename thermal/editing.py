"""
External edits: brush painting, random fill, resize. These only touch the field; the
active strategy notices them on its next step (length check, per-cell reconciliation).
Random fill is reproducible from a seed; seed -1 = new random seed each call.
"""

import logging
import random

import numpy as np

from thermal.constants import T_MIN, T_MAX
from thermal.grid import Grid, check_dims

logger = logging.getLogger(__name__)


def paint(grid: Grid, x: int, y: int, radius: int, value: int) -> int:
    """Set every cell within Euclidean distance radius of (x, y). Returns cells written."""
    r = max(0, int(radius))
    x0, x1 = max(0, x - r), min(grid.width - 1, x + r)
    y0, y1 = max(0, y - r), min(grid.height - 1, y + r)
    if x0 > x1 or y0 > y1:
        return 0
    ys = np.arange(y0, y1 + 1).reshape(-1, 1)
    xs = np.arange(x0, x1 + 1).reshape(1, -1)
    mask = (xs - x) ** 2 + (ys - y) ** 2 <= r * r
    block = grid.view()[y0 : y1 + 1, x0 : x1 + 1]
    block[mask] = max(T_MIN, min(T_MAX, int(value)))
    return int(np.count_nonzero(mask))


def randomize(grid: Grid, seed: int = -1) -> int:
    """Uniform random integers in [0, 100]. Returns the seed used."""
    if seed == -1:
        seed_used = random.randint(0, 2**31 - 1)
    else:
        seed_used = seed
    rng = np.random.default_rng(seed_used)
    grid.temp[:] = rng.integers(T_MIN, T_MAX, size=grid.size, endpoint=True, dtype=np.uint8)
    logger.debug("Randomized %dx%d field with seed %d", grid.width, grid.height, seed_used)
    return seed_used


def resize(grid: Grid, width: int, height: int, fill: int = 0) -> bool:
    """Resize in place keeping the overlapping top-left region; new cells get fill. Returns True if changed."""
    check_dims(width, height)
    width, height = int(width), int(height)
    if (width, height) == (grid.width, grid.height):
        return False
    old = grid.view()
    new = np.full((height, width), max(T_MIN, min(T_MAX, int(fill))), dtype=np.uint8)
    h, w = min(height, grid.height), min(width, grid.width)
    new[:h, :w] = old[:h, :w]
    logger.info("Resized grid %dx%d -> %dx%d", grid.width, grid.height, width, height)
    grid.width, grid.height = width, height
    grid.temp = new.reshape(-1)
    return True
