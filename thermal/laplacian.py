"""
Laplacian-stencil diffusion: explicit finite-difference heat equation
    next = c + k * (up + down + left + right - 4c)
on a persistent float accumulator. Insulated edges: an out-of-bounds neighbour reads
the centre value, so every cell has exactly four stencil terms.
Stable for 0 < k <= 0.25; larger k oscillates and diverges, so it is rejected, not clamped.
"""

import logging

import numpy as np

from thermal.buffers import AccumulatorPair
from thermal.constants import DIFFUSIVITY, MAX_DIFFUSIVITY, T_MIN, T_MAX
from thermal.grid import Grid, round_half_away
from thermal.strategy import DiffusionStrategy

logger = logging.getLogger(__name__)

# 4-neighbour Laplacian weights; centre -4
LAPLACIAN_CROSS = np.array([[0, 1, 0], [1, -4, 1], [0, 1, 0]], dtype=np.float64)


def check_diffusivity(diffusivity: float) -> float:
    if not 0.0 < diffusivity <= MAX_DIFFUSIVITY:
        raise ValueError(f"diffusivity must be in (0, {MAX_DIFFUSIVITY}], got {diffusivity}")
    return float(diffusivity)


def _pad_insulated(arr: np.ndarray) -> np.ndarray:
    """Pad by one cell each side by repeating the edge row/column (zero-flux boundary)."""
    h, w = arr.shape
    pad = np.empty((h + 2, w + 2), dtype=arr.dtype)
    pad[1:-1, 1:-1] = arr
    pad[0, 1:-1] = arr[0, :]
    pad[-1, 1:-1] = arr[-1, :]
    pad[1:-1, 0] = arr[:, 0]
    pad[1:-1, -1] = arr[:, -1]
    pad[0, 0], pad[0, -1], pad[-1, 0], pad[-1, -1] = arr[0, 0], arr[0, -1], arr[-1, 0], arr[-1, -1]
    return pad


def laplacian(arr: np.ndarray) -> np.ndarray:
    """Discrete 4-neighbour Laplacian with insulated edges; same shape as arr."""
    h, w = arr.shape
    pad = _pad_insulated(arr)
    out = np.zeros_like(arr)
    for ki in range(3):
        for kj in range(3):
            if LAPLACIAN_CROSS[ki, kj]:
                out += LAPLACIAN_CROSS[ki, kj] * pad[ki : ki + h, kj : kj + w]
    return out


class LaplacianStencil(DiffusionStrategy):
    """
    The accumulator pair is the authoritative continuous state; grid.temp is its rounded
    projection. Before each step any cell whose field value differs from round(current)
    is taken as an external edit (paint, random fill, resize) and adopted as-is.
    """

    name = "laplacian"

    def __init__(self, diffusivity: float = DIFFUSIVITY) -> None:
        self.diffusivity = check_diffusivity(diffusivity)
        self._acc = AccumulatorPair()

    def params(self) -> dict:
        return {"diffusivity": self.diffusivity}

    def reset(self) -> None:
        self._acc.clear()

    @property
    def accumulator(self) -> np.ndarray | None:
        """Current float state (flat), or None before the first step."""
        return self._acc.current

    def step(self, grid: Grid) -> None:
        acc = self._acc
        acc.ensure(grid.temp)
        edited = acc.reconcile(grid.temp)
        if edited:
            logger.debug("Adopted %d externally edited cells", edited)

        cur = acc.current.reshape(grid.height, grid.width)
        nxt = acc.next.reshape(grid.height, grid.width)
        np.clip(cur + self.diffusivity * laplacian(cur), T_MIN, T_MAX, out=nxt)

        grid.temp[:] = np.clip(round_half_away(acc.next), T_MIN, T_MAX)
        acc.swap()
