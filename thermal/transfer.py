"""
Neighbour-transfer diffusion. Integer, pairwise: each cell takes round(diff * flow_rate)
from every in-bounds cardinal neighbour, limited to trunc(diff / 2) so that the two
simultaneous transfers over one edge can never flip the sign of the difference.
Out-of-bounds neighbours are omitted (no flux through the edge).
"""

import numpy as np

from thermal.buffers import SnapshotBuffer
from thermal.constants import FLOW_RATE, T_MIN, T_MAX
from thermal.grid import Grid, round_half_away
from thermal.strategy import DiffusionStrategy


def check_flow_rate(flow_rate: float) -> float:
    if not 0.0 < flow_rate <= 1.0:
        raise ValueError(f"flow_rate must be in (0, 1], got {flow_rate}")
    return float(flow_rate)


def edge_transfer(diff: np.ndarray, flow_rate: float) -> np.ndarray:
    """Clamped integer transfer into a cell for signed differences diff = neighbour - cell."""
    diff = np.asarray(diff, dtype=np.int32)
    raw = round_half_away(diff * flow_rate).astype(np.int32)
    # trunc toward zero; floor division would widen negative bounds
    max_transfer = np.sign(diff) * (np.abs(diff) // 2)
    inflow = np.minimum(np.maximum(raw, 0), max_transfer)
    outflow = np.maximum(np.minimum(raw, 0), max_transfer)
    return np.where(diff > 0, inflow, np.where(diff < 0, outflow, 0))


class NeighborTransfer(DiffusionStrategy):
    """Reads a frame-start snapshot, writes the live field; result is order-independent."""

    name = "transfer"

    def __init__(self, flow_rate: float = FLOW_RATE) -> None:
        self.flow_rate = check_flow_rate(flow_rate)
        self._snapshot = SnapshotBuffer()

    def params(self) -> dict:
        return {"flow_rate": self.flow_rate}

    def reset(self) -> None:
        self._snapshot.clear()

    def step(self, grid: Grid) -> None:
        snap = self._snapshot.capture(grid.temp).reshape(grid.height, grid.width)
        delta = np.zeros_like(snap)
        # Vertical edges: row y against row y + 1
        d = snap[1:, :] - snap[:-1, :]
        delta[:-1, :] += edge_transfer(d, self.flow_rate)
        delta[1:, :] += edge_transfer(-d, self.flow_rate)
        # Horizontal edges: column x against column x + 1
        d = snap[:, 1:] - snap[:, :-1]
        delta[:, :-1] += edge_transfer(d, self.flow_rate)
        delta[:, 1:] += edge_transfer(-d, self.flow_rate)
        grid.temp[:] = np.clip(snap + delta, T_MIN, T_MAX).reshape(-1)
