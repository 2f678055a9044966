"""Thermal: integer temperature field and pluggable per-tick diffusion."""

from thermal.grid import Grid
from thermal.strategy import DiffusionStrategy
from thermal.transfer import NeighborTransfer
from thermal.laplacian import LaplacianStencil
from thermal.registry import STRATEGIES, make_strategy
from thermal.simulation import Simulation

__all__ = [
    "Grid",
    "DiffusionStrategy",
    "NeighborTransfer",
    "LaplacianStencil",
    "STRATEGIES",
    "make_strategy",
    "Simulation",
]
