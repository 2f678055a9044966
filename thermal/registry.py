"""Name -> strategy class. The host picks one at configuration time."""

from thermal.laplacian import LaplacianStencil
from thermal.strategy import DiffusionStrategy
from thermal.transfer import NeighborTransfer

STRATEGIES: dict[str, type[DiffusionStrategy]] = {
    NeighborTransfer.name: NeighborTransfer,
    LaplacianStencil.name: LaplacianStencil,
}
STRATEGY_ORDER = (NeighborTransfer.name, LaplacianStencil.name)


def make_strategy(name: str, flow_rate: float | None = None, diffusivity: float | None = None) -> DiffusionStrategy:
    """Fresh instance with no persistent state. Rates not used by the chosen model are ignored."""
    if name == NeighborTransfer.name:
        return NeighborTransfer() if flow_rate is None else NeighborTransfer(flow_rate)
    if name == LaplacianStencil.name:
        return LaplacianStencil() if diffusivity is None else LaplacianStencil(diffusivity)
    raise ValueError(f"unknown strategy {name!r}; expected one of {', '.join(STRATEGY_ORDER)}")


def next_strategy_name(name: str) -> str:
    """Cycle through STRATEGY_ORDER."""
    i = STRATEGY_ORDER.index(name) if name in STRATEGY_ORDER else -1
    return STRATEGY_ORDER[(i + 1) % len(STRATEGY_ORDER)]
