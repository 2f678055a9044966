"""Host side of the kernel: owns the grid, exactly one live strategy, and the tick count."""

import logging

from thermal import editing
from thermal.constants import DIFFUSIVITY, FLOW_RATE, T_MIN, T_MAX
from thermal.grid import Grid
from thermal.registry import make_strategy, next_strategy_name
from thermal.strategy import DiffusionStrategy
from thermal.transfer import check_flow_rate
from thermal.laplacian import check_diffusivity

logger = logging.getLogger(__name__)


class Simulation:
    """External edits go through paint/randomize/resize between steps, never during one."""

    def __init__(
        self,
        width: int,
        height: int,
        strategy: str = "transfer",
        flow_rate: float = FLOW_RATE,
        diffusivity: float = DIFFUSIVITY,
        resize_fill: int = 0,
    ) -> None:
        self.flow_rate = check_flow_rate(flow_rate)
        self.diffusivity = check_diffusivity(diffusivity)
        self.resize_fill = resize_fill
        self.grid = Grid(width, height)
        self.strategy: DiffusionStrategy = make_strategy(strategy, flow_rate, diffusivity)
        self.tick_count = 0

    @property
    def strategy_name(self) -> str:
        return self.strategy.name

    def step(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self.strategy.step(self.grid)
        self.tick_count += ticks

    def set_strategy(self, name: str) -> None:
        """Always a fresh instance, so switching (even to the same name) resets all buffers."""
        self.strategy = make_strategy(name, self.flow_rate, self.diffusivity)
        logger.info("Strategy set to %r", self.strategy)

    def cycle_strategy(self) -> str:
        self.set_strategy(next_strategy_name(self.strategy.name))
        return self.strategy.name

    def resize(self, width: int, height: int) -> bool:
        return editing.resize(self.grid, width, height, fill=self.resize_fill)

    def randomize(self, seed: int = -1) -> int:
        return editing.randomize(self.grid, seed)

    def paint(self, x: int, y: int, radius: int, value: int) -> int:
        return editing.paint(self.grid, x, y, radius, value)

    def clear(self, value: int = 0) -> None:
        self.grid.temp.fill(max(T_MIN, min(T_MAX, int(value))))
