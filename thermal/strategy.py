"""Pluggable per-tick update: one live strategy instance, `step(grid)` once per frame."""

from abc import ABC, abstractmethod

from thermal.grid import Grid


class DiffusionStrategy(ABC):
    """Advances the grid's field in place. Persistent buffers belong to the instance."""

    name = "base"

    @abstractmethod
    def step(self, grid: Grid) -> None:
        """Read the prior field state, write the next one into grid.temp, clamped to [0, 100]."""

    @abstractmethod
    def reset(self) -> None:
        """Drop persistent buffers; the next step reseeds from the field."""

    def params(self) -> dict:
        return {}

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.params().items())
        return f"{type(self).__name__}({args})"
