"""Integer temperature field, row-major, shared between the core and the host."""

import numpy as np

from thermal.constants import T_MIN, T_MAX, DEFAULT_WIDTH, DEFAULT_HEIGHT


def round_half_away(values):
    """Round to nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def check_dims(width: int, height: int) -> None:
    if int(width) != width or int(height) != height or width < 1 or height < 1:
        raise ValueError(f"grid dimensions must be positive integers, got {width}x{height}")


class Grid:
    """Field of W*H integers in [0, 100]. `temp` is the live buffer the renderer reads."""

    __slots__ = ("width", "height", "temp")

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, fill: int = 0) -> None:
        check_dims(width, height)
        self.width = int(width)
        self.height = int(height)
        self.temp = np.full(self.width * self.height, _clamp_int(fill), dtype=np.uint8)

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width): shape of `view()`."""
        return (self.height, self.width)

    def view(self) -> np.ndarray:
        """2D (height, width) view sharing memory with `temp`."""
        return self.temp.reshape(self.height, self.width)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_temp(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return int(self.temp[y * self.width + x])

    def set_temp(self, x: int, y: int, value: float) -> None:
        """Clamped write; out-of-range cells are ignored."""
        if not self.in_bounds(x, y):
            return
        self.temp[y * self.width + x] = _clamp_int(value)

    def load(self, values) -> None:
        """Replace the whole field from a flat or (height, width) array, clamped."""
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.size != self.size:
            raise ValueError(f"expected {self.size} values, got {arr.size}")
        self.temp[:] = np.clip(round_half_away(arr), T_MIN, T_MAX).astype(np.uint8)

    def mean(self) -> float:
        return float(np.mean(self.temp))

    def total(self) -> int:
        return int(np.sum(self.temp, dtype=np.int64))


def _clamp_int(value: float) -> int:
    return int(max(T_MIN, min(T_MAX, round_half_away(value))))
