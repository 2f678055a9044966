import numpy as np
import pytest

from thermal.grid import Grid


def _grid_from(values) -> Grid:
    arr = np.asarray(values)
    grid = Grid(arr.shape[1], arr.shape[0])
    grid.load(arr)
    return grid


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_grid():
    """Grid from a (height, width) nested list/array."""
    return _grid_from


@pytest.fixture
def random_grid(rng):
    grid = Grid(17, 11)
    grid.load(rng.integers(0, 101, size=grid.size))
    return grid
