import numpy as np
import pytest

from thermal.grid import Grid
from thermal.laplacian import LaplacianStencil, laplacian


def _expected_next(cur: np.ndarray, k: float) -> np.ndarray:
    """Loop form of the insulated 4-neighbour stencil."""
    h, w = cur.shape
    out = np.empty_like(cur)
    for y in range(h):
        for x in range(w):
            c = cur[y, x]
            up = cur[y - 1, x] if y > 0 else c
            down = cur[y + 1, x] if y < h - 1 else c
            left = cur[y, x - 1] if x > 0 else c
            right = cur[y, x + 1] if x < w - 1 else c
            out[y, x] = min(100.0, max(0.0, c + k * (up + down + left + right - 4 * c)))
    return out


def test_two_by_two_hot_corner(make_grid):
    grid = make_grid([[100, 0], [0, 0]])
    strategy = LaplacianStencil(0.2)
    strategy.step(grid)
    assert grid.view().tolist() == [[60, 20], [20, 0]]
    assert strategy.accumulator.tolist() == pytest.approx([60.0, 20.0, 20.0, 0.0])


def test_laplacian_matches_loop(rng):
    cur = rng.uniform(0, 100, size=(7, 9))
    assert np.allclose(cur + 0.2 * laplacian(cur), _expected_next(cur, 0.2))


def test_insulated_edges_give_zero_laplacian_for_uniform_field():
    assert np.array_equal(laplacian(np.full((4, 6), 33.0)), np.zeros((4, 6)))


def test_stays_in_range_and_converges_to_mean(rng):
    grid = Grid(20, 20)
    grid.load(rng.integers(0, 101, size=grid.size))
    mean = grid.mean()
    strategy = LaplacianStencil(0.2)
    strategy.step(grid)
    spread = np.std(strategy.accumulator)
    for _ in range(1000):
        strategy.step(grid)
        assert grid.temp.min() >= 0 and grid.temp.max() <= 100
        s = np.std(strategy.accumulator)
        assert s <= spread + 1e-9
        spread = s
    assert np.ptp(strategy.accumulator) < 2.0
    assert abs(float(np.mean(strategy.accumulator)) - mean) < 1e-6
    assert abs(grid.mean() - mean) < 1.0


def test_maximum_stable_diffusivity_does_not_diverge(rng):
    grid = Grid(12, 8)
    grid.load(rng.integers(0, 101, size=grid.size))
    strategy = LaplacianStencil(0.25)
    for _ in range(500):
        strategy.step(grid)
    assert np.ptp(grid.temp) <= 2


def test_sub_integer_heat_accumulates(make_grid):
    # 1 degree moves 0.2 per tick: the field would stall without the float state
    grid = make_grid([[1, 0]])
    strategy = LaplacianStencil(0.2)
    strategy.step(grid)
    assert grid.view().tolist() == [[1, 0]]
    assert strategy.accumulator.tolist() == pytest.approx([0.8, 0.2])
    strategy.step(grid)
    strategy.step(grid)
    assert strategy.accumulator[1] > 0.2


def test_external_edit_replaces_fractional_state(rng):
    grid = Grid(8, 8)
    grid.load(rng.integers(0, 101, size=grid.size))
    strategy = LaplacianStencil(0.2)
    for _ in range(40):
        strategy.step(grid)
    cur = strategy.accumulator.copy().reshape(8, 8)
    grid.set_temp(3, 4, 100)
    cur[4, 3] = 100.0
    strategy.step(grid)
    expected = _expected_next(cur, 0.2)
    assert np.allclose(strategy.accumulator.reshape(8, 8), expected)


def test_unedited_cells_keep_their_fraction(make_grid):
    grid = make_grid([[1, 0]])
    strategy = LaplacianStencil(0.2)
    strategy.step(grid)
    # field [1, 0] still equals round([0.8, 0.2]): nothing is treated as an edit
    strategy.step(grid)
    assert strategy.accumulator.tolist() == pytest.approx([0.68, 0.32])


def test_buffers_swap_without_copy():
    grid = Grid(3, 3, fill=10)
    strategy = LaplacianStencil()
    strategy.step(grid)
    a, b = strategy._acc.current, strategy._acc.next
    strategy.step(grid)
    assert strategy._acc.current is b
    assert strategy._acc.next is a


def test_reset_reseeds_from_field(make_grid):
    grid = make_grid([[1, 0]])
    strategy = LaplacianStencil(0.2)
    strategy.step(grid)
    strategy.reset()
    assert strategy.accumulator is None
    strategy.step(grid)
    assert strategy.accumulator.tolist() == pytest.approx([0.8, 0.2])


@pytest.mark.parametrize("k", [0, -0.1, 0.2501, 1.0])
def test_unstable_diffusivity_rejected(k):
    with pytest.raises(ValueError):
        LaplacianStencil(k)
