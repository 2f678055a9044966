"""Field range, default rates, default grid size."""

T_MIN, T_MAX = 0, 100
# Neighbour-transfer: fraction of a difference moved per edge per tick. Valid (0, 1].
FLOW_RATE = 0.25
# Laplacian stencil: explicit-scheme coefficient. Valid (0, 0.25] on a 4-neighbour grid.
DIFFUSIVITY = 0.2
MAX_DIFFUSIVITY = 0.25
DEFAULT_WIDTH, DEFAULT_HEIGHT = 100, 100
