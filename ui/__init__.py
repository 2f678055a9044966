"""UI: grid view and parameter panel."""

from ui.grid_view import draw_grid, screen_to_cell
from ui.panel import ParamPanel
from ui.colors import temperature_to_rgb

__all__ = ["draw_grid", "screen_to_cell", "ParamPanel", "temperature_to_rgb"]
