"""Left panel: temperature grid with thin grey border, optional per-cell numbers, brush outline."""

import pygame
import numpy as np

from ui.colors import temperature_to_rgb, text_color_for

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1
BRUSH_COLOR = (230, 230, 230)
# Numbers are drawn only when a cell is at least this many pixels on each side
MIN_CELL_PX_FOR_NUMBERS = 18


def cell_size(grid_rect: pygame.Rect, width: int, height: int) -> tuple[int, int]:
    return max(1, grid_rect.width // width), max(1, grid_rect.height // height)


def screen_to_cell(grid_rect: pygame.Rect, width: int, height: int, pos: tuple[int, int]) -> tuple[int, int] | None:
    """Pixel → (x, y) cell, or None outside the drawn grid."""
    cw, ch = cell_size(grid_rect, width, height)
    x = (pos[0] - grid_rect.x) // cw
    y = (pos[1] - grid_rect.y) // ch
    if 0 <= x < width and 0 <= y < height:
        return int(x), int(y)
    return None


def _draw_numbers(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    temps: np.ndarray,
    font: pygame.font.Font,
    cw: int,
    ch: int,
) -> None:
    h, w = temps.shape
    for y in range(h):
        for x in range(w):
            v = int(temps[y, x])
            t = font.render(str(v), True, text_color_for(v))
            cx = grid_rect.x + x * cw + (cw - t.get_width()) // 2
            cy = grid_rect.y + y * ch + (ch - t.get_height()) // 2
            surface.blit(t, (cx, cy))


def draw_grid(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    temps: np.ndarray,
    *,
    show_numbers: bool = False,
    font: pygame.font.Font | None = None,
    brush: tuple[int, int, int] | None = None,
) -> None:
    """Draw (height, width) temps into grid_rect. brush = (x, y, radius) in cells."""
    h, w = temps.shape
    if h == 0 or w == 0:
        return
    cw, ch = cell_size(grid_rect, w, h)
    rgb = temperature_to_rgb(temps)
    # pygame: size (width, height); rgb is (h, w, 3) row-major
    try:
        img = pygame.image.frombytes(rgb.tobytes(), (w, h), "RGB")
    except AttributeError:
        img = pygame.image.fromstring(rgb.tobytes(), (w, h), "RGB")
    scaled = pygame.transform.scale(img, (w * cw, h * ch))
    surface.blit(scaled, grid_rect.topleft)
    if show_numbers and font is not None and min(cw, ch) >= MIN_CELL_PX_FOR_NUMBERS:
        _draw_numbers(surface, grid_rect, temps, font, cw, ch)
    if brush is not None:
        bx, by, r = brush
        center = (grid_rect.x + bx * cw + cw // 2, grid_rect.y + by * ch + ch // 2)
        pygame.draw.circle(surface, BRUSH_COLOR, center, max(2, int((r + 0.5) * min(cw, ch))), 1)
    pygame.draw.rect(surface, BORDER_COLOR, pygame.Rect(grid_rect.x, grid_rect.y, w * cw, h * ch), BORDER_PX)
