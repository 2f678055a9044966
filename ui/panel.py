"""Right panel: live sliders (grid W/H, brush, tick rate), play/pause, randomize, strategy, numbers, save."""

import pygame
from typing import Callable

from thermal.registry import next_strategy_name

FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)

STRATEGY_LABELS = {"transfer": "Neighbour transfer", "laplacian": "Laplacian stencil"}

# key -> (label, lo, hi)
SLIDERS = {
    "width": ("Grid width", 4, 200),
    "height": ("Grid height", 4, 200),
    "brush_radius": ("Brush radius", 0, 20),
    "tick_rate": ("Tick rate (1–60)", 1, 60),
}


class ParamPanel:
    """State: params dict; draw and handle events. Button actions go through callbacks."""

    def __init__(
        self,
        rect: pygame.Rect,
        initial: dict,
        on_save: Callable[[], None],
        on_randomize: Callable[[], None],
        on_strategy: Callable[[str], None],
        on_clear: Callable[[], None],
    ) -> None:
        self.rect = rect
        self.params = {
            "width": initial.get("width", 100),
            "height": initial.get("height", 100),
            "brush_radius": initial.get("brush_radius", 3),
            "tick_rate": initial.get("tick_rate", 30),
            "strategy": initial.get("strategy", "transfer"),
            "show_numbers": initial.get("show_numbers", False),
            "paused": initial.get("paused", True),
        }
        self.on_save = on_save
        self.on_randomize = on_randomize
        self.on_strategy = on_strategy
        self.on_clear = on_clear
        self._font = None
        self._slider_rects: dict[str, tuple[pygame.Rect, int, int]] = {}
        self._button_rects: dict[str, pygame.Rect] = {}
        self._dragging: str | None = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def get_params(self) -> dict:
        return self.params.copy()

    @property
    def dragging(self) -> bool:
        return self._dragging is not None

    def contains(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def draw(self, surface: pygame.Surface, tick_count: int = 0, mean_temp: float = 0.0, seed: int | None = None) -> None:
        font = self._ensure_font()
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        slider_w = self.rect.width - 16 - 44
        slider_h = 12

        for text in (f"Tick: {tick_count}", f"Mean: {mean_temp:.2f}", f"Seed: {seed if seed is not None else '-'}"):
            surface.blit(font.render(text, True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        for key, (label, lo, hi) in SLIDERS.items():
            surface.blit(font.render(label, True, LABEL_COLOR), (x, y))
            y += line_h
            sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params[key], lo, hi)
            _draw_slider_value(surface, font, x + slider_w + 4, y, str(self.params[key]))
            self._slider_rects[key] = (sr, lo, hi)
            y += slider_h + gap

        y += gap
        surface.blit(font.render("Model", True, LABEL_COLOR), (x, y))
        y += line_h
        btn_h = 26
        y = self._button(surface, "strategy", STRATEGY_LABELS.get(self.params["strategy"], self.params["strategy"]), x, y, 200, btn_h)
        y += gap

        pause_text = ("Start" if tick_count == 0 else "Resume") if self.params["paused"] else "Pause"
        self._button(surface, "pause", pause_text, x, y, 100, btn_h)
        y = self._button(surface, "randomize", "Randomize", x + 104, y, 110, btn_h) + gap
        self._button(surface, "clear", "Clear", x, y, 100, btn_h)
        y = self._button(surface, "save", "Save settings", x + 104, y, 110, btn_h) + gap

        box = pygame.Rect(x, y + 2, 14, 14)
        pygame.draw.rect(surface, KNOB_COLOR if self.params["show_numbers"] else SLIDER_COLOR, box)
        pygame.draw.rect(surface, LABEL_COLOR, box, 1)
        surface.blit(font.render("Show numbers", True, LABEL_COLOR), (x + 18, y + 2))
        self._button_rects["show_numbers"] = box.union(pygame.Rect(x, y, 18 + font.size("Show numbers")[0], 18))
        y += 18 + gap * 3

        for hint in ("LMB paint hot, RMB / shift paint cold", "Space pause, R randomize, Tab model", "N numbers, [ ] brush"):
            surface.blit(font.render(hint, True, SLIDER_COLOR), (x, y))
            y += line_h

    def _button(self, surface: pygame.Surface, key: str, text: str, x: int, y: int, w: int, h: int) -> int:
        font = self._ensure_font()
        rect = pygame.Rect(x, y, w, h)
        color = BUTTON_HOVER if rect.collidepoint(pygame.mouse.get_pos()) else BUTTON_COLOR
        pygame.draw.rect(surface, color, rect)
        surface.blit(font.render(text, True, LABEL_COLOR), (rect.x + 6, rect.y + 4))
        self._button_rects[key] = rect
        return y + h

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    self._press(key)
                    return True
            return self.contains(event.pos)
        if event.type == pygame.MOUSEBUTTONUP:
            consumed = self._dragging is not None
            self._dragging = None
            return consumed
        if event.type == pygame.MOUSEMOTION and self._dragging is not None:
            sr, lo, hi = self._slider_rects[self._dragging]
            self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
            return True
        return False

    def _press(self, key: str) -> None:
        if key == "pause":
            self.params["paused"] = not self.params["paused"]
        elif key == "randomize":
            self.on_randomize()
        elif key == "clear":
            self.on_clear()
        elif key == "save":
            self.on_save()
        elif key == "show_numbers":
            self.params["show_numbers"] = not self.params["show_numbers"]
        elif key == "strategy":
            self.cycle_strategy()

    def cycle_strategy(self) -> None:
        self.params["strategy"] = next_strategy_name(self.params["strategy"])
        self.on_strategy(self.params["strategy"])

    def adjust_brush(self, delta: int) -> None:
        lo, hi = SLIDERS["brush_radius"][1:]
        self.params["brush_radius"] = max(lo, min(hi, self.params["brush_radius"] + delta))

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        self.params[key] = int(lo + t * (hi - lo))

    def settings_dict(self) -> dict:
        """Panel state in config-file shape (see config._default_config)."""
        return {
            "grid": {"width": self.params["width"], "height": self.params["height"]},
            "strategy": self.params["strategy"],
            "tick_rate": self.params["tick_rate"],
            "brush_radius": self.params["brush_radius"],
            "show_numbers": self.params["show_numbers"],
        }


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect


def _draw_slider_value(
    surface: pygame.Surface, font: pygame.font.Font, x: int, y: int, value_str: str
) -> None:
    text = font.render(value_str, True, LABEL_COLOR)
    surface.blit(text, (x, y))
