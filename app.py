"""
App shell: display and main loop. Simulation is tick-driven from elapsed time and
tick_rate (independent of frame rate). Painting, random fill and resize only happen
between ticks; the active model picks them up on its next step.
"""

import logging

import pygame

import config
from thermal import Simulation
from thermal.log import setup_logging
from ui.grid_view import draw_grid, screen_to_cell
from ui.panel import ParamPanel

TITLE = "Heat Grid"
WIDTH, HEIGHT = 960, 640
BACKGROUND = (0, 0, 0)
GRID_PANEL_WIDTH = 640
NUMBER_FONT_SIZE = 14
HOT, COLD = 100, 0

logger = logging.getLogger("thermal.app")


def run() -> None:
    setup_logging()
    cfg = config.validate_config(config.load_config())
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    number_font = pygame.font.Font(None, NUMBER_FONT_SIZE)

    sim = Simulation(
        cfg["grid"]["width"],
        cfg["grid"]["height"],
        strategy=cfg["strategy"],
        flow_rate=cfg["flow_rate"],
        diffusivity=cfg["diffusivity"],
        resize_fill=cfg["resize_fill"],
    )
    seed_used = sim.randomize(cfg["seed"])
    logger.info("Started %dx%d grid with %r", sim.grid.width, sim.grid.height, sim.strategy)

    grid_rect = pygame.Rect(0, 0, GRID_PANEL_WIDTH, HEIGHT)
    panel_rect = pygame.Rect(GRID_PANEL_WIDTH, 0, WIDTH - GRID_PANEL_WIDTH, HEIGHT)

    def do_randomize() -> None:
        nonlocal seed_used
        seed_used = sim.randomize(cfg["seed"])

    def save_settings() -> None:
        config.save_config({**cfg, **panel.settings_dict()})

    panel = ParamPanel(
        panel_rect,
        {
            "width": sim.grid.width,
            "height": sim.grid.height,
            "brush_radius": cfg["brush_radius"],
            "tick_rate": cfg["tick_rate"],
            "strategy": sim.strategy_name,
            "show_numbers": cfg["show_numbers"],
        },
        on_save=save_settings,
        on_randomize=do_randomize,
        on_strategy=sim.set_strategy,
        on_clear=sim.clear,
    )

    tick_accum = 0.0
    running = True

    while running:
        dt_ms = clock.tick(60)
        dt_s = dt_ms / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if panel.handle_event(event):
                continue
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    panel.params["paused"] = not panel.params["paused"]
                elif event.key == pygame.K_r:
                    do_randomize()
                elif event.key == pygame.K_TAB:
                    panel.cycle_strategy()
                elif event.key == pygame.K_n:
                    panel.params["show_numbers"] = not panel.params["show_numbers"]
                elif event.key == pygame.K_LEFTBRACKET:
                    panel.adjust_brush(-1)
                elif event.key == pygame.K_RIGHTBRACKET:
                    panel.adjust_brush(1)

        params = panel.get_params()
        # Live grid size: resize keeps the overlap, new cells get resize_fill
        sim.resize(params["width"], params["height"])

        mouse_pos = pygame.mouse.get_pos()
        cell = screen_to_cell(grid_rect, sim.grid.width, sim.grid.height, mouse_pos)
        buttons = pygame.mouse.get_pressed()
        if cell is not None and not panel.dragging and (buttons[0] or buttons[2]):
            cold = buttons[2] or bool(pygame.key.get_mods() & pygame.KMOD_SHIFT)
            sim.paint(cell[0], cell[1], params["brush_radius"], COLD if cold else HOT)

        if not params["paused"]:
            tick_rate = max(1, min(60, params["tick_rate"]))
            tick_accum += dt_s * tick_rate
            # Cap ticks per frame so we never freeze when tick rate exceeds what we can do
            max_ticks_per_frame = max(4, tick_rate // 10)
            num_ticks = min(int(tick_accum), max_ticks_per_frame)
            tick_accum -= num_ticks
            tick_accum = min(tick_accum, max_ticks_per_frame)
            sim.step(num_ticks)

        screen.fill(BACKGROUND)
        draw_grid(
            screen,
            grid_rect,
            sim.grid.view(),
            show_numbers=params["show_numbers"],
            font=number_font,
            brush=(cell[0], cell[1], params["brush_radius"]) if cell is not None else None,
        )
        panel.draw(screen, tick_count=sim.tick_count, mean_temp=sim.grid.mean(), seed=seed_used)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    run()
