"""Load/save simulation and UI settings. Settings live in configs/settings.json; the grid itself is never saved."""

import json
import logging
from pathlib import Path

from thermal.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, DIFFUSIVITY, FLOW_RATE
from thermal.grid import check_dims
from thermal.laplacian import check_diffusivity
from thermal.registry import STRATEGIES
from thermal.transfer import check_flow_rate

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
SETTINGS_FILE = CONFIG_DIR / "settings.json"

_TOP_LEVEL_KEYS = (
    "strategy", "flow_rate", "diffusivity", "tick_rate", "brush_radius",
    "show_numbers", "seed", "resize_fill",
)


def _default_config() -> dict:
    return {
        "grid": {"width": DEFAULT_WIDTH, "height": DEFAULT_HEIGHT},
        "strategy": "transfer",
        "flow_rate": FLOW_RATE,
        "diffusivity": DIFFUSIVITY,
        "tick_rate": 30,
        "brush_radius": 3,
        "show_numbers": False,
        "seed": -1,
        "resize_fill": 0,
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    if isinstance(data.get("grid"), dict):
        d["grid"] = {**d["grid"], **data["grid"]}
    for k in _TOP_LEVEL_KEYS:
        if k in data:
            d[k] = data[k]
    return d


def validate_config(cfg: dict) -> dict:
    """Raise ValueError for settings the kernel must not run with. Returns cfg."""
    if cfg["strategy"] not in STRATEGIES:
        raise ValueError(f"unknown strategy {cfg['strategy']!r}")
    check_dims(cfg["grid"]["width"], cfg["grid"]["height"])
    check_flow_rate(cfg["flow_rate"])
    check_diffusivity(cfg["diffusivity"])
    if not 1 <= cfg["tick_rate"] <= 60:
        raise ValueError(f"tick_rate must be in [1, 60], got {cfg['tick_rate']}")
    return cfg


def load_config(path: Path | str | None = None) -> dict:
    """Saved settings merged over defaults. Missing or unreadable file -> defaults."""
    p = Path(path) if path is not None else SETTINGS_FILE
    if not p.exists():
        return _default_config()
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return _default_config()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", p)
        return _default_config()
    return _merge_defaults(data)


def save_config(params: dict, path: Path | str | None = None) -> Path:
    p = Path(path) if path is not None else SETTINGS_FILE
    p.parent.mkdir(parents=True, exist_ok=True)
    out = _merge_defaults(params)
    with open(p, "w") as f:
        json.dump(out, f, indent=2)
    logger.info("Saved settings to %s", p)
    return p
