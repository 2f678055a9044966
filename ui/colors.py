"""
Fixed-scale colour map: 0 is deep blue, 50 neutral purple-grey, 100 white-hot.
Unlike a min-max normalised view, a given temperature always has the same colour.
"""

import numpy as np

# Cold → cool → neutral → warm → hot → white
_TEMP_STOPS = np.array([
    [0.02, 0.03, 0.25], [0.05, 0.25, 0.75], [0.35, 0.3, 0.45],
    [0.85, 0.3, 0.05], [1.0, 0.7, 0.1], [1.0, 1.0, 0.95],
], dtype=np.float64)
_TEMP_T = np.array([0.0, 0.2, 0.5, 0.7, 0.88, 1.0], dtype=np.float64)


def _apply_gradient(t: np.ndarray, stops: np.ndarray, t_vals: np.ndarray) -> np.ndarray:
    """Map t in [0,1] to RGB via piecewise-linear stops. Returns (t.size, 3)."""
    t = np.clip(np.asarray(t, dtype=np.float64).reshape(-1), 0.0, 1.0)
    return np.stack([np.interp(t, t_vals, stops[:, c]) for c in range(3)], axis=-1)


def temperature_to_rgb(temps: np.ndarray) -> np.ndarray:
    """(h, w) temperatures in [0, 100] → (h, w, 3) uint8 RGB."""
    h, w = temps.shape
    rgb = _apply_gradient(temps.reshape(-1) / 100.0, _TEMP_STOPS, _TEMP_T).reshape(h, w, 3)
    return (np.clip(rgb, 0, 1) * 255).round().astype(np.uint8)


def text_color_for(temp: int) -> tuple[int, int, int]:
    """Readable overlay colour against the cell fill."""
    return (20, 20, 20) if temp >= 80 else (235, 235, 235)
