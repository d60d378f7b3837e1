"""Preview strip showing the hue band currently being matched."""

from typing import Tuple

import numpy as np

from .color_model import HUE_PERIOD, hsv_frame_to_bgr
from .hue_range import HsvBounds

SPECTRUM_SIZE = (200, 64)  # width, height


def render_spectrum(bounds: HsvBounds, size: Tuple[int, int] = SPECTRUM_SIZE) -> np.ndarray:
    """
    Render a BGR strip of `size` (width, height) sweeping the hue band.

    Column j shows a hue sampled evenly between bounds.lower[0] and
    bounds.upper[0]; hues outside [0, 255] wrap around. Saturation and
    value sit at the middle of their bounds, so every column falls
    inside the band it previews.
    """
    width, height = int(size[0]), int(size[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Spectrum size must be positive, got {size}")

    hues = np.rint(np.linspace(bounds.lower[0], bounds.upper[0], width))
    hues = np.mod(hues, HUE_PERIOD).astype(np.uint8)

    row = np.empty((1, width, 3), dtype=np.uint8)
    row[0, :, 0] = hues
    row[0, :, 1] = (bounds.lower[1] + bounds.upper[1]) // 2
    row[0, :, 2] = (bounds.lower[2] + bounds.upper[2]) // 2
    row = hsv_frame_to_bgr(row)
    return np.repeat(row, height, axis=0)
