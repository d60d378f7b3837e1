"""Drawing helpers for showing detector output on top of a frame."""

from typing import List, Sequence

import cv2
import numpy as np

from .color_model import validate_color

CONTOUR_COLOR = (255, 0, 0, 255)
COLOR_LABEL_RECT = (4, 4, 64, 64)  # x, y, width, height
SPECTRUM_ORIGIN = (70, 4)          # x, y


def _paste(frame: np.ndarray, patch: np.ndarray, x: int, y: int) -> None:
    """Copy `patch` into `frame` at (x, y), clipped to the frame."""
    h = min(patch.shape[0], frame.shape[0] - y)
    w = min(patch.shape[1], frame.shape[1] - x)
    if h <= 0 or w <= 0:
        return
    channels = frame.shape[2]
    patch = patch[:h, :w]
    if patch.shape[2] != channels:
        code = cv2.COLOR_BGR2BGRA if channels == 4 else cv2.COLOR_BGRA2BGR
        patch = cv2.cvtColor(patch, code)
    frame[y:y + h, x:x + w] = patch


def draw_overlay(
    frame: np.ndarray,
    contours: List[np.ndarray],
    color: Sequence[float],
    spectrum: np.ndarray,
    contour_color: Sequence[float] = CONTOUR_COLOR,
) -> np.ndarray:
    """
    Draw contours, a swatch of the selected color and the spectrum strip
    into `frame` (in place). Returns `frame`.
    """
    channels = frame.shape[2]
    contour_color = tuple(validate_color(contour_color))[:channels]
    cv2.drawContours(frame, contours, -1, contour_color)

    x, y, w, h = COLOR_LABEL_RECT
    swatch = np.empty((h, w, channels), dtype=np.uint8)
    fill = validate_color(color)
    if len(fill) < channels:
        fill = fill + (255,)
    swatch[:] = fill[:channels]
    _paste(frame, swatch, x, y)

    if spectrum is not None:
        _paste(frame, spectrum, *SPECTRUM_ORIGIN)
    return frame
