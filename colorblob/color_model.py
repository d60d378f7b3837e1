"""
Conversions between the display color space (BGR / BGRA) and
full-range HSV.

Full-range HSV maps hue onto [0, 255] (period 256) instead of OpenCV's
default [0, 179], so every channel fits the same uint8 domain.
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from .errors import InvalidFormat

HUE_PERIOD = 256
MAX_HUE = HUE_PERIOD - 1
MAX_CHANNEL = 255


def validate_color(color: Sequence[float]) -> Tuple[int, ...]:
    """Return `color` as a tuple of ints in [0, 255] (3 or 4 channels)."""
    try:
        values = tuple(float(c) for c in color)
    except (TypeError, ValueError) as e:
        raise InvalidFormat(f"Color must be a sequence of channel values, got {color!r}") from e
    if len(values) not in (3, 4):
        raise InvalidFormat(f"Color must have 3 or 4 channels, got {len(values)}")
    if not np.isfinite(values).all():
        raise InvalidFormat(f"Color channels must be finite, got {color!r}")
    return tuple(int(np.clip(round(v), 0, MAX_CHANNEL)) for v in values)


def validate_frame(frame: np.ndarray) -> np.ndarray:
    """Check that `frame` is an (H, W, 3|4) uint8 array."""
    if not isinstance(frame, np.ndarray) or frame.ndim != 3:
        raise InvalidFormat("Frame must be a 3-D array of shape (H, W, channels)")
    if frame.shape[2] not in (3, 4):
        raise InvalidFormat(f"Frame must have 3 or 4 channels, got {frame.shape[2]}")
    if frame.dtype != np.uint8:
        raise InvalidFormat(f"Frame must be uint8, got {frame.dtype}")
    return frame


def bgr_to_hsv(color: Sequence[float]) -> Tuple[int, int, int]:
    """BGR(A) color to an (h, s, v) triple. Alpha is ignored."""
    b, g, r = validate_color(color)[:3]
    pixel = np.uint8([[[b, g, r]]])
    h, s, v = cv2.cvtColor(pixel, cv2.COLOR_BGR2HSV_FULL)[0, 0]
    return int(h), int(s), int(v)


def hsv_to_bgr(hsv: Sequence[float], alpha: Optional[int] = None) -> Tuple[int, ...]:
    """(h, s, v) triple to BGR, or BGRA when `alpha` is given."""
    h, s, v = validate_color(hsv)[:3]
    pixel = np.uint8([[[h, s, v]]])
    b, g, r = cv2.cvtColor(pixel, cv2.COLOR_HSV2BGR_FULL)[0, 0]
    if alpha is None:
        return int(b), int(g), int(r)
    return int(b), int(g), int(r), int(np.clip(alpha, 0, MAX_CHANNEL))


def frame_to_hsv(frame: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Convert a BGR or BGRA frame to full-range HSV.

    Args:
        frame: (H, W, 3|4) uint8 image
        out: optional (H, W, 3) uint8 buffer to write into

    Returns:
        (H, W, 3) uint8 HSV image (`out` itself when given)
    """
    validate_frame(frame)
    if frame.shape[2] == 4:
        frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
    if out is None:
        return cv2.cvtColor(frame, cv2.COLOR_BGR2HSV_FULL)
    if out.shape != frame.shape[:2] + (3,) or out.dtype != np.uint8:
        raise InvalidFormat("Output buffer must be a uint8 array of shape (H, W, 3)")
    cv2.cvtColor(frame, cv2.COLOR_BGR2HSV_FULL, dst=out)
    return out


def hsv_frame_to_bgr(hsv_frame: np.ndarray) -> np.ndarray:
    """Full-range HSV frame back to BGR."""
    validate_frame(hsv_frame)
    if hsv_frame.shape[2] != 3:
        raise InvalidFormat("HSV frame must have exactly 3 channels")
    return cv2.cvtColor(hsv_frame, cv2.COLOR_HSV2BGR_FULL)


def make_swatch(hue: int, saturation: int, size: Tuple[int, int] = (64, 64),
                value: int = MAX_CHANNEL) -> np.ndarray:
    """Solid BGR patch of `size` (width, height) showing one hue/saturation pair."""
    width, height = size
    hsv = np.empty((height, width, 3), dtype=np.uint8)
    hsv[:] = (int(hue) % HUE_PERIOD, saturation, value)
    return cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR_FULL)
