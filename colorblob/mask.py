"""
Binary mask construction: range thresholding followed by morphological
cleanup (opening, then closing).
"""

from typing import Tuple

import cv2
import numpy as np

from .hue_range import HsvBounds, HueRange, SingleRange, SplitRange


def _in_bounds(hsv_frame: np.ndarray, bounds: HsvBounds) -> np.ndarray:
    return cv2.inRange(hsv_frame, np.array(bounds.lower), np.array(bounds.upper))


def threshold_mask(hsv_frame: np.ndarray, hue_range: HueRange) -> np.ndarray:
    """0/255 mask of pixels inside `hue_range` (bounds inclusive)."""
    if hsv_frame.size == 0:
        return np.zeros(hsv_frame.shape[:2], dtype=np.uint8)

    if isinstance(hue_range, SingleRange):
        return _in_bounds(hsv_frame, hue_range.bounds)
    if isinstance(hue_range, SplitRange):
        return cv2.bitwise_or(
            _in_bounds(hsv_frame, hue_range.low),
            _in_bounds(hsv_frame, hue_range.high),
        )
    raise TypeError(f"Unsupported hue range type: {type(hue_range).__name__}")


def morph_kernel(kernel_size: int) -> np.ndarray:
    """Square structuring element with an odd side length."""
    if kernel_size < 1 or kernel_size % 2 == 0:
        raise ValueError(f"kernel_size must be a positive odd integer, got {kernel_size}")
    return cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))


def clean_mask(mask: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """Opening (drops specks) followed by closing (fills small holes)."""
    if mask.size == 0:
        return mask.copy()
    kernel = morph_kernel(kernel_size)
    opened = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel)
    return cv2.morphologyEx(opened, cv2.MORPH_CLOSE, kernel)


def build_mask(
    hsv_frame: np.ndarray, hue_range: HueRange, kernel_size: int = 5
) -> Tuple[np.ndarray, np.ndarray]:
    """Return (threshold mask, cleaned mask)."""
    raw = threshold_mask(hsv_frame, hue_range)
    return raw, clean_mask(raw, kernel_size)
