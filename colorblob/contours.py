"""
Outer-boundary extraction from a cleaned mask.

Uses OpenCV's border following (Suzuki-Abe) with external retrieval
only, so holes inside a blob never produce contours of their own.
"""

import logging
from typing import List

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def contour_area(contour: np.ndarray) -> float:
    return float(cv2.contourArea(contour))


def extract_contours(
    mask: np.ndarray,
    min_area: float = 50.0,
    min_area_ratio: float = 0.0,
    scale: int = 1,
) -> List[np.ndarray]:
    """
    Find external contours in a binary mask and drop the small ones.

    Args:
        mask: (H, W) uint8 mask, foreground 255
        min_area: contours with area below this (px², after scaling) are dropped
        min_area_ratio: also drop contours smaller than this fraction of
            the largest contour; 0 disables the relative check
        scale: factor applied to point coordinates before the area check,
            for masks computed on a downscaled frame

    Returns:
        Contours as (N, 1, 2) int32 arrays, in discovery order.
    """
    if mask.size == 0:
        return []

    contours, _ = cv2.findContours(
        mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
    )
    if scale != 1:
        contours = [(c * scale).astype(np.int32) for c in contours]

    areas = [contour_area(c) for c in contours]
    threshold = min_area
    if min_area_ratio > 0 and areas:
        threshold = max(threshold, min_area_ratio * max(areas))

    kept = [c for c, a in zip(contours, areas) if a >= threshold]
    logger.debug(f"Contours: {len(kept)} kept of {len(contours)} (min area {threshold:.1f})")
    return kept
