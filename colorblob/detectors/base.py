"""Detector base protocol and shared data types."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Protocol

import numpy as np


class DetectorState(Enum):
    """Whether a reference color has been chosen yet."""
    IDLE = "idle"      # nothing to detect
    ARMED = "armed"    # reference color set, frames are processed


@dataclass
class Detection:
    """Single detected blob."""
    label: str                        # object class / name
    center_px: tuple                  # (x, y) centroid in frame pixels
    area: float                       # enclosed contour area, px²
    confidence: float = 1.0           # fraction of the frame covered, [0, 1]
    contour: np.ndarray = None        # outer boundary, (N, 1, 2) int32
    mask: np.ndarray = None           # cleaned mask the contour came from


class DetectorBase(Protocol):
    """
    Interface that all detectors must implement.

    To add a new detector:
      1. Create colorblob/detectors/<name>_detector.py
      2. Implement the detect() method
      3. Register it in colorblob/detectors/__init__.py DETECTORS dict
    """

    def detect(self, color_image: np.ndarray) -> List[Detection]:
        """
        Run detection on a color image (BGR or BGRA, uint8).

        Returns list of Detection objects (may be empty).
        """
        ...
