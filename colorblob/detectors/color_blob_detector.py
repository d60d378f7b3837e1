"""
Color blob detector.

Pick a reference color once, then feed frames: each frame is converted
to full-range HSV, thresholded around the reference hue (wrapping at
the red end of the hue circle), cleaned with an opening and a closing,
and reduced to the outer contours of the remaining blobs.
"""

import logging
import threading
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..color_model import bgr_to_hsv, frame_to_hsv, validate_color, validate_frame
from ..contours import contour_area, extract_contours
from ..errors import EmptyFrame
from ..hue_range import HueRange, build_hue_range
from ..mask import build_mask, morph_kernel
from ..spectrum import SPECTRUM_SIZE, render_spectrum
from .base import Detection, DetectorState

logger = logging.getLogger(__name__)


class ColorBlobDetector:
    """
    Detects connected regions matching a selected color.

    Starts IDLE; select_color() arms it. All state sits behind one lock,
    so select_color() and process() may be called from different threads.
    """

    def __init__(
        self,
        hue_spread: int = 25,
        saturation_spread: int = 50,
        value_bounds: Sequence[int] = (30, 255),
        kernel_size: int = 5,
        min_area: float = 50.0,
        min_area_ratio: float = 0.0,
        pyramid_levels: int = 0,
        spectrum_size: Sequence[int] = SPECTRUM_SIZE,
        label: str = "blob",
        color: Optional[Sequence[float]] = None,
    ):
        if hue_spread < 0 or saturation_spread < 0:
            raise ValueError("hue_spread and saturation_spread must be non-negative")
        if len(value_bounds) != 2 or value_bounds[0] > value_bounds[1]:
            raise ValueError(f"value_bounds must be (min, max), got {value_bounds}")
        if not 0.0 <= min_area_ratio <= 1.0:
            raise ValueError(f"min_area_ratio must be in [0, 1], got {min_area_ratio}")
        if pyramid_levels < 0:
            raise ValueError(f"pyramid_levels must be non-negative, got {pyramid_levels}")
        if len(spectrum_size) != 2 or min(spectrum_size) <= 0:
            raise ValueError(f"spectrum_size must be (width, height) > 0, got {spectrum_size}")
        morph_kernel(kernel_size)

        self.hue_spread = int(hue_spread)
        self.saturation_spread = int(saturation_spread)
        self.value_bounds = (int(value_bounds[0]), int(value_bounds[1]))
        self.kernel_size = int(kernel_size)
        self.min_area_ratio = float(min_area_ratio)
        self.pyramid_levels = int(pyramid_levels)
        self.spectrum_size = (int(spectrum_size[0]), int(spectrum_size[1]))
        self.label = label

        self._lock = threading.Lock()
        self._min_area = 0.0
        self.min_area = min_area

        # -- State --
        self._state = DetectorState.IDLE
        self._color: Optional[Tuple[int, ...]] = None
        self._hsv_color: Optional[Tuple[int, int, int]] = None
        self._hue_range: Optional[HueRange] = None
        self._spectrum: Optional[np.ndarray] = None
        self._last_threshold_mask: Optional[np.ndarray] = None
        self._last_mask: Optional[np.ndarray] = None

        if color is not None:
            self.select_color(color)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def selected_color(self) -> Optional[Tuple[int, ...]]:
        """Reference color as given (BGR or BGRA)."""
        return self._color

    @property
    def hsv_color(self) -> Optional[Tuple[int, int, int]]:
        return self._hsv_color

    @property
    def hue_range(self) -> Optional[HueRange]:
        return self._hue_range

    @property
    def min_area(self) -> float:
        return self._min_area

    @min_area.setter
    def min_area(self, value: float) -> None:
        if value < 0:
            raise ValueError(f"min_area must be non-negative, got {value}")
        with self._lock:
            self._min_area = float(value)

    @property
    def last_mask(self) -> Optional[np.ndarray]:
        """Cleaned mask from the most recent process() call."""
        return self._last_mask

    @property
    def last_threshold_mask(self) -> Optional[np.ndarray]:
        """Mask from the most recent process() call, before cleanup."""
        return self._last_threshold_mask

    def get_spectrum(self) -> Optional[np.ndarray]:
        """Copy of the current spectrum strip, or None before select_color()."""
        with self._lock:
            return None if self._spectrum is None else self._spectrum.copy()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def select_color(self, color: Sequence[float]) -> None:
        """Set the reference color (BGR or BGRA) and arm the detector."""
        color = validate_color(color)
        hsv = bgr_to_hsv(color)
        hue_range = build_hue_range(
            hsv, self.hue_spread, self.saturation_spread, self.value_bounds
        )
        spectrum = render_spectrum(hue_range.primary, self.spectrum_size)

        with self._lock:
            self._color = color
            self._hsv_color = hsv
            self._hue_range = hue_range
            self._spectrum = spectrum
            self._state = DetectorState.ARMED

        logger.info(f"Selected color {color} -> HSV {hsv}, {type(hue_range).__name__}")

    def process(self, frame: np.ndarray) -> List[np.ndarray]:
        """
        Find the blobs matching the reference color.

        Args:
            frame: (H, W, 3|4) uint8 image, BGR or BGRA

        Returns:
            Contours in discovery order; always empty while IDLE.
        """
        contours, _ = self._process(frame)
        return contours

    def _process(self, frame: np.ndarray) -> Tuple[List[np.ndarray], Optional[np.ndarray]]:
        """Contours plus the cleaned mask they were traced from, taken under one lock."""
        with self._lock:
            if self._state is DetectorState.IDLE:
                return [], None

            validate_frame(frame)
            if frame.shape[0] == 0 or frame.shape[1] == 0:
                raise EmptyFrame(f"Frame has zero size: {frame.shape}")

            small = frame
            for _ in range(self.pyramid_levels):
                small = cv2.pyrDown(small)

            hsv = frame_to_hsv(small)
            raw, cleaned = build_mask(hsv, self._hue_range, self.kernel_size)
            contours = extract_contours(
                cleaned,
                min_area=self._min_area,
                min_area_ratio=self.min_area_ratio,
                scale=2 ** self.pyramid_levels,
            )
            self._last_threshold_mask = raw
            self._last_mask = cleaned

        logger.debug(f"Processed {frame.shape[1]}x{frame.shape[0]} frame: {len(contours)} blobs")
        return contours, cleaned

    def detect(self, color_image: np.ndarray) -> List[Detection]:
        """Detect blobs in a BGR(A) image, largest first."""
        contours, mask = self._process(color_image)
        if not contours:
            return []
        frame_area = float(color_image.shape[0] * color_image.shape[1]) or 1.0

        detections = []
        for cnt in contours:
            M = cv2.moments(cnt)
            if M["m00"] == 0:
                continue

            cx = int(M["m10"] / M["m00"])
            cy = int(M["m01"] / M["m00"])
            area = contour_area(cnt)

            detections.append(Detection(
                label=self.label,
                center_px=(cx, cy),
                area=area,
                confidence=min(1.0, area / frame_area),
                contour=cnt,
                mask=mask,
            ))

        detections.sort(key=lambda d: d.area, reverse=True)
        return detections
