import threading

import numpy as np
import pytest

from colorblob.contours import contour_area
from colorblob.detectors import (
    ColorBlobDetector,
    Detection,
    DetectorState,
    create_detector,
)
from colorblob.errors import EmptyFrame, InvalidFormat
from colorblob.hue_range import SingleRange, SplitRange

from .conftest import BLUE, GREEN, RED, solid


def test_starts_idle(detector):
    assert detector.state is DetectorState.IDLE
    assert detector.get_spectrum() is None
    assert detector.selected_color is None


def test_idle_process_is_noop(detector):
    assert detector.process(np.zeros((0, 0, 3), dtype=np.uint8)) == []
    assert detector.process(solid(RED)) == []
    assert detector.last_mask is None


def test_select_color_arms(detector):
    detector.select_color(RED + (255,))
    assert detector.state is DetectorState.ARMED
    assert detector.selected_color == RED + (255,)
    assert detector.hsv_color == (0, 255, 255)
    assert isinstance(detector.hue_range, SplitRange)


@pytest.mark.parametrize("color", [RED, GREEN, BLUE, (0, 0, 0), (255, 255, 255, 0), (17, 200, 90)])
def test_spectrum_has_configured_size(color):
    det = ColorBlobDetector(spectrum_size=(200, 64))
    det.select_color(color)
    assert det.get_spectrum().shape == (64, 200, 3)


def test_solid_red_frame(red_detector):
    contours = red_detector.process(solid(RED))
    assert len(contours) == 1
    assert contour_area(contours[0]) >= 0.95 * 100 * 100


def test_solid_blue_frame(red_detector):
    assert red_detector.process(solid(BLUE)) == []


def test_two_red_squares(red_detector, two_squares):
    contours = red_detector.process(two_squares)
    assert len(contours) == 2
    for c in contours:
        assert 300 <= contour_area(c) <= 400


def test_bgra_frame(red_detector):
    contours = red_detector.process(solid(RED + (255,)))
    assert len(contours) == 1


def test_masks_are_kept(red_detector, two_squares):
    red_detector.process(two_squares)
    assert red_detector.last_mask.shape == (100, 100)
    assert red_detector.last_threshold_mask.shape == (100, 100)
    assert red_detector.last_mask[20, 20] == 255
    assert red_detector.last_mask[50, 10] == 0


@pytest.mark.parametrize("color", [GREEN, (128, 128, 128), (90, 120, 140), (60, 60, 200), (200, 180, 170)])
def test_spectrum_frame_matches_its_own_color(color):
    det = ColorBlobDetector(color=color)
    spectrum = det.get_spectrum()
    contours = det.process(spectrum)
    assert contours
    h, w = spectrum.shape[:2]
    assert max(contour_area(c) for c in contours) >= 0.6 * w * h


def test_wrapping_reference_hue_matches_pure_red():
    det = ColorBlobDetector(color=(64, 0, 255))
    assert isinstance(det.hue_range, SplitRange)
    assert len(det.process(solid(RED))) == 1


def test_reselect_color(red_detector, two_squares):
    assert len(red_detector.process(two_squares)) == 2
    red_detector.select_color(BLUE)
    assert isinstance(red_detector.hue_range, SingleRange)
    contours = red_detector.process(two_squares)
    assert len(contours) == 1
    assert contour_area(contours[0]) > 9000


def test_min_area_threshold(red_detector, two_squares):
    red_detector.min_area = 400
    assert red_detector.process(two_squares) == []
    red_detector.min_area = 100
    assert len(red_detector.process(two_squares)) == 2
    with pytest.raises(ValueError):
        red_detector.min_area = -1


def test_pyramid_levels(two_squares):
    det = ColorBlobDetector(color=RED, pyramid_levels=1)
    contours = det.process(two_squares)
    assert len(contours) == 2
    for c in contours:
        assert 150 <= contour_area(c) <= 450
        assert c.max() <= 100
    assert det.last_mask.shape == (50, 50)


@pytest.mark.parametrize("frame", [
    np.zeros((10, 10), dtype=np.uint8),
    np.zeros((10, 10, 2), dtype=np.uint8),
    np.zeros((10, 10, 5), dtype=np.uint8),
])
def test_invalid_frame(red_detector, frame):
    with pytest.raises(InvalidFormat):
        red_detector.process(frame)


@pytest.mark.parametrize("shape", [(0, 10, 3), (10, 0, 3), (0, 0, 4)])
def test_empty_frame(red_detector, shape):
    with pytest.raises(EmptyFrame):
        red_detector.process(np.zeros(shape, dtype=np.uint8))
    assert red_detector.state is DetectorState.ARMED


def test_invalid_color_leaves_state(red_detector):
    before = red_detector.hue_range
    with pytest.raises(InvalidFormat):
        red_detector.select_color((1, 2))
    assert red_detector.hue_range == before
    assert red_detector.selected_color == RED + (255,)


@pytest.mark.parametrize("kwargs", [
    {"kernel_size": 4},
    {"hue_spread": -1},
    {"value_bounds": (200, 100)},
    {"min_area_ratio": 1.5},
    {"pyramid_levels": -1},
    {"spectrum_size": (0, 64)},
    {"min_area": -5},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        ColorBlobDetector(**kwargs)


def test_detect(red_detector, two_squares):
    detections = red_detector.detect(two_squares)
    assert len(detections) == 2
    assert all(isinstance(d, Detection) for d in detections)
    assert {d.center_px for d in detections} == {(19, 19), (59, 69)}
    for d in detections:
        assert d.label == "blob"
        assert 0 < d.confidence < 0.05
        assert d.mask is red_detector.last_mask


def test_detect_idle(detector):
    assert detector.detect(solid(RED)) == []


def test_factory():
    det = create_detector("color_blob", hue_spread=10, label="ball")
    assert isinstance(det, ColorBlobDetector)
    assert det.hue_spread == 10
    with pytest.raises(ValueError):
        create_detector("yolo")


def test_concurrent_select_and_process(two_squares):
    det = ColorBlobDetector(color=RED)
    errors = []

    def picker():
        try:
            for i in range(50):
                det.select_color(RED if i % 2 else (0, 10, 250))
        except Exception as e:
            errors.append(e)

    def worker():
        try:
            for _ in range(50):
                assert len(det.process(two_squares)) == 2
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=picker), threading.Thread(target=worker)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_non_finite_color_rejected(red_detector):
    with pytest.raises(InvalidFormat):
        red_detector.select_color((float("nan"), 0, 255))
    assert red_detector.selected_color == RED + (255,)


def test_detect_mask_matches_its_frame(two_squares):
    det = ColorBlobDetector(color=RED)
    blank = solid(BLUE)
    errors = []

    def noise():
        for _ in range(100):
            det.process(blank)

    def worker():
        try:
            for _ in range(100):
                for d in det.detect(two_squares):
                    cx, cy = d.center_px
                    assert d.mask[cy, cx] == 255
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=noise), threading.Thread(target=worker)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
