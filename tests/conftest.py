import numpy as np
import pytest

from colorblob.detectors import ColorBlobDetector

RED = (0, 0, 255)
GREEN = (0, 255, 0)
BLUE = (255, 0, 0)


def solid(color, size=(100, 100)):
    """(H, W, C) frame filled with one BGR(A) color; size is (width, height)."""
    width, height = size
    frame = np.zeros((height, width, len(color)), dtype=np.uint8)
    frame[:] = color
    return frame


@pytest.fixture
def detector():
    return ColorBlobDetector()


@pytest.fixture
def red_detector():
    det = ColorBlobDetector()
    det.select_color(RED + (255,))
    return det


@pytest.fixture
def two_squares():
    """Blue 100x100 frame with two separate 20x20 red squares."""
    frame = solid(BLUE)
    frame[10:30, 10:30] = RED
    frame[60:80, 50:70] = RED
    return frame
