"""
Color blob detection.

Locate every connected region of a frame whose color matches a selected
reference color, and report the outlines of those regions.
"""

from .errors import ColorBlobError, InvalidFormat, EmptyFrame
from .hue_range import HsvBounds, SingleRange, SplitRange, build_hue_range
from .detectors import ColorBlobDetector, Detection, DetectorState, create_detector
from .config import Config, DetectorConfig, ViewerConfig, load_config, save_config

__version__ = "0.1.0"

__all__ = [
    "ColorBlobError",
    "InvalidFormat",
    "EmptyFrame",
    "HsvBounds",
    "SingleRange",
    "SplitRange",
    "build_hue_range",
    "ColorBlobDetector",
    "Detection",
    "DetectorState",
    "create_detector",
    "Config",
    "DetectorConfig",
    "ViewerConfig",
    "load_config",
    "save_config",
]
