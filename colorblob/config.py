"""
Configuration management with YAML loading.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass
class DetectorConfig:
    """Blob detector tuning. Field names match ColorBlobDetector's keyword arguments."""
    type: str = "color_blob"
    hue_spread: int = 25
    saturation_spread: int = 50
    value_bounds: List[int] = field(default_factory=lambda: [30, 255])
    kernel_size: int = 5            # side of the square morphology neighborhood, odd
    min_area: float = 50.0          # px², contours below are treated as noise
    min_area_ratio: float = 0.0     # relative to the largest contour, 0 = off
    pyramid_levels: int = 0         # each level halves the frame before thresholding
    spectrum_size: List[int] = field(default_factory=lambda: [200, 64])
    label: str = "blob"

    def detector_kwargs(self) -> dict:
        """Constructor arguments for the detector named by `type`."""
        return {
            "hue_spread": self.hue_spread,
            "saturation_spread": self.saturation_spread,
            "value_bounds": list(self.value_bounds),
            "kernel_size": self.kernel_size,
            "min_area": self.min_area,
            "min_area_ratio": self.min_area_ratio,
            "pyramid_levels": self.pyramid_levels,
            "spectrum_size": list(self.spectrum_size),
            "label": self.label,
        }


@dataclass
class ViewerConfig:
    """Camera viewer settings."""
    camera_index: int = 0
    frame_interval_ms: int = 33     # ~30 frames/sec
    window_name: str = "Color Blob Detection"
    contour_color: List[int] = field(default_factory=lambda: [255, 0, 0, 255])
    initial_color: List[int] = field(default_factory=lambda: [0, 0, 255, 255])  # B, G, R, A


@dataclass
class Config:
    """Root configuration."""
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.

    Returns:
        Config object with all settings.
    """
    if config_path is None:
        return Config()

    path = Path(config_path)
    if not path.exists():
        logger.warning(f"{config_path} not found, using defaults")
        return Config()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _dict_to_config(data: dict) -> Config:
    """Convert dictionary to Config object."""
    config = Config()

    # Detector
    if "detector" in data:
        d = data["detector"] or {}
        config.detector = DetectorConfig(
            type=d.get("type", config.detector.type),
            hue_spread=d.get("hue_spread", config.detector.hue_spread),
            saturation_spread=d.get("saturation_spread", config.detector.saturation_spread),
            value_bounds=d.get("value_bounds", config.detector.value_bounds),
            kernel_size=d.get("kernel_size", config.detector.kernel_size),
            min_area=d.get("min_area", config.detector.min_area),
            min_area_ratio=d.get("min_area_ratio", config.detector.min_area_ratio),
            pyramid_levels=d.get("pyramid_levels", config.detector.pyramid_levels),
            spectrum_size=d.get("spectrum_size", config.detector.spectrum_size),
            label=d.get("label", config.detector.label),
        )

    # Viewer
    if "viewer" in data:
        v = data["viewer"] or {}
        config.viewer = ViewerConfig(
            camera_index=v.get("camera_index", config.viewer.camera_index),
            frame_interval_ms=v.get("frame_interval_ms", config.viewer.frame_interval_ms),
            window_name=v.get("window_name", config.viewer.window_name),
            contour_color=v.get("contour_color", config.viewer.contour_color),
            initial_color=v.get("initial_color", config.viewer.initial_color),
        )

    return config


def save_config(config: Config, path: str) -> None:
    """Save configuration to YAML file."""
    data = {
        "detector": {
            "type": config.detector.type,
            "hue_spread": config.detector.hue_spread,
            "saturation_spread": config.detector.saturation_spread,
            "value_bounds": list(config.detector.value_bounds),
            "kernel_size": config.detector.kernel_size,
            "min_area": config.detector.min_area,
            "min_area_ratio": config.detector.min_area_ratio,
            "pyramid_levels": config.detector.pyramid_levels,
            "spectrum_size": list(config.detector.spectrum_size),
            "label": config.detector.label,
        },
        "viewer": {
            "camera_index": config.viewer.camera_index,
            "frame_interval_ms": config.viewer.frame_interval_ms,
            "window_name": config.viewer.window_name,
            "contour_color": list(config.viewer.contour_color),
            "initial_color": list(config.viewer.initial_color),
        },
    }

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
