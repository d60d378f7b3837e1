#!/usr/bin/env python3
"""
Live color blob viewer.

Usage:
  color_blob_viewer --config config/color_blob.yaml --camera 0

Pick the color to track with the Red/Green/Blue/Alpha trackbars.
Detected blobs are outlined, with the selected color and the matched
hue band shown in the top-left corner.  SPACE saves the current color
and detector settings to YAML, ESC quits.
"""

import argparse
import logging

import cv2
import numpy as np

from colorblob.config import load_config, save_config
from colorblob.detectors import create_detector
from colorblob.overlay import draw_overlay

logging.basicConfig(level=logging.INFO, format='[%(name)s] %(levelname)s: %(message)s')
logger = logging.getLogger("color_blob_viewer")

_CHANNELS = ("Blue", "Green", "Red", "Alpha")


class ColorBlobViewer:
    def __init__(self, config, output_file: str):
        self.config = config
        self.output_file = output_file
        self.window = config.viewer.window_name

        self.detector = create_detector(
            config.detector.type, **config.detector.detector_kwargs()
        )
        self.capture = cv2.VideoCapture(config.viewer.camera_index)

        # -- GUI --
        cv2.namedWindow(self.window, cv2.WINDOW_AUTOSIZE)
        for name, value in zip(_CHANNELS, config.viewer.initial_color):
            cv2.createTrackbar(name, self.window, int(value), 255, lambda _: None)

    def _read_trackbars(self):
        """Current (B, G, R, A) from the trackbars."""
        return tuple(cv2.getTrackbarPos(name, self.window) for name in _CHANNELS)

    def _save(self, color):
        self.config.viewer.initial_color = list(color)
        save_config(self.config, self.output_file)
        logger.info(f"Saved color {color} to {self.output_file}")

    def _process(self, frame: np.ndarray):
        color = self._read_trackbars()
        if color != self.detector.selected_color:
            self.detector.select_color(color)

        contours = self.detector.process(frame)
        draw_overlay(
            frame,
            contours,
            color,
            self.detector.get_spectrum(),
            contour_color=self.config.viewer.contour_color,
        )
        cv2.putText(frame, f"Blobs: {len(contours)}  [SPACE=save, ESC=quit]",
                    (10, frame.shape[0] - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        mask = self.detector.last_mask
        if mask is None:
            return frame
        vis_mask = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
        return np.hstack([frame, vis_mask])

    def run(self):
        if not self.capture.isOpened():
            logger.error("Failed to open the camera connection")
            return

        logger.info("Camera open. Adjust the color trackbars. SPACE=save, ESC=quit.")
        interval = max(1, int(self.config.viewer.frame_interval_ms))
        try:
            while True:
                ok, frame = self.capture.read()
                if ok and frame is not None and frame.size:
                    try:
                        canvas = self._process(frame)
                        cv2.imshow(self.window, canvas)
                    except Exception as e:
                        logger.exception(f"Exception during frame processing: {e}")

                key = cv2.waitKey(interval) & 0xFF
                if key == 27:  # ESC
                    break
                elif key == 32:  # SPACE
                    self._save(self._read_trackbars())
        finally:
            self.capture.release()
            cv2.destroyAllWindows()
            logger.info("Camera released.")


def main():
    parser = argparse.ArgumentParser(description="Live color blob detection viewer")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--camera", type=int, default=None, help="camera index override")
    parser.add_argument("--output", default="color_blob.yaml", help="where SPACE saves settings")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.camera is not None:
        config.viewer.camera_index = args.camera

    viewer = ColorBlobViewer(config, args.output)
    try:
        viewer.run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
