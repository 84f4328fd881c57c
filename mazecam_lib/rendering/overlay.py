# --- mazecam_lib/rendering/overlay.py ---
import logging
from abc import ABC, abstractmethod

import cv2
import numpy as np

from mazecam_lib import constants
from mazecam_lib.schema import FrameResult

log = logging.getLogger("mazecam.render")


def draw_overlay(frame: np.ndarray, result: FrameResult) -> np.ndarray:
    """Returns a copy of the frame with dead-end markers and the direction text."""
    if frame.ndim == 2:
        canvas = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
    else:
        canvas = frame.copy()

    for point in result.dead_ends:
        cv2.circle(
            canvas,
            (point.x, point.y),
            constants.MARKER_RADIUS,
            constants.MARKER_COLOR,
            -1,
        )

    if result.direction is not None:
        cv2.putText(
            canvas,
            result.direction.label,
            constants.TEXT_ORIGIN,
            cv2.FONT_HERSHEY_SIMPLEX,
            constants.TEXT_SCALE,
            constants.TEXT_COLOR,
            constants.TEXT_THICKNESS,
        )
    return canvas


class FrameSink(ABC):
    """Receives each processed frame together with its analysis result."""

    @abstractmethod
    def show(self, frame: np.ndarray, result: FrameResult) -> bool:
        """Presents one frame. Returns False when the viewer asked to stop."""

    @abstractmethod
    def close(self) -> None:
        """Releases display resources. Safe to call more than once."""


class NullSink(FrameSink):
    """A headless sink that only logs decisions."""

    def __init__(self):
        self.frames_shown = 0
        self.closed = False

    def show(self, frame: np.ndarray, result: FrameResult) -> bool:
        self.frames_shown += 1
        label = result.direction.label if result.direction else "(no decision)"
        log.info(
            "Frame %d: %s, %d dead end(s).", self.frames_shown, label, len(result.dead_ends)
        )
        return True

    def close(self) -> None:
        self.closed = True


class WindowSink(FrameSink):
    """Shows annotated frames in an OpenCV window. 'q' or Esc requests shutdown."""

    QUIT_KEYS = {ord("q"), 27}

    def __init__(self, window_name: str = constants.WINDOW_NAME):
        self.window_name = window_name
        self._opened = False

    def show(self, frame: np.ndarray, result: FrameResult) -> bool:
        cv2.imshow(self.window_name, draw_overlay(frame, result))
        self._opened = True
        key = cv2.waitKey(1) & 0xFF
        if key in self.QUIT_KEYS:
            log.info("Quit key pressed.")
            return False
        if cv2.getWindowProperty(self.window_name, cv2.WND_PROP_VISIBLE) < 1:
            log.info("Window '%s' was closed.", self.window_name)
            return False
        return True

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        try:
            cv2.destroyWindow(self.window_name)
        except cv2.error as e:
            log.debug("Window '%s' already gone: %s", self.window_name, e)
