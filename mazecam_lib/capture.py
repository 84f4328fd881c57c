# --- mazecam_lib/capture.py ---
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

import cv2
import numpy as np

from mazecam_lib.constants import CAMERA_INDEX

log = logging.getLogger("mazecam.capture")


class CaptureUnavailableError(RuntimeError):
    """Raised when a frame source cannot be opened."""


class FrameSource(ABC):
    """Produces frames one at a time for the navigation pipeline."""

    @abstractmethod
    def open(self) -> None:
        """Acquires the underlying resource or raises CaptureUnavailableError."""

    @abstractmethod
    def read(self) -> Optional[np.ndarray]:
        """Returns the next frame, or None when this cycle produced nothing."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """False once the source is exhausted or released."""

    @abstractmethod
    def release(self) -> None:
        """Frees the resource. Safe to call more than once."""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class CameraSource(FrameSource):
    """A cv2.VideoCapture-backed source: a device index or a video file path."""

    def __init__(self, device: Union[int, str] = CAMERA_INDEX):
        if isinstance(device, str) and device.isdigit():
            device = int(device)
        self.device = device
        self._capture: Optional[cv2.VideoCapture] = None
        self._frame: Optional[np.ndarray] = None

    @property
    def is_file(self) -> bool:
        return isinstance(self.device, str)

    def open(self) -> None:
        if self.is_open:
            return
        log.info("Opening capture source %r...", self.device)
        capture = cv2.VideoCapture(self.device)
        if not capture.isOpened():
            capture.release()
            raise CaptureUnavailableError(f"Unable to open capture source {self.device!r}")
        self._capture = capture
        log.info("Capture source %r opened.", self.device)

    @property
    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self._frame

    def read(self) -> Optional[np.ndarray]:
        if not self.is_open:
            return None
        ok, frame = self._capture.read()
        if not ok or frame is None or frame.size == 0:
            if self.is_file:
                log.info("End of video stream %r.", self.device)
                self.release()
            else:
                log.debug("Empty frame from device %r.", self.device)
            return None
        self._frame = frame
        return frame

    def release(self) -> None:
        if self._capture is not None:
            if self._capture.isOpened():
                self._capture.release()
                log.info("Capture source %r released.", self.device)
            self._capture = None
        self._frame = None


class ImageSequenceSource(FrameSource):
    """Replays still images from disk, one per read, then closes."""

    def __init__(self, paths: Sequence[str]):
        self.paths: List[str] = list(paths)
        self._cursor = 0
        self._opened = False

    def open(self) -> None:
        if not self.paths:
            raise CaptureUnavailableError("No input images were given")
        self._cursor = 0
        self._opened = True
        log.info("Replaying %d image(s).", len(self.paths))

    @property
    def is_open(self) -> bool:
        return self._opened and self._cursor < len(self.paths)

    def read(self) -> Optional[np.ndarray]:
        if not self.is_open:
            return None
        path = self.paths[self._cursor]
        self._cursor += 1
        frame = cv2.imread(path)
        if frame is None:
            log.warning("Could not read image at %s; skipping.", path)
            return None
        log.debug("Loaded image %s (%dx%d).", path, frame.shape[1], frame.shape[0])
        return frame

    def release(self) -> None:
        self._opened = False
