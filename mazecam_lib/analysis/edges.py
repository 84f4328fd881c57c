# --- mazecam_lib/analysis/edges.py ---
import logging
from typing import Optional

import cv2
import numpy as np

from mazecam_lib.constants import CANNY_HIGH, CANNY_LOW
from .mask import EdgeMask

log = logging.getLogger("mazecam.edges")


def detect_edges(
    frame: Optional[np.ndarray], low: int = CANNY_LOW, high: int = CANNY_HIGH
) -> Optional[EdgeMask]:
    """Converts a BGR (or already gray) frame into a Canny edge mask."""
    if frame is None or frame.size == 0:
        log.debug("No frame data; skipping edge detection.")
        return None

    if frame.ndim == 3 and frame.shape[2] == 3:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    elif frame.ndim == 3 and frame.shape[2] == 4:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGRA2GRAY)
    elif frame.ndim == 2:
        gray = frame
    else:
        raise ValueError(f"Unsupported frame shape for edge detection: {frame.shape}")

    if gray.dtype != np.uint8:
        gray = cv2.convertScaleAbs(gray)
    edges = cv2.Canny(gray, low, high)
    return EdgeMask(edges)
