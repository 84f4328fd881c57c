import logging

import cv2
import numpy as np
import pytest

from mazecam_lib.analysis import EdgeMask
from mazecam_lib.log_utils import PROJECT_TOPICS


@pytest.fixture(autouse=True)
def reset_mazecam_logging():
    yield
    root = logging.getLogger("mazecam")
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    root.setLevel(logging.NOTSET)
    for topic in PROJECT_TOPICS["mazecam"]:
        logging.getLogger(f"mazecam.{topic}").setLevel(logging.NOTSET)


def mask_from_points(width, height, points, value=255):
    """Builds an EdgeMask with the given (x, y) pixels set."""
    pixels = np.zeros((height, width), dtype=np.uint8)
    for x, y in points:
        pixels[y, x] = value
    return EdgeMask(pixels)


@pytest.fixture
def line_mask():
    # A 6-pixel horizontal stroke: dense enough, never branching.
    return mask_from_points(10, 10, [(x, 5) for x in range(2, 8)])


@pytest.fixture
def maze_frame():
    frame = np.zeros((60, 90, 3), dtype=np.uint8)
    cv2.rectangle(frame, (10, 10), (40, 50), (255, 255, 255), -1)
    return frame
