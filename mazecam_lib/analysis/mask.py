# --- mazecam_lib/analysis/mask.py ---
import logging
from functools import cached_property

import numpy as np

from mazecam_lib.constants import BRANCH_NEIGHBOR_COUNT
from mazecam_lib.schema import Region

log = logging.getLogger("mazecam.edges")


def _summed_area_table(binary: np.ndarray) -> np.ndarray:
    """Builds an (h+1, w+1) integral image so any box sum is four lookups."""
    table = binary.astype(np.int64).cumsum(axis=0).cumsum(axis=1)
    return np.pad(table, ((1, 0), (1, 0)))


class EdgeMask:
    """
    A read-only binary edge map for one frame. Only zero vs. nonzero matters;
    box counts over arbitrary regions are answered in constant time from
    precomputed summed-area tables.
    """

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 2:
            raise ValueError(f"Edge mask must be 2-D, got shape {pixels.shape}")
        self._pixels = pixels.copy()
        self._pixels.setflags(write=False)
        self._binary = (self._pixels != 0).astype(np.uint8)
        self._binary.setflags(write=False)
        self._edge_table = _summed_area_table(self._binary)

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def region(self) -> Region:
        return Region(0, 0, self.width, self.height)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def at(self, x: int, y: int) -> int:
        """Returns the pixel value at (x, y), or 0 outside the mask."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return int(self._pixels[y, x])
        return 0

    def count_nonzero(self, region: Region) -> int:
        """Counts edge pixels inside the region (clipped to the mask)."""
        return self._box_sum(self._edge_table, region)

    def count_intersections(self, region: Region) -> int:
        """
        Counts branch pixels inside the region: edge pixels with more than two
        4-connected edge neighbours. Neighbours are looked up in the whole
        mask, so a pixel on the region border may see pixels outside it.
        """
        return self._box_sum(self._branch_table, region)

    @cached_property
    def neighbor_counts(self) -> np.ndarray:
        """Per-pixel number of 4-connected edge neighbours (zero beyond the border)."""
        padded = np.pad(self._binary, 1).astype(np.uint8)
        counts = (
            padded[:-2, 1:-1]  # up
            + padded[2:, 1:-1]  # down
            + padded[1:-1, :-2]  # left
            + padded[1:-1, 2:]  # right
        )
        counts.setflags(write=False)
        return counts

    @cached_property
    def _branch_table(self) -> np.ndarray:
        branch = (self._binary == 1) & (self.neighbor_counts > BRANCH_NEIGHBOR_COUNT)
        log.debug("Edge mask %dx%d has %d branch pixels.", self.width, self.height, int(branch.sum()))
        return _summed_area_table(branch)

    def _box_sum(self, table: np.ndarray, region: Region) -> int:
        x0, y0 = min(region.x, self.width), min(region.y, self.height)
        x1 = min(region.x + region.width, self.width)
        y1 = min(region.y + region.height, self.height)
        if x1 <= x0 or y1 <= y0:
            return 0
        return int(table[y1, x1] - table[y0, x1] - table[y1, x0] + table[y0, x0])

    def __repr__(self):
        return f"EdgeMask({self.width}x{self.height})"
