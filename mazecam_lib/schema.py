# --- mazecam_lib/schema.py ---
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Region:
    """An axis-aligned rectangle in pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if min(self.x, self.y, self.width, self.height) < 0:
            raise ValueError(f"Region values must be non-negative: {self}")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    def quadrants(self) -> Tuple["Region", "Region", "Region", "Region"]:
        """
        Splits the region into TL, TR, BL, BR quadrants. Odd dimensions drop
        their last row/column, so the quadrants may not tile the parent.
        """
        half_w, half_h = self.width // 2, self.height // 2
        cx, cy = self.center
        return (
            Region(self.x, self.y, half_w, half_h),
            Region(cx, self.y, half_w, half_h),
            Region(self.x, cy, half_w, half_h),
            Region(cx, cy, half_w, half_h),
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


@dataclass(frozen=True)
class DeadEndPoint:
    """The center of a leaf region classified as a dead end."""

    x: int
    y: int


class DirectionDecision(Enum):
    """The movement label derived for one frame; values are the overlay texts."""

    FORWARD = "Move Forward"
    LEFT = "Move Left"
    RIGHT = "Move Right"
    BACKWARD = "Move Backward"
    HALT = "Halt"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SectorCounts:
    """Edge pixel counts of the three vertical sectors of a mask."""

    left: int
    center: int
    right: int


@dataclass(frozen=True)
class LeafVerdict:
    """Diagnostic record of a single leaf classification."""

    region: Region
    edge_count: int
    density: float
    intersections: int
    is_dead_end: bool


@dataclass
class FrameResult:
    """Everything the rendering side needs from one processed frame."""

    dead_ends: List[DeadEndPoint] = field(default_factory=list)
    direction: Optional[DirectionDecision] = None  # None means "no decision"
    sectors: Optional[SectorCounts] = None
    leaf_count: int = 0

    @property
    def has_decision(self) -> bool:
        return self.direction is not None
