# --- mazecam_lib/analysis/direction.py ---
import logging
from typing import Tuple

from mazecam_lib.schema import DirectionDecision, Region, SectorCounts
from .mask import EdgeMask

log = logging.getLogger("mazecam.direction")


def sector_regions(width: int, height: int) -> Tuple[Region, Region, Region]:
    """
    Splits the frame into three vertical sectors of width // 3 columns each.
    Remainder columns on the right belong to no sector.
    """
    w = width // 3
    return (
        Region(0, 0, w, height),
        Region(w, 0, w, height),
        Region(2 * w, 0, w, height),
    )


def decide_from_counts(left: int, center: int, right: int) -> DirectionDecision:
    """
    Applies the ordered rule chain to the three sector counts. The chain is
    not a min() over sectors: ties fall through to HALT, and a center sector
    busier than both sides always forces BACKWARD.
    """
    direction = DirectionDecision.FORWARD
    if left < center and left < right:
        direction = DirectionDecision.LEFT
    elif right < center and right < left:
        direction = DirectionDecision.RIGHT
    elif center < left and center < right:
        direction = DirectionDecision.FORWARD
    else:
        direction = DirectionDecision.HALT

    if center > left and center > right:
        direction = DirectionDecision.BACKWARD

    return direction


class DirectionHeuristic:
    """Picks a movement direction from edge counts in three vertical sectors."""

    def sector_counts(self, mask: EdgeMask) -> SectorCounts:
        left, center, right = sector_regions(mask.width, mask.height)
        return SectorCounts(
            left=mask.count_nonzero(left),
            center=mask.count_nonzero(center),
            right=mask.count_nonzero(right),
        )

    def evaluate(self, mask: EdgeMask) -> Tuple[SectorCounts, DirectionDecision]:
        """Returns the sector counts together with the decision drawn from them."""
        counts = self.sector_counts(mask)
        direction = decide_from_counts(counts.left, counts.center, counts.right)
        log.debug(
            "Sector edges L=%d C=%d R=%d -> %s",
            counts.left,
            counts.center,
            counts.right,
            direction.label,
        )
        return counts, direction

    def decide(self, mask: EdgeMask) -> DirectionDecision:
        return self.evaluate(mask)[1]
