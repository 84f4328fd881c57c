# --- mazecam_lib/analysis/deadends.py ---
import logging
from typing import Callable, List, Optional

from mazecam_lib.constants import (
    DEAD_END_DENSITY_THRESHOLD,
    DEAD_END_INTERSECTION_THRESHOLD,
)
from mazecam_lib.schema import DeadEndPoint, LeafVerdict, Region
from .mask import EdgeMask
from .quadtree import QuadTree

log = logging.getLogger("mazecam.deadend")

VerdictHook = Callable[[LeafVerdict], None]


class DeadEndClassifier:
    """
    Labels quadtree leaves as dead ends: regions dense enough to hold a wall
    fragment but with at most one branching pixel, i.e. a path that stops
    rather than one that forks.
    """

    def __init__(
        self,
        density_threshold: float = DEAD_END_DENSITY_THRESHOLD,
        intersection_threshold: int = DEAD_END_INTERSECTION_THRESHOLD,
        on_verdict: Optional[VerdictHook] = None,
    ):
        self.density_threshold = density_threshold
        self.intersection_threshold = intersection_threshold
        self.on_verdict = on_verdict

    def classify(self, mask: EdgeMask, region: Region) -> LeafVerdict:
        """Computes density and intersection count for one region."""
        if region.area == 0:
            verdict = LeafVerdict(region, 0, 0.0, 0, False)
        else:
            edge_count = mask.count_nonzero(region)
            density = edge_count / region.area
            intersections = mask.count_intersections(region)
            is_dead_end = (
                density > self.density_threshold
                and intersections <= self.intersection_threshold
            )
            verdict = LeafVerdict(region, edge_count, density, intersections, is_dead_end)

        log.debug(
            "Region: %s Edge Density: %.4f Intersections: %d Is Dead End: %s",
            region.as_tuple(),
            verdict.density,
            verdict.intersections,
            verdict.is_dead_end,
        )
        if self.on_verdict is not None:
            self.on_verdict(verdict)
        return verdict

    def is_dead_end(self, mask: EdgeMask, region: Region) -> bool:
        return self.classify(mask, region).is_dead_end

    def find_dead_ends(self, tree: QuadTree, mask: EdgeMask) -> List[DeadEndPoint]:
        """Returns the centers of all dead-end leaves in depth-first order."""
        dead_ends = []
        for leaf in tree.leaves():
            if self.classify(mask, leaf.region).is_dead_end:
                dead_ends.append(DeadEndPoint(*leaf.region.center))
        log.debug("Found %d dead ends among the tree leaves.", len(dead_ends))
        return dead_ends


def find_dead_ends(tree: QuadTree, mask: EdgeMask) -> List[DeadEndPoint]:
    """Classifies with the default thresholds."""
    return DeadEndClassifier().find_dead_ends(tree, mask)
