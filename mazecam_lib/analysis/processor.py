# --- mazecam_lib/analysis/processor.py ---
import logging
from typing import Optional

import numpy as np

from mazecam_lib.schema import FrameResult
from .deadends import DeadEndClassifier
from .direction import DirectionHeuristic
from .mask import EdgeMask
from .quadtree import QuadtreeBuilder

log = logging.getLogger("mazecam.frame")


class FrameProcessor:
    """Orchestrates the per-frame analysis: quadtree, dead ends and direction."""

    def __init__(
        self,
        builder: Optional[QuadtreeBuilder] = None,
        classifier: Optional[DeadEndClassifier] = None,
        heuristic: Optional[DirectionHeuristic] = None,
    ):
        self.builder = builder or QuadtreeBuilder()
        self.classifier = classifier or DeadEndClassifier()
        self.heuristic = heuristic or DirectionHeuristic()

    def process(
        self, frame: Optional[np.ndarray], mask: Optional[EdgeMask]
    ) -> FrameResult:
        """
        Runs the full analysis on one edge mask. The frame itself is not
        touched; annotation is left to the sink. A missing or zero-area mask
        yields a result without a decision instead of an error.
        """
        if mask is None or mask.is_empty:
            log.debug("Empty edge mask; returning no decision.")
            return FrameResult()

        tree = self.builder.build(mask)
        dead_ends = self.classifier.find_dead_ends(tree, mask)
        sectors, direction = self.heuristic.evaluate(mask)

        leaf_count = sum(1 for _ in tree.leaves())
        log.debug(
            "Frame processed: %d leaves, %d dead ends, decision '%s'.",
            leaf_count,
            len(dead_ends),
            direction.label,
        )
        return FrameResult(
            dead_ends=dead_ends,
            direction=direction,
            sectors=sectors,
            leaf_count=leaf_count,
        )


def process_frame(frame: Optional[np.ndarray], mask: Optional[EdgeMask]) -> FrameResult:
    """Processes one frame with default settings."""
    return FrameProcessor().process(frame, mask)
