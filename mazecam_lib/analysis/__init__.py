from .mask import EdgeMask
from .edges import detect_edges
from .quadtree import QuadNode, QuadTree, QuadtreeBuilder, build_quadtree
from .deadends import DeadEndClassifier, find_dead_ends
from .direction import DirectionHeuristic, decide_from_counts, sector_regions
from .processor import FrameProcessor, process_frame

__all__ = [
    "EdgeMask",
    "detect_edges",
    "QuadNode",
    "QuadTree",
    "QuadtreeBuilder",
    "build_quadtree",
    "DeadEndClassifier",
    "find_dead_ends",
    "DirectionHeuristic",
    "decide_from_counts",
    "sector_regions",
    "FrameProcessor",
    "process_frame",
]
