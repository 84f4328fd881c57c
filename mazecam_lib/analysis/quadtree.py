# --- mazecam_lib/analysis/quadtree.py ---
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mazecam_lib.constants import MIN_NODE_SIZE
from mazecam_lib.schema import Region
from .mask import EdgeMask

log = logging.getLogger("mazecam.quadtree")


@dataclass(frozen=True)
class QuadNode:
    """A node of the arena. Children are arena indices in TL, TR, BL, BR order."""

    region: Region
    children: Tuple[int, ...] = ()
    depth: int = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children


class QuadTree:
    """
    A quadtree stored as a flat arena of nodes addressed by index. The root is
    always node 0. A node has either no children or exactly four.
    """

    def __init__(self, nodes: List[QuadNode]):
        if not nodes:
            raise ValueError("A quadtree needs at least a root node")
        self._nodes = nodes

    @property
    def root(self) -> QuadNode:
        return self._nodes[0]

    def node(self, index: int) -> QuadNode:
        return self._nodes[index]

    def children(self, index: int) -> List[QuadNode]:
        return [self._nodes[i] for i in self._nodes[index].children]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[QuadNode]:
        return iter(self._nodes)

    @property
    def depth(self) -> int:
        return max(n.depth for n in self._nodes)

    def leaves(self) -> Iterator[QuadNode]:
        """Yields leaf nodes depth-first, visiting children in TL, TR, BL, BR order."""
        stack = [0]
        while stack:
            node = self._nodes[stack.pop()]
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))

    def to_dict(self) -> Dict[str, Any]:
        """Flat JSON-friendly form: one entry per arena slot."""
        return {
            "root": 0,
            "nodes": [
                {
                    "region": list(n.region.as_tuple()),
                    "children": list(n.children),
                    "depth": n.depth,
                }
                for n in self._nodes
            ],
        }


class QuadtreeBuilder:
    """Partitions an edge mask into a quadtree, splitting only regions with edges."""

    def __init__(self, min_node_size: int = MIN_NODE_SIZE):
        if min_node_size < 1:
            raise ValueError("min_node_size must be at least 1")
        self.min_node_size = min_node_size

    def _should_split(self, mask: EdgeMask, region: Region) -> bool:
        if region.width <= self.min_node_size or region.height <= self.min_node_size:
            return False
        # Empty regions stop here too and look the same as too-small leaves.
        return mask.count_nonzero(region) > 0

    def build(self, mask: EdgeMask, region: Optional[Region] = None) -> QuadTree:
        region = region if region is not None else mask.region
        nodes: List[Optional[QuadNode]] = [None]
        work = [(0, region, 0)]

        while work:
            index, current, depth = work.pop()
            if not self._should_split(mask, current):
                nodes[index] = QuadNode(current, (), depth)
                continue

            first = len(nodes)
            child_ids = tuple(range(first, first + 4))
            nodes.extend([None] * 4)
            nodes[index] = QuadNode(current, child_ids, depth)
            for child_id, quadrant in zip(child_ids, current.quadrants()):
                work.append((child_id, quadrant, depth + 1))

        tree = QuadTree(nodes)
        log.debug(
            "Built quadtree over %s: %d nodes, depth %d.", region, len(tree), tree.depth
        )
        return tree


def build_quadtree(
    mask: EdgeMask, region: Optional[Region] = None, min_node_size: int = MIN_NODE_SIZE
) -> QuadTree:
    """Convenience wrapper around QuadtreeBuilder.build."""
    return QuadtreeBuilder(min_node_size).build(mask, region)
