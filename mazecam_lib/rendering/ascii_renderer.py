# --- mazecam_lib/rendering/ascii_renderer.py ---
from typing import List, Optional

from mazecam_lib.analysis.deadends import DeadEndClassifier
from mazecam_lib.analysis.mask import EdgeMask
from mazecam_lib.analysis.quadtree import QuadTree

EMPTY_CHAR = "."
EDGE_CHAR = "#"
DEAD_END_CHAR = "X"
UNCOVERED_CHAR = " "


class ASCIIRenderer:
    """Renders the leaves of a quadtree as a character grid for debugging."""

    def __init__(self, cell_size: int = 10):
        self.cell_size = cell_size
        self.canvas: List[List[str]] = []

    def _paint(self, x: int, y: int, w: int, h: int, char: str):
        s = self.cell_size
        if w == 0 or h == 0:
            return
        for row in range(y // s, (y + h - 1) // s + 1):
            for col in range(x // s, (x + w - 1) // s + 1):
                if row < len(self.canvas) and col < len(self.canvas[row]):
                    self.canvas[row][col] = char

    def render_tree(
        self,
        tree: QuadTree,
        mask: EdgeMask,
        classifier: Optional[DeadEndClassifier] = None,
    ):
        classifier = classifier or DeadEndClassifier()
        root = tree.root.region
        rows = -(-root.height // self.cell_size)
        cols = -(-root.width // self.cell_size)
        self.canvas = [[UNCOVERED_CHAR] * cols for _ in range(rows)]

        dead_end_leaves = []
        for leaf in tree.leaves():
            r = leaf.region
            x, y = r.x - root.x, r.y - root.y
            if classifier.is_dead_end(mask, r):
                dead_end_leaves.append((x, y, r.width, r.height))
                continue
            char = EDGE_CHAR if mask.count_nonzero(r) else EMPTY_CHAR
            self._paint(x, y, r.width, r.height, char)

        # Dead ends are painted last so coarse cells never hide them.
        for x, y, w, h in dead_end_leaves:
            self._paint(x, y, w, h, DEAD_END_CHAR)

    def get_output(self) -> str:
        return "\n".join("".join(row) for row in self.canvas)
