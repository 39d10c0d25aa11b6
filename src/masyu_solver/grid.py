"""
Feature Grid for the Masyu solver.

The puzzle is stored on a doubled-resolution board: a W×H puzzle becomes a
(2H+1)×(2W+1) array where coordinate parity encodes the kind of site:
- both odd: clue site (a cell, may hold a circle)
- one odd: edge site (a potential segment between two cells)
- both even: corner site (inside/outside marker)
"""

import numpy as np
from typing import List, Iterator

from .types import Coord, Feature, CHARS


class FeatureGrid:
    """
    Doubled-resolution board of feature codes.

    Border edges are pre-seeded BLOCKED and border corners OUT, since the loop
    can never cross or reach the outside of the board.
    """

    def __init__(self, width: int, height: int):
        """
        Initialize an empty board.

        Args:
            width, height: Puzzle dimensions in cells
        """
        if width < 1 or height < 1:
            raise ValueError(f"Board must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.rows = 2 * height + 1
        self.cols = 2 * width + 1
        self.data = np.zeros((self.rows, self.cols), dtype=np.uint8)
        self._seed_border()

    def _seed_border(self):
        H, W = self.rows, self.cols
        for r in range(H):
            for c in range(W):
                if r not in (0, H - 1) and c not in (0, W - 1):
                    continue
                self.data[r, c] = Feature.OUT if (r + c) % 2 == 0 else Feature.BLOCKED

    def copy(self) -> 'FeatureGrid':
        """Deep copy of the grid."""
        g = FeatureGrid.__new__(FeatureGrid)
        g.width, g.height = self.width, self.height
        g.rows, g.cols = self.rows, self.cols
        g.data = self.data.copy()
        return g

    def at(self, r: int, c: int) -> Feature:
        return Feature(int(self.data[r, c]))

    def clue_coords(self) -> List[Coord]:
        """All circle sites, row-major."""
        out = []
        for r in range(1, self.rows, 2):
            for c in range(1, self.cols, 2):
                if self.data[r, c] in (Feature.BLACK, Feature.WHITE):
                    out.append((r, c))
        return out

    def interior_edges(self) -> Iterator[Coord]:
        """Interior edge sites, row-major."""
        for r in range(1, self.rows - 1):
            for c in range(1 + r % 2, self.cols - 1, 2):
                yield (r, c)

    def clear_derived(self):
        """Reset every interior non-clue site to EMPTY; keep circles and border."""
        inner = self.data[1:-1, 1:-1]
        inner[inner > Feature.WHITE] = Feature.EMPTY

    def count_empty_edges(self) -> int:
        return sum(1 for r, c in self.interior_edges() if self.data[r, c] == Feature.EMPTY)

    def render(self) -> str:
        """Board in the template alphabet, one text row per grid row."""
        return "\n".join(
            "".join(CHARS[Feature(int(v))] for v in row) for row in self.data
        )

    def __eq__(self, other: 'FeatureGrid') -> bool:
        if not isinstance(other, FeatureGrid):
            return NotImplemented
        return self.data.shape == other.data.shape and np.array_equal(self.data, other.data)

    def __repr__(self):
        return f"FeatureGrid({self.width}x{self.height})"
