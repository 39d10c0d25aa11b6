#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Masyu Solver - Board Facade"""

import time
from typing import Callable, Optional, Sequence

from .types import Circle, Edge, Feature, InOut, Outcome, SolveDepth, Validity, CIRCLE_FEATURES
from .grid import FeatureGrid
from .patterns import PatternLibrary
from .propagation import BoardState, propagate
from .search import shallow_search
from .validity import check_validity
from .receipts import SolveReceipt, board_sha, summarize, log_receipt

Log = Callable[[str], None]

DEPTH_LABELS = {
    SolveDepth.NONE: "none",
    SolveDepth.CONSTRAINTS: "constraints only",
    SolveDepth.SEARCH: "1",
}

_EDGE_BY_FEATURE = {
    Feature.EMPTY: Edge.UNKNOWN,
    Feature.LINE: Edge.LINE,
    Feature.BLOCKED: Edge.BLOCKED,
}

_INOUT_BY_FEATURE = {
    Feature.EMPTY: InOut.UNKNOWN,
    Feature.IN: InOut.IN,
    Feature.OUT: InOut.OUT,
}


class MasyuBoard:
    """
    A W x H Masyu puzzle addressed in cell coordinates (x = column, y = row).

    Circles are placed with `set_circle`; segments, absences and inside/outside
    markers are derived by `run_propagation` and `solve` and read back with
    `edge`, `is_segment`, `is_blocked` and `get_corner_marker`.
    """

    def __init__(self, width: int, height: int, library: Optional[PatternLibrary] = None):
        grid = FeatureGrid(width, height)
        if library is None:
            library = PatternLibrary.for_size(grid.rows, grid.cols)
        elif (library.rows, library.cols) != (grid.rows, grid.cols):
            raise ValueError(f"Library built for {library.rows}x{library.cols}, board is {grid.rows}x{grid.cols}")
        self.width = width
        self.height = height
        self.library = library
        self.state = BoardState(grid)

    @classmethod
    def from_rows(cls, rows: Sequence[str], library: Optional[PatternLibrary] = None) -> 'MasyuBoard':
        """
        Build a board from clue rows, e.g. ["Q..Q", "....", ".O..", "Q..Q"].

        Raises:
            ValueError: on empty input, ragged rows or characters other than Q, O, '.'
        """
        if not rows:
            raise ValueError("No rows given")
        width = len(rows[0])
        board = cls(width, len(rows), library)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has length {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                try:
                    kind = Circle(ch)
                except ValueError:
                    raise ValueError(f"Unknown clue character {ch!r} at ({x}, {y})") from None
                if kind != Circle.NONE:
                    board.set_circle(x, y, kind)
        return board

    # ==========================================================================
    # Coordinates
    # ==========================================================================

    @property
    def grid(self) -> FeatureGrid:
        return self.state.grid

    def _check_cell(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Cell ({x}, {y}) outside {self.width}x{self.height} board")

    def _cell_site(self, x: int, y: int):
        self._check_cell(x, y)
        return (2 * y + 1, 2 * x + 1)

    def _edge_site(self, x: int, y: int, horizontal: bool):
        self._check_cell(x, y)
        if horizontal:
            return (2 * y + 1, 2 * x + 2)
        return (2 * y + 2, 2 * x + 1)

    # ==========================================================================
    # Clues & Queries
    # ==========================================================================

    def set_circle(self, x: int, y: int, kind: Circle):
        """Toggle a circle: an occupied cell is cleared, an empty one gets `kind`."""
        site = self._cell_site(x, y)
        data = self.grid.data
        if data[site] != Feature.EMPTY or kind == Circle.NONE:
            data[site] = Feature.EMPTY
        else:
            data[site] = CIRCLE_FEATURES[kind]

    def get_circle(self, x: int, y: int) -> Circle:
        v = self.grid.data[self._cell_site(x, y)]
        if v == Feature.BLACK:
            return Circle.BLACK
        if v == Feature.WHITE:
            return Circle.WHITE
        return Circle.NONE

    def edge(self, x: int, y: int, horizontal: bool) -> Edge:
        """State of the edge right of (horizontal) or below (vertical) cell (x, y)."""
        return _EDGE_BY_FEATURE[self.grid.at(*self._edge_site(x, y, horizontal))]

    def is_segment(self, x: int, y: int, horizontal: bool) -> bool:
        return self.edge(x, y, horizontal) == Edge.LINE

    def is_blocked(self, x: int, y: int, horizontal: bool) -> bool:
        return self.edge(x, y, horizontal) == Edge.BLOCKED

    def get_corner_marker(self, x: int, y: int) -> InOut:
        """Inside/outside marker of the corner below-right of cell (x, y)."""
        self._check_cell(x, y)
        return _INOUT_BY_FEATURE[self.grid.at(2 * y + 2, 2 * x + 2)]

    def validity(self) -> Validity:
        return check_validity(self.grid.data)

    def clear(self):
        """Remove every circle and all derived state."""
        self.state = BoardState(FeatureGrid(self.width, self.height))

    # ==========================================================================
    # Solving
    # ==========================================================================

    def run_propagation(self, log: Log = print) -> Outcome:
        """
        Clear derived state and propagate from every circle.

        Returns:
            Outcome of the propagation run
        """
        self.state.reset()
        outcome = propagate(self.state, self.library)
        if outcome == Outcome.CONTRADICTION:
            log("Contradiction found during constraint propagation.")
        else:
            log("Constraints propagated.")
        return outcome

    def solve(self, log: Log = print, *,
              depth: SolveDepth = SolveDepth.SEARCH,
              receipt_dir: Optional[str] = None) -> SolveReceipt:
        """
        Solve at the chosen depth.

        Args:
            log: Sink for progress messages
            depth: NONE clears derived state, CONSTRAINTS propagates,
                   SEARCH propagates then runs the shallow search
            receipt_dir: If given, append the receipt to receipt_dir/receipts.jsonl

        Returns:
            SolveReceipt describing the run
        """
        start = time.perf_counter()
        stats = {"passes": 0, "trials": 0, "forced": 0}

        if depth == SolveDepth.NONE:
            self.state.reset()
            outcome = Outcome.NO_CHANGE
        else:
            outcome = self.run_propagation(log)
            if depth >= SolveDepth.SEARCH and outcome != Outcome.CONTRADICTION:
                stats = shallow_search(self.state, self.library)
                if stats["outcome"] != Outcome.NO_CHANGE:
                    outcome = stats["outcome"]

        elapsed = time.perf_counter() - start
        validity = self.validity()
        log(f"Finished searching at depth {DEPTH_LABELS[depth]} in {elapsed:.3f}s.")

        receipt = SolveReceipt(
            depth=depth.name,
            outcome=outcome.value,
            validity=validity.value,
            elapsed=elapsed,
            passes=stats["passes"],
            trials=stats["trials"],
            forced=stats["forced"],
            board_sha=board_sha(self.grid.data),
            summary=summarize(depth.name, outcome.value, validity.value, stats["forced"]),
        )
        log(receipt.summary)

        if receipt_dir is not None:
            log_receipt(receipt.to_record(), out_dir=receipt_dir)
        return receipt

    # ==========================================================================
    # Display
    # ==========================================================================

    def render(self) -> str:
        return self.grid.render()

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"MasyuBoard({self.width}x{self.height}, circles={len(self.grid.clue_coords())})"
