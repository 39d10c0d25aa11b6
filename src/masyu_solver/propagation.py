#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Propagation Engine
==================================

Worklist propagation of the pattern library over a BoardState:
- every placed feature is enqueued once
- popped sites look up the patterns triggered by their (position, feature)
- a matching pattern writes its assignments into EMPTY sites only
- a clash with an already-decided site ends the run with CONTRADICTION

Writes are monotone (EMPTY -> decided), so the fixpoint does not depend on
the order sites are processed. Callers that need to undo a run snapshot the
state first and restore it afterwards.
"""

from collections import deque
from typing import Deque, Iterable, Optional

from .types import Coord, Feature, Outcome
from .grid import FeatureGrid
from .loops import LoopTracker, LoopContradiction
from .patterns import PatternLibrary


# ==============================================================================
# Board State
# ==============================================================================

class BoardState:
    """
    Everything a trial can change: the feature grid and the loop tracker.

    The pattern library and the tracker's neighbor table are shared read-only
    and are not part of a snapshot.
    """

    def __init__(self, grid: FeatureGrid, loops: Optional[LoopTracker] = None):
        self.grid = grid
        self.loops = loops if loops is not None else LoopTracker(grid.rows, grid.cols)

    def copy(self) -> 'BoardState':
        """Deep copy for backup before a trial."""
        return BoardState(self.grid.copy(), self.loops.copy())

    def restore(self, backup: 'BoardState'):
        """Swap the backup's contents in; the backup must not be reused."""
        self.grid = backup.grid
        self.loops = backup.loops

    def reset(self):
        """Drop derived features and all fragments; keep circles and border."""
        self.grid.clear_derived()
        self.loops = LoopTracker(self.grid.rows, self.grid.cols)


# ==============================================================================
# Engine
# ==============================================================================

def _circle_off_loop(grid: FeatureGrid) -> Optional[Coord]:
    """First circle (row-major) with no segment on any side, or None."""
    data = grid.data
    for r, c in grid.clue_coords():
        if not any(data[r + dr, c + dc] == Feature.LINE for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1))):
            return (r, c)
    return None


def _assign(state: BoardState, queue: Deque[Coord], site: Coord, feature: Feature):
    """Write one feature, enqueue it, and block any closing sites it creates."""
    data = state.grid.data
    data[site] = feature
    queue.append(site)
    if feature == Feature.LINE:
        for s in state.loops.add_segment(site):
            if data[s] == Feature.EMPTY:
                data[s] = Feature.BLOCKED
                queue.append(s)
        if state.loops.closed:
            missed = _circle_off_loop(state.grid)
            if missed is not None:
                raise LoopContradiction(f"loop closed at {site} without visiting circle {missed}")


def _drain(state: BoardState, library: PatternLibrary, queue: Deque[Coord]):
    """
    Run the worklist to exhaustion.

    Returns:
        (contradiction, changed)
    """
    data = state.grid.data
    changed = False
    while queue:
        r, c = queue.popleft()
        for pattern in library.lookup(r, c, data[r, c]):
            if not all(data[r + dr, c + dc] == f for dr, dc, f in pattern.check):
                continue
            for dr, dc, f in pattern.assign:
                site = (r + dr, c + dc)
                current = data[site]
                if current == Feature.EMPTY:
                    _assign(state, queue, site, f)
                    changed = True
                elif current != f:
                    return True, changed
    return False, changed


def propagate(state: BoardState, library: PatternLibrary,
              seeds: Optional[Iterable[Coord]] = None) -> Outcome:
    """
    Propagate the pattern library to a fixpoint.

    Args:
        state: Board state, modified in place
        library: Pattern library for the board's size
        seeds: Sites to start from (default: every circle, row-major)

    Returns:
        Outcome.NO_CHANGE, Outcome.PROGRESS or Outcome.CONTRADICTION
    """
    if seeds is None:
        seeds = state.grid.clue_coords()
    queue = deque(seeds)
    try:
        contradiction, changed = _drain(state, library, queue)
    except LoopContradiction:
        return Outcome.CONTRADICTION
    if contradiction:
        return Outcome.CONTRADICTION
    return Outcome.PROGRESS if changed else Outcome.NO_CHANGE


def assume(state: BoardState, library: PatternLibrary, site: Coord, feature: Feature) -> Outcome:
    """
    Commit one feature at `site` and propagate from it.

    A site already holding `feature` is propagated from without a write; a
    site holding anything else is an immediate contradiction.
    """
    current = state.grid.data[site]
    queue: Deque[Coord] = deque()
    try:
        if current == feature:
            queue.append(site)
            changed = False
        elif current != Feature.EMPTY:
            return Outcome.CONTRADICTION
        else:
            _assign(state, queue, site, feature)
            changed = True
        contradiction, more = _drain(state, library, queue)
    except LoopContradiction:
        return Outcome.CONTRADICTION
    if contradiction:
        return Outcome.CONTRADICTION
    return Outcome.PROGRESS if (changed or more) else Outcome.NO_CHANGE
