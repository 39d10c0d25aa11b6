#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Validity Check
==============================

Judge a (partially) filled board:
- INVALID: some committed segment or circle breaks a rule
- VALID: nothing broken yet, loop not finished
- COMPLETE: a single closed loop through every circle
"""

from collections import deque
from typing import List

from .types import Grid, Coord, Feature, Validity

DIRS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


# =============================================================================
# Per-cell Rules
# =============================================================================

def cell_arms(g: Grid, r: int, c: int) -> List[Coord]:
    """Directions (dr, dc) in which the cell at (r, c) has a segment."""
    return [(dr, dc) for dr, dc in DIRS if g[r + dr, c + dc] == Feature.LINE]


def _beyond(g: Grid, r: int, c: int, dr: int, dc: int) -> int:
    """Edge on the far side of the neighbouring cell, straight on; off-board reads BLOCKED."""
    rr, cc = r + 3 * dr, c + 3 * dc
    H, W = g.shape
    if not (0 <= rr < H and 0 <= cc < W):
        return Feature.BLOCKED
    return g[rr, cc]


def _cell_broken(g: Grid, r: int, c: int) -> bool:
    arms = cell_arms(g, r, c)
    unknown = sum(1 for dr, dc in DIRS if g[r + dr, c + dc] == Feature.EMPTY)
    circle = g[r, c]

    if len(arms) > 2:
        return True
    if len(arms) == 1 and unknown == 0:
        return True
    if circle in (Feature.BLACK, Feature.WHITE) and not arms and unknown == 0:
        return True

    straight = len(arms) == 2 and arms[0][0] == -arms[1][0] and arms[0][1] == -arms[1][1]
    if circle == Feature.BLACK:
        if straight:
            return True
        for dr, dc in arms:
            if _beyond(g, r, c, dr, dc) == Feature.BLOCKED:
                return True
            # the neighbouring cell must not turn
            for nr, nc in cell_arms(g, r + 2 * dr, c + 2 * dc):
                if nr * dr + nc * dc == 0:
                    return True
    elif circle == Feature.WHITE:
        if len(arms) == 2 and not straight:
            return True
        if straight and all(_beyond(g, r, c, dr, dc) == Feature.LINE for dr, dc in arms):
            return True
    return False


# =============================================================================
# Line Components
# =============================================================================

def line_components(g: Grid) -> List[List[Coord]]:
    """Cells joined by segments, BFS in row-major seed order; bare cells omitted."""
    H, W = g.shape
    seen = set()
    comps = []
    for r in range(1, H, 2):
        for c in range(1, W, 2):
            if (r, c) in seen or not cell_arms(g, r, c):
                continue
            q = deque([(r, c)])
            seen.add((r, c))
            cells = [(r, c)]
            while q:
                rr, cc = q.popleft()
                for dr, dc in cell_arms(g, rr, cc):
                    nxt = (rr + 2 * dr, cc + 2 * dc)
                    if nxt not in seen:
                        seen.add(nxt)
                        q.append(nxt)
                        cells.append(nxt)
            comps.append(cells)
    return comps


def check_validity(g: Grid) -> Validity:
    """
    Classify the board.

    Args:
        g: Doubled-resolution feature array

    Returns:
        Validity.INVALID, Validity.VALID or Validity.COMPLETE
    """
    H, W = g.shape
    circles = set()
    for r in range(1, H, 2):
        for c in range(1, W, 2):
            if g[r, c] in (Feature.BLACK, Feature.WHITE):
                circles.add((r, c))
            if _cell_broken(g, r, c):
                return Validity.INVALID

    comps = line_components(g)
    closed = [cells for cells in comps if all(len(cell_arms(g, r, c)) == 2 for r, c in cells)]
    if not closed:
        return Validity.VALID
    if len(comps) > 1:
        return Validity.INVALID
    if not circles <= set(closed[0]):
        return Validity.INVALID
    return Validity.COMPLETE
