#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Type Definitions
================================

Core types used throughout the solver:
- Grid: 2D uint8 array of feature codes on the doubled-resolution board
- Feature: storage code of a single board site
- Circle / Edge / InOut: public per-axis views of a site
- Outcome: result of a propagation run
"""

import numpy as np
from enum import Enum, IntEnum
from typing import Tuple

# =============================================================================
# Core Types
# =============================================================================

Grid = np.ndarray          # dtype=uint8, shape (2H+1, 2W+1)
Coord = Tuple[int, int]    # (r, c) on the doubled board


class Feature(IntEnum):
    """Code stored at one board site. Values are disjoint across axes."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2
    LINE = 3
    BLOCKED = 4
    IN = 5
    OUT = 6
    ANY_CLUE = 7  # template wildcard only, never stored on a board


class Circle(Enum):
    NONE = '.'
    BLACK = 'Q'
    WHITE = 'O'


class Edge(Enum):
    UNKNOWN = 0
    LINE = 1
    BLOCKED = 2


class InOut(Enum):
    UNKNOWN = 0
    IN = 1
    OUT = 2


class Outcome(Enum):
    """Result of running the propagation engine to a fixpoint."""
    NO_CHANGE = 'no_change'
    PROGRESS = 'progress'
    CONTRADICTION = 'contradiction'


class Validity(Enum):
    INVALID = 'INVALID'
    VALID = 'VALID'
    COMPLETE = 'COMPLETE'


class SolveDepth(IntEnum):
    """How far `MasyuBoard.solve` goes."""
    NONE = 0          # clear derived state only
    CONSTRAINTS = 1   # pattern propagation only
    SEARCH = 2        # propagation + one level of trial-and-propagate


# Template / rendering alphabet
CHARS = {
    Feature.EMPTY: '.',
    Feature.BLACK: 'Q',
    Feature.WHITE: 'O',
    Feature.LINE: '-',
    Feature.BLOCKED: 'X',
    Feature.IN: 'v',
    Feature.OUT: '^',
    Feature.ANY_CLUE: '*',
}
FEATURE_BY_CHAR = {ch: f for f, ch in CHARS.items()}

CIRCLE_FEATURES = {
    Circle.BLACK: Feature.BLACK,
    Circle.WHITE: Feature.WHITE,
}

# =============================================================================
# Site Kinds
# =============================================================================

CLUE_SITE = 'clue'
EDGE_SITE = 'edge'
CORNER_SITE = 'corner'

FEATURE_SITE_KIND = {
    Feature.BLACK: CLUE_SITE,
    Feature.WHITE: CLUE_SITE,
    Feature.ANY_CLUE: CLUE_SITE,
    Feature.LINE: EDGE_SITE,
    Feature.BLOCKED: EDGE_SITE,
    Feature.IN: CORNER_SITE,
    Feature.OUT: CORNER_SITE,
}


def site_kind(r: int, c: int) -> str:
    """Classify a doubled-board coordinate by parity."""
    odd = (r % 2) + (c % 2)
    if odd == 2:
        return CLUE_SITE
    if odd == 1:
        return EDGE_SITE
    return CORNER_SITE


def is_clue_site(r: int, c: int) -> bool:
    return r % 2 == 1 and c % 2 == 1
