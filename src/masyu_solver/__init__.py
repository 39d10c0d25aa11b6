"""
Masyu Solver - Pattern Propagation Approach

Deduces a Masyu loop from its circles with locally triggered ASCII patterns,
a loop connectivity tracker, and one level of trial-and-propagate search.
"""

from .types import (
    Grid, Coord, Feature, Circle, Edge, InOut, Outcome, Validity, SolveDepth,
    site_kind,
)
from .grid import FeatureGrid
from .symmetry import ROT, FLIP, D4, dihedral_group
from .patterns import (
    TEMPLATES, Pattern, PatternLibrary, PatternError,
    parse_template, compile_template, orientations,
)
from .loops import LoopTracker, LoopContradiction, path_neighbors
from .propagation import BoardState, propagate, assume
from .search import shallow_search, DEFAULT_MAX_PASSES
from .validity import check_validity, line_components
from .receipts import SolveReceipt, board_sha, log_receipt
from .board import MasyuBoard

__all__ = [
    # Types
    'Grid', 'Coord', 'Feature', 'Circle', 'Edge', 'InOut', 'Outcome',
    'Validity', 'SolveDepth', 'site_kind',

    # Grid
    'FeatureGrid',

    # Symmetry
    'ROT', 'FLIP', 'D4', 'dihedral_group',

    # Patterns
    'TEMPLATES', 'Pattern', 'PatternLibrary', 'PatternError',
    'parse_template', 'compile_template', 'orientations',

    # Loop tracking
    'LoopTracker', 'LoopContradiction', 'path_neighbors',

    # Engine
    'BoardState', 'propagate', 'assume',
    'shallow_search', 'DEFAULT_MAX_PASSES',

    # Validity & receipts
    'check_validity', 'line_components',
    'SolveReceipt', 'board_sha', 'log_receipt',

    # Facade
    'MasyuBoard',
]
