"""
Tests for the shallow search driver and the validity check.
"""

import sys
import os

import numpy as np

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from masyu_solver.types import Feature, Outcome, Validity
from masyu_solver.grid import FeatureGrid
from masyu_solver.patterns import PatternLibrary
from masyu_solver.propagation import BoardState, propagate
from masyu_solver.search import shallow_search
from masyu_solver.validity import check_validity, line_components


# ==============================================================================
# Helper Functions
# ==============================================================================

def make_corner_state():
    grid = FeatureGrid(4, 4)
    for r, c in [(1, 1), (1, 7), (7, 1), (7, 7)]:
        grid.data[r, c] = Feature.BLACK
    state = BoardState(grid)
    lib = PatternLibrary.for_size(grid.rows, grid.cols)
    propagate(state, lib)
    return state, lib


def make_grid(size, lines=(), blocked=(), circles=()):
    """Raw feature array with segments, absences and circles written directly."""
    g = FeatureGrid(size, size).data
    for site in lines:
        g[site] = Feature.LINE
    for site in blocked:
        g[site] = Feature.BLOCKED
    for r, c, f in circles:
        g[r, c] = f
    return g


# ==============================================================================
# Shallow Search
# ==============================================================================

def test_search_blocks_inner_edges():
    state, lib = make_corner_state()
    stats = shallow_search(state, lib)

    assert stats["outcome"] == Outcome.PROGRESS, f"Got {stats}"
    assert stats["forced"] == 1, f"Got {stats}"
    assert stats["passes"] == 2, f"Got {stats}"
    assert stats["trials"] == 1, f"Got {stats}"
    for site in [(3, 4), (4, 3), (4, 5), (5, 4)]:
        assert state.grid.data[site] == Feature.BLOCKED, f"Inner edge {site} not blocked"
    assert state.grid.data[4, 4] == Feature.IN


def test_search_respects_max_passes():
    state, lib = make_corner_state()
    stats = shallow_search(state, lib, max_passes=1)
    assert stats["passes"] == 1
    assert stats["forced"] == 1


def test_search_on_decided_board_is_noop():
    state, lib = make_corner_state()
    shallow_search(state, lib)
    snapshot = state.grid.data.copy()
    stats = shallow_search(state, lib)
    assert stats == {"passes": 1, "trials": 0, "forced": 0, "outcome": Outcome.NO_CHANGE}
    assert np.array_equal(state.grid.data, snapshot)


def test_trials_leave_no_trace():
    grid = FeatureGrid(3, 3)
    state = BoardState(grid)
    lib = PatternLibrary.for_size(grid.rows, grid.cols)
    stats = shallow_search(state, lib)
    # nothing contradicts on an empty board
    assert stats["forced"] == 0
    assert stats["trials"] == len(list(grid.interior_edges()))
    assert state.grid.count_empty_edges() == stats["trials"]
    assert state.loops.active == 0


# ==============================================================================
# Validity
# ==============================================================================

def test_empty_board_valid():
    assert check_validity(make_grid(3)) == Validity.VALID


def test_corner_loop_complete():
    state, _ = make_corner_state()
    assert check_validity(state.grid.data) == Validity.COMPLETE


def test_black_straight_invalid():
    g = make_grid(5, lines=[(5, 4), (5, 6)], circles=[(5, 5, Feature.BLACK)])
    assert check_validity(g) == Validity.INVALID


def test_black_arm_into_wall_invalid():
    # arm to the right, the next cell cannot continue straight
    g = make_grid(5, lines=[(5, 6)], blocked=[(5, 8)], circles=[(5, 5, Feature.BLACK)])
    assert check_validity(g) == Validity.INVALID


def test_black_neighbour_turning_invalid():
    # small loop around the top-left 2x2 block: both cells next to the circle turn
    g = make_grid(3, lines=[(1, 2), (2, 3), (3, 2), (2, 1)], circles=[(1, 1, Feature.BLACK)])
    assert check_validity(g) == Validity.INVALID, "Black arm must run straight through the next cell"


def test_black_arms_running_straight_valid():
    g = make_grid(5, lines=[(5, 6), (5, 8), (6, 5), (8, 5)], circles=[(5, 5, Feature.BLACK)])
    assert check_validity(g) == Validity.VALID


def test_white_turn_invalid():
    g = make_grid(5, lines=[(5, 4), (4, 5)], circles=[(5, 5, Feature.WHITE)])
    assert check_validity(g) == Validity.INVALID


def test_white_straight_both_sides_invalid():
    g = make_grid(5, lines=[(5, 2), (5, 4), (5, 6), (5, 8)], circles=[(5, 5, Feature.WHITE)])
    assert check_validity(g) == Validity.INVALID


def test_dead_end_invalid():
    g = make_grid(3, lines=[(3, 4)], blocked=[(2, 5), (3, 6), (4, 5)])
    assert check_validity(g) == Validity.INVALID


def test_three_lines_invalid():
    g = make_grid(3, lines=[(3, 2), (3, 4), (2, 3)])
    assert check_validity(g) == Validity.INVALID


def test_small_loop_missing_circle_invalid():
    loop = [(3, 4), (4, 5), (5, 4), (4, 3)]
    g = make_grid(4, lines=loop, circles=[(7, 7, Feature.WHITE)])
    assert check_validity(g) == Validity.INVALID


def test_small_loop_without_circles_complete():
    loop = [(3, 4), (4, 5), (5, 4), (4, 3)]
    g = make_grid(4, lines=loop)
    assert check_validity(g) == Validity.COMPLETE


def test_line_components():
    g = make_grid(4, lines=[(1, 2), (1, 4), (7, 2)])
    comps = line_components(g)
    assert [len(c) for c in comps] == [3, 2], f"Got {comps}"
