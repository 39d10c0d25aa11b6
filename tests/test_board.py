#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Board Tests
===========================

Tests for the MasyuBoard facade: clue editing, queries, solve depths,
receipts and rendering.
"""

import json
import os
import sys
import tempfile

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from masyu_solver import (
    MasyuBoard, Circle, Edge, InOut, Outcome, SolveDepth, Validity, PatternLibrary,
)


def make_corner_board():
    return MasyuBoard.from_rows(["Q..Q",
                                 "....",
                                 "....",
                                 "Q..Q"])


def quiet(_msg):
    pass


# ==============================================================================
# Construction & Clues
# ==============================================================================

def test_bad_dimensions():
    with pytest.raises(ValueError):
        MasyuBoard(0, 3)


def test_library_size_mismatch():
    with pytest.raises(ValueError):
        MasyuBoard(3, 3, library=PatternLibrary.for_size(9, 9))


def test_from_rows():
    board = MasyuBoard.from_rows([".O", "Q."])
    assert board.width == 2 and board.height == 2
    assert board.get_circle(1, 0) == Circle.WHITE
    assert board.get_circle(0, 1) == Circle.BLACK
    assert board.get_circle(0, 0) == Circle.NONE


def test_from_rows_rejects_bad_input():
    with pytest.raises(ValueError):
        MasyuBoard.from_rows(["Q.", "."])
    with pytest.raises(ValueError):
        MasyuBoard.from_rows(["Q#"])
    with pytest.raises(ValueError):
        MasyuBoard.from_rows([])


def test_set_circle_toggles():
    board = MasyuBoard(3, 3)
    board.set_circle(1, 2, Circle.WHITE)
    assert board.get_circle(1, 2) == Circle.WHITE
    board.set_circle(1, 2, Circle.BLACK)
    assert board.get_circle(1, 2) == Circle.NONE, "Occupied cell should be cleared"
    board.set_circle(1, 2, Circle.BLACK)
    assert board.get_circle(1, 2) == Circle.BLACK


def test_out_of_range():
    board = MasyuBoard(3, 2)
    with pytest.raises(ValueError):
        board.set_circle(3, 0, Circle.BLACK)
    with pytest.raises(ValueError):
        board.get_circle(0, 2)
    with pytest.raises(ValueError):
        board.is_segment(-1, 0, True)
    with pytest.raises(ValueError):
        board.get_corner_marker(0, 5)


def test_border_edges_blocked():
    board = MasyuBoard(3, 2)
    assert board.is_blocked(2, 0, True), "Right edge of last column is the border"
    assert board.is_blocked(1, 1, False), "Bottom edge of last row is the border"
    assert board.edge(0, 0, True) == Edge.UNKNOWN
    assert board.get_corner_marker(2, 1) == InOut.OUT
    assert board.get_corner_marker(0, 0) == InOut.UNKNOWN


# ==============================================================================
# Propagation & Solve
# ==============================================================================

def test_run_propagation_logs():
    board = make_corner_board()
    messages = []
    outcome = board.run_propagation(log=messages.append)
    assert outcome == Outcome.PROGRESS
    assert messages == ["Constraints propagated."], f"Got {messages}"
    assert board.is_segment(0, 0, True)
    assert board.is_segment(0, 0, False)
    assert board.validity() == Validity.COMPLETE


def test_run_propagation_reports_contradiction():
    board = MasyuBoard.from_rows(["OOO..", ".....", ".....", ".....", "....."])
    messages = []
    assert board.run_propagation(log=messages.append) == Outcome.CONTRADICTION
    assert messages == ["Contradiction found during constraint propagation."]


def test_run_propagation_twice_same_board():
    board = make_corner_board()
    board.run_propagation(log=quiet)
    first = board.render()
    board.run_propagation(log=quiet)
    assert board.render() == first


def test_solve_corner_blacks():
    board = make_corner_board()
    messages = []
    receipt = board.solve(log=messages.append)

    assert receipt.validity == 'COMPLETE', f"Got {receipt}"
    assert receipt.outcome == 'progress'
    assert receipt.forced == 1
    assert receipt.passes == 2
    assert receipt.depth == 'SEARCH'
    assert messages[0] == "Constraints propagated."
    assert messages[1].startswith("Finished searching at depth 1 in ")

    assert board.is_segment(0, 0, True)
    assert board.is_blocked(1, 0, False)
    assert board.is_blocked(1, 1, True)
    assert board.get_corner_marker(1, 1) == InOut.IN
    assert board.get_corner_marker(0, 0) == InOut.IN
    assert board.get_corner_marker(3, 3) == InOut.OUT


def test_solve_constraints_only():
    board = make_corner_board()
    receipt = board.solve(log=quiet, depth=SolveDepth.CONSTRAINTS)
    assert receipt.passes == 0 and receipt.trials == 0
    assert board.edge(1, 1, True) == Edge.UNKNOWN, "Inner edge needs search"


def test_solve_depth_none_clears():
    board = make_corner_board()
    board.solve(log=quiet)
    receipt = board.solve(log=quiet, depth=SolveDepth.NONE)
    assert receipt.outcome == 'no_change'
    assert board.edge(0, 0, True) == Edge.UNKNOWN
    assert board.get_circle(0, 0) == Circle.BLACK


def test_solve_is_deterministic():
    a = make_corner_board().solve(log=quiet)
    b = make_corner_board().solve(log=quiet)
    assert a.board_sha == b.board_sha


def test_solve_writes_receipt():
    board = make_corner_board()
    with tempfile.TemporaryDirectory() as tmp:
        board.solve(log=quiet, receipt_dir=tmp)
        board.solve(log=quiet, receipt_dir=tmp)
        with open(os.path.join(tmp, "receipts.jsonl")) as f:
            records = [json.loads(line) for line in f]
    assert len(records) == 2
    assert records[0]["validity"] == 'COMPLETE'
    assert records[0]["board_sha"] == records[1]["board_sha"]


def test_clear_removes_everything():
    board = make_corner_board()
    board.solve(log=quiet)
    board.clear()
    assert board.get_circle(0, 0) == Circle.NONE
    assert board.edge(0, 0, True) == Edge.UNKNOWN


# ==============================================================================
# Rendering
# ==============================================================================

def test_render_empty():
    board = MasyuBoard(2, 1)
    assert board.render() == "^X^X^\nX...X\n^X^X^"


def test_render_with_circle():
    board = MasyuBoard(2, 1)
    board.set_circle(0, 0, Circle.BLACK)
    assert str(board).split("\n")[1] == "XQ..X"


def run_all_tests():
    """Run all board tests."""
    print("Running Masyu Board Tests...")
    print("=" * 50)
    tests = [v for k, v in sorted(globals().items()) if k.startswith("test_") and callable(v)]
    for t in tests:
        t()
        print(f"✓ {t.__name__} passed")
    print("=" * 50)
    print(f"All {len(tests)} tests passed!")


if __name__ == "__main__":
    run_all_tests()
