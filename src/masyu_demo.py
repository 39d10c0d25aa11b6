#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MASYU DEMO: Pattern Propagation + Shallow Search (with Receipts)
==================================================================

What this file is:
------------------
A runnable walk-through of the solver on a few small puzzles. Each puzzle is
solved at every depth so you can see what the pattern library deduces alone
and what one level of trial-and-propagate adds.

Board legend (doubled grid):
----------------------------
    Q black circle   O white circle   - segment   X no segment
    v inside corner  ^ outside corner . undecided

Run:
-----
    python src/masyu_demo.py [--receipts DIR]

Uses only numpy + standard lib.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from masyu_solver import MasyuBoard, SolveDepth

DEMO_PUZZLES = [
    ("Corner blacks", ["Q..Q",
                       "....",
                       "....",
                       "Q..Q"]),
    ("White row", [".....",
                   ".OOO.",
                   ".....",
                   ".....",
                   "....."]),
    ("Mixed 6x6", ["..O...",
                   "Q....O",
                   "..Q...",
                   "...O..",
                   "O....Q",
                   "...O.."]),
]


def run_demo(receipt_dir=None):
    for name, rows in DEMO_PUZZLES:
        print("=" * 60)
        print(f"{name} ({len(rows[0])}x{len(rows)})")
        print("=" * 60)
        for depth in (SolveDepth.CONSTRAINTS, SolveDepth.SEARCH):
            board = MasyuBoard.from_rows(rows)
            receipt = board.solve(depth=depth, receipt_dir=receipt_dir)
            print(board.render())
            print(f"  validity={receipt.validity}  trials={receipt.trials}  "
                  f"forced={receipt.forced}  sha={receipt.board_sha[:12]}")
            print()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Masyu solver demo")
    parser.add_argument("--receipts", default=None, help="directory for receipts.jsonl")
    args = parser.parse_args()
    run_demo(args.receipts)
