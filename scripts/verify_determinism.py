#!/usr/bin/env python3
"""
Determinism verification for the Masyu solver.

Checks:
1. Same puzzle -> same board hash across repeated solves
2. Shuffled propagation seed orders -> same fixpoint
3. Propagating a propagated board changes nothing

Usage:
    PYTHONPATH=src python scripts/verify_determinism.py
"""

import random
import sys
import os
import numpy as np

# Add src to path if not already there
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from masyu_solver import MasyuBoard, BoardState, Outcome, propagate

PUZZLES = {
    "corners_4x4": ["Q..Q",
                    "....",
                    "....",
                    "Q..Q"],
    "mixed_6x6": ["..O...",
                  "Q....O",
                  "..Q...",
                  "...O..",
                  "O....Q",
                  "...O.."],
}


def quiet(_msg):
    pass


def check_solve_determinism():
    """Same puzzle produces the same final board across runs."""
    print("Check 1: Repeated solves")

    ok = True
    for name, rows in PUZZLES.items():
        shas = {MasyuBoard.from_rows(rows).solve(log=quiet).board_sha for _ in range(5)}
        same = len(shas) == 1
        ok = ok and same
        print(f"  {name}: {'PASS - identical' if same else 'FAIL - different boards'}")
    return ok


def check_seed_order():
    """Propagation fixpoint does not depend on the order circles are seeded."""
    print("\nCheck 2: Shuffled seed orders")

    ok = True
    rng = random.Random(1)
    for name, rows in PUZZLES.items():
        board = MasyuBoard.from_rows(rows)
        reference = board.state.copy()
        if propagate(reference, board.library) == Outcome.CONTRADICTION:
            print(f"  {name}: SKIP - contradiction")
            continue

        seeds = board.grid.clue_coords()
        same = True
        for _ in range(10):
            rng.shuffle(seeds)
            trial = board.state.copy()
            propagate(trial, board.library, seeds=list(seeds))
            same = same and np.array_equal(trial.grid.data, reference.grid.data)
        ok = ok and same
        print(f"  {name}: {'PASS - same fixpoint' if same else 'FAIL - order dependent'}")
    return ok


def check_idempotence():
    """A second propagation over the fixpoint is a no-op."""
    print("\nCheck 3: Idempotence")

    ok = True
    for name, rows in PUZZLES.items():
        board = MasyuBoard.from_rows(rows)
        state = BoardState(board.grid.copy())
        first = propagate(state, board.library)
        if first == Outcome.CONTRADICTION:
            print(f"  {name}: SKIP - contradiction")
            continue
        second = propagate(state, board.library)
        same = second == Outcome.NO_CHANGE
        ok = ok and same
        print(f"  {name}: {'PASS - no change' if same else 'FAIL - ' + second.value}")
    return ok


def main():
    print("=" * 60)
    print("MASYU SOLVER DETERMINISM VERIFICATION")
    print("=" * 60)

    checks = [
        check_solve_determinism,
        check_seed_order,
        check_idempotence,
    ]

    results = [check() for check in checks]

    print("\n" + "=" * 60)
    print(f"OVERALL: {sum(results)}/{len(results)} checks passed")
    print("=" * 60)

    if all(results):
        print("\n✓ Solver is DETERMINISTIC")
        return 0
    else:
        print("\n✗ Some checks failed - review implementation")
        return 1


if __name__ == "__main__":
    sys.exit(main())
