"""
Shallow search for the Masyu solver.

One level of trial-and-propagate: every undecided interior edge is tried as a
segment on a snapshot of the board. When the trial contradicts, the edge must
be absent; that is committed, propagated, and the scan restarts.
"""

from typing import Dict, List

from .types import Coord, Feature, Outcome
from .propagation import BoardState, assume, propagate
from .patterns import PatternLibrary


# Upper bound on scans; each scan that does not stop the search forces one edge
DEFAULT_MAX_PASSES = 1000


def _trial_contradicts(state: BoardState, library: PatternLibrary, site: Coord) -> bool:
    backup = state.copy()
    outcome = assume(state, library, site, Feature.LINE)
    state.restore(backup)
    return outcome == Outcome.CONTRADICTION


def shallow_search(state: BoardState,
                   library: PatternLibrary,
                   *,
                   max_passes: int = DEFAULT_MAX_PASSES,
                   verbose: bool = False) -> Dict:
    """
    Force edge absences found by single-segment trials until none remain.

    Args:
        state: Board state after propagation, modified in place
        library: Pattern library for the board's size
        max_passes: Maximum number of full scans
        verbose: Print each forced edge

    Returns:
        stats = {"passes": N, "trials": T, "forced": F, "outcome": Outcome}
        outcome is CONTRADICTION when the committed board itself has no
        solution, PROGRESS when anything was forced, else NO_CHANGE.
    """
    sites: List[Coord] = list(state.grid.interior_edges())
    passes = 0
    trials = 0
    forced = 0

    while passes < max_passes:
        passes += 1
        hit = None
        for site in sites:
            if state.grid.data[site] != Feature.EMPTY:
                continue
            trials += 1
            if _trial_contradicts(state, library, site):
                hit = site
                break

        if hit is None:
            break

        forced += 1
        if verbose:
            print(f"[search] pass {passes}: edge {hit} cannot carry a segment")
        outcome = assume(state, library, hit, Feature.BLOCKED)
        if outcome != Outcome.CONTRADICTION:
            outcome = propagate(state, library)
        if outcome == Outcome.CONTRADICTION:
            return {"passes": passes, "trials": trials, "forced": forced,
                    "outcome": Outcome.CONTRADICTION}

    return {
        "passes": passes,
        "trials": trials,
        "forced": forced,
        "outcome": Outcome.PROGRESS if forced else Outcome.NO_CHANGE,
    }
