"""
Loop connectivity tracking for the Masyu solver.

Every committed segment belongs to a fragment: a connected stretch of
segments with two open ends. Fragments live in an id-addressed arena
(`ends[fid]`) and each open end site records its fragment in a per-site
`owner` array (0 = not an open end). Interior segments are forgotten.

The tracker only ever sees segments the propagation engine commits; it never
writes to the board itself. It answers with the closing sites that must stay
empty so no fragment closes early while other fragments are still open.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from .types import Coord


class LoopContradiction(Exception):
    """The committed segments cannot be part of a single loop."""


def path_neighbors(rows: int, cols: int) -> Dict[Coord, Tuple[Coord, ...]]:
    """
    Table edge site -> other edge sites touching either of its two cells.

    Args:
        rows, cols: Doubled board dimensions

    Returns:
        Dict keyed by every in-bounds edge site
    """
    table = {}
    for r in range(rows):
        for c in range(cols):
            if (r + c) % 2 != 1:
                continue
            if r % 2 == 1:
                # cells (r, c-1) and (r, c+1)
                cand = [(r, c - 2), (r - 1, c - 1), (r + 1, c - 1),
                        (r, c + 2), (r - 1, c + 1), (r + 1, c + 1)]
            else:
                # cells (r-1, c) and (r+1, c)
                cand = [(r - 2, c), (r - 1, c - 1), (r - 1, c + 1),
                        (r + 2, c), (r + 1, c - 1), (r + 1, c + 1)]
            table[(r, c)] = tuple((rr, cc) for rr, cc in cand if 0 <= rr < rows and 0 <= cc < cols)
    return table


_NEIGHBOR_CACHE: Dict[Tuple[int, int], Dict[Coord, Tuple[Coord, ...]]] = {}


def neighbors_for_size(rows: int, cols: int) -> Dict[Coord, Tuple[Coord, ...]]:
    key = (rows, cols)
    if key not in _NEIGHBOR_CACHE:
        _NEIGHBOR_CACHE[key] = path_neighbors(rows, cols)
    return _NEIGHBOR_CACHE[key]


class LoopTracker:
    """
    Fragment arena plus per-site owner array.

    Attributes:
        owner: int32 array, fragment id of the open end at each site (0 = none)
        ends: ends[fid] = (end_a, end_b), or None once merged away; index 0 unused
        active: number of open fragments
        closed: number of closed loops (at most 1 in a consistent state)
    """

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.owner = np.zeros((rows, cols), dtype=np.int32)
        self.ends: List[Optional[Tuple[Coord, Coord]]] = [None]
        self.active = 0
        self.closed = 0
        self.neighbors = neighbors_for_size(rows, cols)

    def copy(self) -> 'LoopTracker':
        t = LoopTracker.__new__(LoopTracker)
        t.rows, t.cols = self.rows, self.cols
        t.owner = self.owner.copy()
        t.ends = list(self.ends)
        t.active = self.active
        t.closed = self.closed
        t.neighbors = self.neighbors
        return t

    def open_fragments(self) -> List[int]:
        return [fid for fid in range(1, len(self.ends)) if self.ends[fid] is not None]

    def _closing_sites(self, fid: int) -> List[Coord]:
        a, b = self.ends[fid]
        if a == b:
            return []
        near_b = set(self.neighbors[b])
        return [s for s in self.neighbors[a] if s in near_b]

    def add_segment(self, site: Coord) -> List[Coord]:
        """
        Register a newly committed segment.

        Args:
            site: Edge site that just became LINE

        Returns:
            Closing sites to block (may include sites that are no longer empty)

        Raises:
            LoopContradiction: segment after a closed loop, three ends meeting,
                or a premature closure while other fragments are open
        """
        if self.closed:
            raise LoopContradiction(f"segment {site} added after the loop closed")

        matches = []
        for n in self.neighbors[site]:
            fid = int(self.owner[n])
            if fid:
                matches.append((n, fid))

        if len(matches) >= 3:
            raise LoopContradiction(f"{len(matches)} fragment ends meet at {site}")

        if not matches:
            fid = len(self.ends)
            self.ends.append((site, site))
            self.owner[site] = fid
            self.active += 1
            if self.active < 2:
                return []
            out = []
            for other in self.open_fragments():
                out.extend(self._closing_sites(other))
            return out

        if len(matches) == 1:
            n, fid = matches[0]
            a, b = self.ends[fid]
            if a == b:
                self.ends[fid] = (n, site)
            else:
                self.ends[fid] = (b if a == n else a, site)
                self.owner[n] = 0
            self.owner[site] = fid
            return self._closing_sites(fid) if self.active > 1 else []

        (n1, f1), (n2, f2) = matches
        if f1 == f2:
            if self.active > 1:
                raise LoopContradiction(f"fragment {f1} closes at {site} with {self.active - 1} others open")
            self.owner[n1] = 0
            self.owner[n2] = 0
            self.ends[f1] = None
            self.active -= 1
            self.closed += 1
            return []

        far1 = self._far_end(f1, n1)
        far2 = self._far_end(f2, n2)
        self.ends[f1] = (far1, far2)
        self.ends[f2] = None
        self.owner[far1] = f1
        self.owner[far2] = f1
        self.active -= 1
        return self._closing_sites(f1) if self.active > 1 else []

    def _far_end(self, fid: int, near: Coord) -> Coord:
        """Other end of `fid`; clears `near` unless the fragment is a stub."""
        a, b = self.ends[fid]
        if a == b:
            return a
        self.owner[near] = 0
        return b if a == near else a

    def __repr__(self):
        return f"LoopTracker(active={self.active}, closed={self.closed})"
