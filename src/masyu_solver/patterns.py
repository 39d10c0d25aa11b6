#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Pattern Library
===============================

Local deduction rules written as small before/after ASCII templates over the
board alphabet:

    .  unconstrained         -  segment present
    Q  black circle          X  segment absent
    O  white circle          v  inside the loop
    *  any clue site         ^  outside the loop

Each template is parsed once, expanded by the 8 symmetries of the square,
re-centred on every feature that can trigger it, and indexed by
(position, trigger feature) for O(1) lookup during propagation.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .types import (
    Feature, FEATURE_BY_CHAR, FEATURE_SITE_KIND, site_kind, is_clue_site,
)
from .symmetry import D4

# (r, c, feature, is_assignment)
Entry = Tuple[int, int, Feature, bool]
# (dr, dc, feature)
Offset3 = Tuple[int, int, Feature]


class PatternError(ValueError):
    """A template in the catalogue is malformed."""


# =============================================================================
# Template Catalogue
# =============================================================================

TEMPLATES: Tuple[Tuple[str, str], ...] = (
    # a line into a circle fixes its continuation
    ("....\nQ-..\n....", "..X.\nQ-.-\n..X."),
    ("...\n-O.\n...", ".X.\n-O-\n.X."),
    # a cell walled on two opposite sides passes the line straight on
    ("...\nX*X\n.-.", ".-.\nX.X\n.-."),
    (".X.\nX*.\n.-.", ".X.\nX.-\n.-."),
    # a cell already carrying two lines, or three walls, is done
    (".-.\n-*.\n...", ".-.\n-.X\n.X."),
    (".-.\n.*.\n.-.", ".-.\nX.X\n.-."),
    (".X.\nX*X\n...", ".X.\nX.X\n.X."),
    # black circles pushed away from walls and neighbours
    (".....\nXQ...\n.....", "...X.\nXQ-.-\n...X."),
    (".......\nX..Q...\n.......", ".....X.\nX.XQ-.-\n.....X."),
    (".........\n...Q.Q...\n.........", ".X.....X.\n-.-QXQ-.-\n.X.....X."),
    (".....-\n...Q..\n......", ".X...-\n-.-QX.\n.X...."),
    ("..........\n...Q...O.O\n..........", ".X........\n-.-QX..O.O\n.X........"),
    ("O...O\n.....\n..Q..\n.....\n.....\n.....", "O...O\n..X..\n..Q..\n..-..\n.X.X.\n..-.."),
    # a white circle must turn on at least one side
    ("-.-O...", "-.-O-.X"),
    # white circles forced across by walls and neighbours
    ("...\n.O.\n.X.", ".X.\n-O-\n.X."),
    (".......\n.O.O.O.\n.......", ".-.-.-.\nXOXOXOX\n.-.-.-."),
    (".......\n-..O.O.\n.......", "...-.-.\n-.XOXOX\n...-.-."),
    (".......\n-..O..-\n.......", "...-...\n-.XOX.-\n...-..."),
    # crossing a line flips inside/outside, crossing a wall keeps it
    ("v-.", "v-^"),
    ("^-.", "^-v"),
    ("vX.", "vXv"),
    ("^X.", "^X^"),
    ("v.^", "v-^"),
    ("^.v", "^-v"),
    ("v.v", "vXv"),
    ("^.^", "^X^"),
)


# =============================================================================
# Parsing
# =============================================================================

def parse_template(text: str) -> List[Tuple[int, int, Feature]]:
    """
    Parse one ASCII template into (r, c, feature) triples, skipping '.'.

    Raises:
        PatternError: on ragged lines or an unknown character
    """
    lines = text.split('\n')
    width = len(lines[0])
    out = []
    for r, line in enumerate(lines):
        if len(line) != width:
            raise PatternError(f"Template line {r} has length {len(line)}, expected {width}: {text!r}")
        for c, ch in enumerate(line):
            if ch == '.':
                continue
            if ch not in FEATURE_BY_CHAR:
                raise PatternError(f"Unknown template character {ch!r} in {text!r}")
            out.append((r, c, FEATURE_BY_CHAR[ch]))
    return out


def compile_template(before: str, after: str) -> List[Entry]:
    """
    Combine a before/after pair into one entry list.

    Entries from `before` are preconditions; entries of `after` that are not
    already in `before` are assignments.
    """
    if [len(l) for l in before.split('\n')] != [len(l) for l in after.split('\n')]:
        raise PatternError(f"Template grids differ in shape: {before!r} / {after!r}")
    check = parse_template(before)
    assign = parse_template(after)

    required = {(r, c): f for r, c, f in check}
    entries: List[Entry] = [(r, c, f, False) for r, c, f in check]
    for r, c, f in assign:
        if (r, c) in required:
            if required[(r, c)] != f:
                raise PatternError(f"Template rewrites {required[(r, c)].name} at {(r, c)}: {after!r}")
            continue
        entries.append((r, c, f, True))
    return entries


# =============================================================================
# Orientations
# =============================================================================

def normalize(entries: Sequence[Entry]) -> Tuple[Entry, ...]:
    """Shift so the minimum corner sits at the origin; sort for comparison."""
    r0 = min(e[0] for e in entries)
    c0 = min(e[1] for e in entries)
    return tuple(sorted((r - r0, c - c0, f, s) for r, c, f, s in entries))


def orient(entries: Sequence[Entry], transform) -> Tuple[Entry, ...]:
    moved = []
    for r, c, f, s in entries:
        rr, cc = transform((r, c))
        moved.append((rr, cc, f, s))
    return normalize(moved)


def orientations(entries: Sequence[Entry]) -> List[Tuple[Entry, ...]]:
    """All distinct images of a template under the 8 square symmetries."""
    out: List[Tuple[Entry, ...]] = []
    for transform in D4:
        image = orient(entries, transform)
        if image not in out:
            out.append(image)
    return out


# =============================================================================
# Patterns & Library
# =============================================================================

@dataclass(frozen=True)
class Pattern:
    """
    A rule centred on its trigger feature.

    check:  offsets that must hold exactly the given feature
    assign: offsets to set once every check holds
    """
    check: Tuple[Offset3, ...]
    assign: Tuple[Offset3, ...]


class PatternLibrary:
    """
    Table (r, c, trigger feature) -> patterns, built once per board size.

    Use `PatternLibrary.for_size` to share one instance between boards of the
    same dimensions.
    """

    _cache: Dict[Tuple[int, int], 'PatternLibrary'] = {}

    def __init__(self, rows: int, cols: int, templates: Sequence[Tuple[str, str]] = TEMPLATES):
        self.rows = rows
        self.cols = cols
        self.table: Dict[Tuple[int, int, int], List[Pattern]] = defaultdict(list)
        self.n_orientations = 0
        for before, after in templates:
            self._register(compile_template(before, after))
        self.table = dict(self.table)

    @classmethod
    def for_size(cls, rows: int, cols: int) -> 'PatternLibrary':
        key = (rows, cols)
        if key not in cls._cache:
            cls._cache[key] = cls(rows, cols)
        return cls._cache[key]

    def _register(self, entries: List[Entry]):
        for image in orientations(entries):
            self.n_orientations += 1
            max_r = max(e[0] for e in image)
            max_c = max(e[1] for e in image)
            check = [e for e in image if not e[3]]
            assign = [e for e in image if e[3]]
            star: Optional[Entry] = next((e for e in check if e[2] == Feature.ANY_CLUE), None)

            for tr, tc, tf, _ in check:
                if tf == Feature.ANY_CLUE:
                    continue
                pattern = Pattern(
                    check=tuple((r - tr, c - tc, f) for r, c, f, _ in check
                                if (r, c) != (tr, tc) and f != Feature.ANY_CLUE),
                    assign=tuple((r - tr, c - tc, f) for r, c, f, _ in assign),
                )
                kind = FEATURE_SITE_KIND[tf]
                for r in range(tr, self.rows - (max_r - tr)):
                    for c in range(tc, self.cols - (max_c - tc)):
                        if site_kind(r, c) != kind:
                            continue
                        if star is not None and not is_clue_site(r - tr + star[0], c - tc + star[1]):
                            continue
                        self.table[(r, c, int(tf))].append(pattern)

    def lookup(self, r: int, c: int, feature: int) -> List[Pattern]:
        return self.table.get((r, c, int(feature)), [])

    @property
    def size(self) -> int:
        """Total number of (position, pattern) registrations."""
        return sum(len(v) for v in self.table.values())

    def __repr__(self):
        return f"PatternLibrary({self.rows}x{self.cols}, orientations={self.n_orientations}, entries={self.size})"
