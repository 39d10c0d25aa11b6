#!/usr/bin/env python3
"""Masyu Solver - Symmetry Operators on template offsets"""

from typing import Callable, List, Tuple

Offset = Tuple[int, int]
Transform = Callable[[Offset], Offset]


def rot90(p: Offset) -> Offset:
    """Rotate offset 90 degrees counterclockwise (same sense as np.rot90)."""
    r, c = p
    return (-c, r)


def rot180(p: Offset) -> Offset:
    r, c = p
    return (-r, -c)


def rot270(p: Offset) -> Offset:
    r, c = p
    return (c, -r)


def flip_h(p: Offset) -> Offset:
    """Mirror left-right."""
    r, c = p
    return (r, -c)


def flip_v(p: Offset) -> Offset:
    """Mirror up-down."""
    r, c = p
    return (-r, c)


def ROT(k: int) -> Transform:
    """Rotate by k*90 degrees counterclockwise."""
    assert k in (0, 1, 2, 3), f"k must be in {{0,1,2,3}}, got {k}"
    if k == 0:
        return lambda p: p
    elif k == 1:
        return rot90
    elif k == 2:
        return rot180
    else:
        return rot270


def FLIP(axis: str) -> Transform:
    """Mirror along specified axis."""
    assert axis in ('h', 'v'), f"axis must be 'h' or 'v', got {axis}"
    return flip_h if axis == 'h' else flip_v


def compose(p: Transform, q: Transform) -> Transform:
    """Compose two transforms: (p; q)(z) = q(p(z))."""
    return lambda z: q(p(z))


def dihedral_group() -> List[Transform]:
    """The 8 symmetries of the square: four rotations, then the mirror after each."""
    rotations = [ROT(k) for k in range(4)]
    return rotations + [compose(rot, FLIP('h')) for rot in rotations]


D4 = dihedral_group()
