"""
Ring Operations
===============

Pure circular rotation transforms on ring sequences.

FORWARD moves the last segment to the front, BACKWARD moves the first
segment to the back. The two are exact inverses.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple


Ring = Tuple[int, ...]


class Direction(Enum):
    """Single-step rotation direction."""
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def inverse(self) -> "Direction":
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD

    @classmethod
    def parse(cls, value) -> "Direction":
        """Accept a Direction or its string value ("forward"/"backward")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Invalid direction {value!r}, expected 'forward' or 'backward'"
            ) from None


def rotate_forward(ring: Sequence[int]) -> Ring:
    """Shift one position forward: [a, b, c] -> [c, a, b]."""
    if len(ring) == 0:
        return tuple(ring)
    return (ring[-1],) + tuple(ring[:-1])


def rotate_backward(ring: Sequence[int]) -> Ring:
    """Shift one position backward: [a, b, c] -> [b, c, a]."""
    if len(ring) == 0:
        return tuple(ring)
    return tuple(ring[1:]) + (ring[0],)


def rotate_step(ring: Sequence[int], direction: Direction) -> Ring:
    """Rotate a ring by exactly one position in the given direction."""
    if direction is Direction.FORWARD:
        return rotate_forward(ring)
    return rotate_backward(ring)


def rotate_by(ring: Sequence[int], steps: int) -> Ring:
    """
    Rotate a ring forward by an arbitrary number of steps.

    Equivalent to applying rotate_forward ``steps`` times. Negative steps
    rotate backward. Only used when shuffling during generation.

    Args:
        ring: Sequence of color indices.
        steps: Number of forward steps.

    Returns:
        The rotated ring.
    """
    n = len(ring)
    if n == 0:
        return tuple(ring)
    k = steps % n
    if k == 0:
        return tuple(ring)
    return tuple(ring[-k:]) + tuple(ring[:-k])


def rotation_offset(ring: Sequence[int], target: Sequence[int]) -> int:
    """
    Find the forward step count that turns ``target`` into ``ring``.

    Args:
        ring: Current ring.
        target: Canonical sequence.

    Returns:
        Smallest r in [0, n) with rotate_by(target, r) == ring, or -1 if
        ring is not a rotation of target.
    """
    if len(ring) != len(target):
        return -1
    ring = tuple(ring)
    for r in range(max(1, len(target))):
        if rotate_by(target, r) == ring:
            return r
    return -1


def min_moves_to_solve(ring: Sequence[int], target: Sequence[int]) -> int:
    """
    Fewest single-step rotations, in either direction, that turn ``ring``
    into ``target``.

    Palettes smaller than the ring repeat colors, so several offsets can
    match; the cheapest one wins.

    Returns:
        Step count in [0, n // 2], or -1 if ring is not a rotation of target.
    """
    if len(ring) != len(target):
        return -1
    n = len(target)
    if n == 0:
        return 0
    ring = tuple(ring)
    best = -1
    for r in range(n):
        if rotate_by(target, r) == ring:
            cost = min(r, n - r)
            if best < 0 or cost < best:
                best = cost
    return best
