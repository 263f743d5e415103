"""
Tests for ring rotation transforms.
"""

import pytest
from collections import Counter

from pookalam.puzzle_core.ring_ops import (
    Direction,
    rotate_forward,
    rotate_backward,
    rotate_step,
    rotate_by,
    rotation_offset,
    min_moves_to_solve,
)


RINGS = [
    (0,),
    (0, 1),
    (0, 1, 2, 3, 4, 5),
    (0, 1, 2, 0, 1, 2, 0, 1),
    (3, 3, 1, 0, 7, 2, 9, 9, 4, 1),
]


class TestSingleStep:
    """Test one-step rotations."""

    def test_forward_moves_last_to_front(self):
        assert rotate_forward((0, 1, 2, 3)) == (3, 0, 1, 2)

    def test_backward_moves_first_to_back(self):
        assert rotate_backward((0, 1, 2, 3)) == (1, 2, 3, 0)

    @pytest.mark.parametrize("ring", RINGS)
    def test_directions_are_inverses(self, ring):
        """Forward then backward (and vice versa) restores the ring."""
        assert rotate_backward(rotate_forward(ring)) == ring
        assert rotate_forward(rotate_backward(ring)) == ring

    @pytest.mark.parametrize("ring", RINGS)
    def test_preserves_segment_multiset(self, ring):
        """Rotation only reorders segments."""
        assert Counter(rotate_forward(ring)) == Counter(ring)
        assert Counter(rotate_backward(ring)) == Counter(ring)

    @pytest.mark.parametrize("ring", RINGS)
    def test_n_forward_steps_is_identity(self, ring):
        rotated = ring
        for _ in range(len(ring)):
            rotated = rotate_forward(rotated)
        assert rotated == ring

    def test_rotate_step_dispatches_on_direction(self):
        ring = (0, 1, 2)
        assert rotate_step(ring, Direction.FORWARD) == rotate_forward(ring)
        assert rotate_step(ring, Direction.BACKWARD) == rotate_backward(ring)

    def test_accepts_lists(self):
        assert rotate_forward([1, 2, 3]) == (3, 1, 2)

    def test_empty_ring(self):
        assert rotate_forward(()) == ()
        assert rotate_backward(()) == ()


class TestDirection:
    """Test the direction enum."""

    def test_inverse(self):
        assert Direction.FORWARD.inverse is Direction.BACKWARD
        assert Direction.BACKWARD.inverse is Direction.FORWARD

    def test_parse_strings(self):
        assert Direction.parse("forward") is Direction.FORWARD
        assert Direction.parse("BACKWARD") is Direction.BACKWARD
        assert Direction.parse(Direction.FORWARD) is Direction.FORWARD

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Direction.parse("sideways")
        with pytest.raises(ValueError):
            Direction.parse(1)


class TestMultiStep:
    """Test arbitrary rotations used during shuffling."""

    @pytest.mark.parametrize("steps", [0, 1, 2, 5, 6, 13])
    def test_matches_repeated_forward(self, steps):
        ring = (0, 1, 2, 3, 4, 5)
        expected = ring
        for _ in range(steps):
            expected = rotate_forward(expected)
        assert rotate_by(ring, steps) == expected

    def test_negative_steps_rotate_backward(self):
        ring = (0, 1, 2, 3)
        assert rotate_by(ring, -1) == rotate_backward(ring)

    def test_rotation_offset_finds_shift(self):
        target = (0, 1, 2, 3, 4, 5)
        assert rotation_offset(rotate_by(target, 4), target) == 4
        assert rotation_offset(target, target) == 0

    def test_rotation_offset_rejects_non_rotation(self):
        assert rotation_offset((0, 2, 1), (0, 1, 2)) == -1
        assert rotation_offset((0, 1), (0, 1, 2)) == -1

    def test_min_moves_uses_shorter_direction(self):
        target = (0, 1, 2, 3, 4, 5)
        assert min_moves_to_solve(rotate_by(target, 1), target) == 1
        assert min_moves_to_solve(rotate_by(target, 5), target) == 1
        assert min_moves_to_solve(rotate_by(target, 3), target) == 3
        assert min_moves_to_solve(target, target) == 0

    def test_min_moves_with_repeating_palette(self):
        """A period-2 ring is never more than one step from solved."""
        target = (0, 1, 0, 1, 0, 1)
        for r in range(6):
            assert min_moves_to_solve(rotate_by(target, r), target) <= 1
