"""
Tests for shuffle rotation sources.
"""

import pytest
from collections import Counter

from pookalam.puzzle_core.rng import RotationSource, ScriptedRotationSource


class TestRotationSource:
    """Test the seeded uniform source."""

    def test_deterministic_with_seed(self):
        """Same seed should produce same sequence."""
        s1 = RotationSource(seed=42)
        s2 = RotationSource(seed=42)

        assert [s1.draw(12) for _ in range(50)] == [s2.draw(12) for _ in range(50)]

    def test_different_seeds_differ(self):
        s1 = RotationSource(seed=42)
        s2 = RotationSource(seed=123)

        assert [s1.draw(12) for _ in range(50)] != [s2.draw(12) for _ in range(50)]

    @pytest.mark.parametrize("n", [1, 6, 8, 10, 12])
    def test_values_in_range(self, n):
        source = RotationSource(seed=42)
        for _ in range(200):
            assert 0 <= source.draw(n) < n

    def test_zero_is_drawn(self):
        """r = 0 must stay possible so a solved deal can occur."""
        source = RotationSource(seed=42)
        counts = Counter(source.draw(6) for _ in range(600))
        assert counts[0] > 0
        assert set(counts) == set(range(6))

    def test_reset_with_seed_restores_sequence(self):
        source = RotationSource(seed=42)
        initial = [source.draw(10) for _ in range(10)]

        source.reset(seed=42)

        assert [source.draw(10) for _ in range(10)] == initial
        assert source.draws == 10

    def test_reset_without_seed_keeps_stream(self):
        source = RotationSource(seed=42)
        first = [source.draw(10) for _ in range(10)]
        source.reset()
        assert source.draws == 0
        assert source.seed == 42
        assert [source.draw(10) for _ in range(10)] != first

    def test_invalid_segment_count(self):
        with pytest.raises(ValueError):
            RotationSource(seed=1).draw(0)

    def test_get_state(self):
        source = RotationSource(seed=9)
        source.draw(6)
        assert source.get_state() == (9, 1)


class TestScriptedRotationSource:
    """Test the fixed-sequence source."""

    def test_replays_script(self):
        source = ScriptedRotationSource([3, 1, 4])
        assert [source.draw(10) for _ in range(3)] == [3, 1, 4]

    def test_cycles_when_exhausted(self):
        source = ScriptedRotationSource([2, 5])
        assert [source.draw(10) for _ in range(5)] == [2, 5, 2, 5, 2]

    def test_values_reduced_modulo_n(self):
        source = ScriptedRotationSource([7])
        assert source.draw(6) == 1

    def test_reset_rewinds(self):
        source = ScriptedRotationSource([1, 2, 3])
        source.draw(6)
        source.draw(6)
        source.reset()
        assert source.draw(6) == 1

    def test_empty_script_rejected(self):
        with pytest.raises(ValueError):
            ScriptedRotationSource([])
