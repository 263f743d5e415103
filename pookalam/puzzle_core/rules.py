"""
Game Rules
==========

Handles argument validation, the completion predicate, and level progression.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Optional, Sequence

from pookalam.puzzle_core.config_loader import GameConfig, get_config


def is_solved(rings: Sequence[Sequence[int]], target_pattern: Sequence[Sequence[int]]) -> bool:
    """
    True iff every ring equals its target sequence elementwise.

    Ring counts must match, and so must each ring's length.
    """
    if len(rings) != len(target_pattern):
        return False
    for ring, target in zip(rings, target_pattern):
        if len(ring) != len(target):
            return False
        for segment, expected in zip(ring, target):
            if segment != expected:
                return False
    return True


def _as_int(value, what: str) -> int:
    """Convert an integer-like value to int. Bools and non-integers are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an int, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise ValueError(f"{what} must be an int, got {value!r}") from None


@dataclass
class LevelTransition:
    """Result of a level progression request."""
    level: int
    advanced: bool

    @staticmethod
    def moved(level: int) -> "LevelTransition":
        return LevelTransition(level, True)

    @staticmethod
    def final_level(level: int) -> "LevelTransition":
        return LevelTransition(level, False)


class LevelRules:
    """
    Level bounds and progression.

    Levels run from 1 to max_level; level N has N active rings.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize level rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._max_level = config.levels.max_level

    @property
    def max_level(self) -> int:
        """Highest level (total ring count)."""
        return self._max_level

    def validate_level(self, level: int) -> int:
        """
        Reject a level outside [1, max_level].

        Accepts any integer type (e.g. numpy integers).

        Returns:
            The level as a plain int.

        Raises:
            ValueError: If level is out of range. Levels are never clamped.
        """
        level = _as_int(level, "Level")
        if not 1 <= level <= self._max_level:
            raise ValueError(f"Level {level} out of range [1, {self._max_level}]")
        return level

    def is_final_level(self, level: int) -> bool:
        return level >= self._max_level

    def next_level(self, level: int) -> LevelTransition:
        """
        Compute the level after ``level``.

        Returns:
            LevelTransition; at max_level the level is unchanged and
            ``advanced`` is False.
        """
        if self.is_final_level(level):
            return LevelTransition.final_level(level)
        return LevelTransition.moved(level + 1)


class MoveRules:
    """Validation for rotation requests."""

    def validate_ring_index(self, ring_index: int, level: int) -> int:
        """
        Reject a ring index that does not reference an active ring.

        Returns:
            The ring index as a plain int.

        Raises:
            ValueError: If ring_index is outside [0, level).
        """
        ring_index = _as_int(ring_index, "Ring index")
        if not 0 <= ring_index < level:
            raise ValueError(
                f"Ring index {ring_index} out of range [0, {level}) for level {level}"
            )
        return ring_index


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.levels = LevelRules(config)
        self.moves = MoveRules()
