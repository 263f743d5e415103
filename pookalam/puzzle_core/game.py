"""
Puzzle Engine
=============

Owns the ring puzzle state machine: pattern generation, rotation,
completion detection, and level progression.

Per level: Shuffled -> (rotate)* -> Solved. Solved is terminal only at
the final level. Every operation returns a new GameState; nothing is
mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from pookalam.puzzle_core.config_loader import GameConfig, get_config
from pookalam.puzzle_core.ring_catalog import RingCatalog
from pookalam.puzzle_core.ring_ops import Direction, Ring, rotate_by, rotate_step
from pookalam.puzzle_core.rng import RotationSource
from pookalam.puzzle_core.rules import GameRules, is_solved as _is_solved
from pookalam.puzzle_core.feedback import FeedbackMapper, FeedbackSignal


# Reference configuration (mirrors game_config.yaml)
MAX_LEVEL = 4
SEGMENTS_PER_RING: Tuple[int, ...] = (6, 8, 10, 12)
PALETTE_SIZES: Tuple[int, ...] = (6, 8, 10, 12)


def segment_count_for(ring_index: int) -> int:
    """Segment count of a ring position in the reference configuration."""
    return SEGMENTS_PER_RING[ring_index]


def palette_size_for(ring_index: int) -> int:
    """Palette size of a ring position in the reference configuration."""
    return PALETTE_SIZES[ring_index]


@dataclass(frozen=True)
class GameState:
    """
    Complete puzzle state for one level.

    ``rings`` and ``target_pattern`` are indexed by ring position; ring 0 is
    the outermost ring.
    """
    rings: Tuple[Ring, ...]
    target_pattern: Tuple[Ring, ...]
    level: int
    is_complete: bool
    moves: int

    def __post_init__(self):
        if len(self.rings) != len(self.target_pattern):
            raise ValueError(
                f"Ring count ({len(self.rings)}) does not match "
                f"target count ({len(self.target_pattern)})"
            )
        for i, (ring, target) in enumerate(zip(self.rings, self.target_pattern)):
            if len(ring) != len(target):
                raise ValueError(
                    f"Ring {i} has {len(ring)} segments, target has {len(target)}"
                )
        if self.moves < 0:
            raise ValueError(f"Move count must be >= 0, got {self.moves}")

    @property
    def ring_count(self) -> int:
        return len(self.rings)

    @property
    def is_consistent(self) -> bool:
        """
        True if the rings belong to the current level.

        False between a level change and the initialize() that follows it.
        """
        return len(self.rings) == self.level

    def segment_count(self, ring_index: int) -> int:
        return len(self.rings[ring_index])


@dataclass(frozen=True)
class RotateResult:
    """Result of a single rotation."""
    state: GameState
    feedback: FeedbackSignal

    @property
    def became_complete(self) -> bool:
        return self.feedback.is_success


class PuzzleEngine:
    """
    Ring puzzle engine.

    Stateless apart from its randomness source: callers hold the GameState
    and pass it back in. Composition of level changes with re-initialization
    is the caller's job (see PuzzleSession).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rotation_source=None
    ):
        """
        Initialize engine.

        Args:
            config: Game configuration. Uses default if None.
            rotation_source: Object with ``draw(n) -> int`` in [0, n). A
                RotationSource seeded from config is used if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = RingCatalog(config)
        self._rules = GameRules(config)
        self._feedback = FeedbackMapper(config)
        if rotation_source is None:
            rotation_source = RotationSource(config.rng.seed)
        self._source = rotation_source

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def catalog(self) -> RingCatalog:
        """Ring catalog."""
        return self._catalog

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def rotation_source(self):
        """Randomness source used for shuffling."""
        return self._source

    @property
    def max_level(self) -> int:
        return self._rules.levels.max_level

    def segment_count_for(self, ring_index: int) -> int:
        return self._catalog.segment_count_for(ring_index)

    def palette_size_for(self, ring_index: int) -> int:
        return self._catalog.palette_size_for(ring_index)

    def generate(self, level: int) -> Tuple[Tuple[Ring, ...], Tuple[Ring, ...]]:
        """
        Generate shuffled rings and their target pattern.

        Each ring is its canonical sequence rotated forward by a uniformly
        drawn r in [0, n), so it is always solvable by rotation alone.

        Args:
            level: Number of rings, in [1, max_level].

        Returns:
            (rings, target_pattern), each with ``level`` entries.

        Raises:
            ValueError: If level is out of range.
        """
        level = self._rules.levels.validate_level(level)

        rings = []
        targets = []
        for ring_type in self._catalog.active_types(level):
            target = ring_type.canonical_sequence()
            r = self._source.draw(ring_type.segment_count)
            rings.append(rotate_by(target, r))
            targets.append(target)

        return tuple(rings), tuple(targets)

    def initialize(self, level: int) -> GameState:
        """
        Build a fresh state for a level.

        The only operation that resets ``moves`` or clears ``is_complete``.

        Raises:
            ValueError: If level is out of range.
        """
        level = self._rules.levels.validate_level(level)
        rings, target_pattern = self.generate(level)
        return GameState(
            rings=rings,
            target_pattern=target_pattern,
            level=level,
            is_complete=False,
            moves=0
        )

    def rotate(self, state: GameState, ring_index: int, direction: Direction) -> RotateResult:
        """
        Rotate one ring by a single step.

        Completion is recomputed over every ring. The move counter always
        increases by one.

        Args:
            state: Current state.
            ring_index: Ring to rotate, in [0, state.level).
            direction: Direction.FORWARD or Direction.BACKWARD.

        Returns:
            RotateResult with the new state and its feedback signal.

        Raises:
            ValueError: If the ring index is out of range, the direction is
                unknown, or the state has not been initialized for its level.
        """
        if not state.is_consistent:
            raise ValueError(
                f"State for level {state.level} holds {state.ring_count} rings; "
                f"initialize the level before rotating"
            )
        ring_index = self._rules.moves.validate_ring_index(ring_index, state.level)
        direction = Direction.parse(direction)

        rings = list(state.rings)
        rings[ring_index] = rotate_step(rings[ring_index], direction)
        rings = tuple(rings)

        complete = self.is_solved(rings, state.target_pattern)
        new_state = replace(
            state,
            rings=rings,
            is_complete=complete,
            moves=state.moves + 1
        )
        return RotateResult(
            state=new_state,
            feedback=self._feedback.signal_for(ring_index, complete)
        )

    @staticmethod
    def is_solved(rings, target_pattern) -> bool:
        """True iff every ring equals its target sequence elementwise."""
        return _is_solved(rings, target_pattern)

    def advance_level(self, state: GameState) -> GameState:
        """
        Move to the next level without regenerating rings.

        At the final level this is a no-op and the same state is returned.
        Call initialize() for the new level afterwards.
        """
        transition = self._rules.levels.next_level(state.level)
        if not transition.advanced:
            return state
        return replace(state, level=transition.level)

    def reset_to_level_one(self, state: GameState) -> GameState:
        """Set level to 1. Call initialize(1) afterwards."""
        return replace(state, level=1)

    def is_final_level(self, state: GameState) -> bool:
        return self._rules.levels.is_final_level(state.level)

    def is_final_success(self, state: GameState) -> bool:
        """True once the last level is solved."""
        return state.is_complete and self.is_final_level(state)
