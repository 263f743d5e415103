"""
Puzzle Session
==============

Stateful driver for a presentation layer.

Holds the current GameState, composes level changes with re-initialization,
notifies listeners after every state change, and owns the deferred
auto-advance that follows a solved intermediate level.

Time is supplied by the caller through tick(dt), the same way an animated
front end drives a frame loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pookalam.puzzle_core.config_loader import GameConfig, get_config
from pookalam.puzzle_core.feedback import FeedbackSignal
from pookalam.puzzle_core.game import GameState, PuzzleEngine, RotateResult
from pookalam.puzzle_core.ring_ops import Direction
from pookalam.puzzle_core.rng import RotationSource
from pookalam.puzzle_core.state_snapshot import SnapshotBuilder, GameSnapshot, build_render_data


StateListener = Callable[[GameState], None]
FeedbackListener = Callable[[FeedbackSignal], None]


@dataclass
class PendingAdvance:
    """A scheduled level advance, keyed to the state that solved the level."""
    state: GameState
    due_time: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_due(self, now: float) -> bool:
        return not self.cancelled and now >= self.due_time


class PuzzleSession:
    """
    One player's game, from level 1 through the final level.

    Any state replacement other than the pending advance itself cancels
    the pending advance, so it can never fire against a newer state.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        engine: Optional[PuzzleEngine] = None,
        auto_advance: bool = True,
        debug: bool = False
    ):
        """
        Initialize session and generate the starting level.

        Args:
            config: Game configuration. Uses default if None.
            seed: Shuffle seed. Falls back to config rng.seed if None.
            engine: Pre-built engine (e.g. with a scripted rotation source).
                Its config and rotation source are used, so ``seed`` must be
                None and ``config`` must be None or the engine's own.
            auto_advance: If False, solved levels wait for advance().
            debug: If True, prints state transitions.

        Raises:
            ValueError: If ``engine`` is given together with a seed or with
                a different config.
        """
        if engine is not None:
            if seed is not None:
                raise ValueError("seed cannot be combined with a pre-built engine")
            if config is not None and config != engine.config:
                raise ValueError("config does not match the engine's config")
        if config is None:
            config = engine.config if engine is not None else get_config()

        self._config = config
        if engine is None:
            if seed is None:
                seed = config.rng.seed
            engine = PuzzleEngine(config, rotation_source=RotationSource(seed))
        self._engine = engine
        self._snapshot_builder = SnapshotBuilder(config)
        self._auto_advance = auto_advance
        self._advance_delay = config.levels.advance_delay_seconds
        self._debug = debug

        self._state_listeners: List[StateListener] = []
        self._feedback_listeners: List[FeedbackListener] = []
        self._muted: bool = False

        self._clock: float = 0.0
        self._pending: Optional[PendingAdvance] = None
        self._last_feedback: Optional[FeedbackSignal] = None

        self._state: GameState = self._engine.initialize(config.levels.start_level)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def engine(self) -> PuzzleEngine:
        return self._engine

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def moves(self) -> int:
        return self._state.moves

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    @property
    def is_final_success(self) -> bool:
        """True once the final level is solved."""
        return self._engine.is_final_success(self._state)

    @property
    def clock(self) -> float:
        """Seconds elapsed through tick()."""
        return self._clock

    @property
    def pending_advance(self) -> Optional[PendingAdvance]:
        """The scheduled level advance, if one is waiting."""
        if self._pending is not None and self._pending.cancelled:
            return None
        return self._pending

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def last_feedback(self) -> Optional[FeedbackSignal]:
        """Signal from the most recent rotation (recorded even when muted)."""
        return self._last_feedback

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every new state."""
        self._state_listeners.append(listener)

    def add_feedback_listener(self, listener: FeedbackListener) -> None:
        """Register a callback invoked with each rotation's feedback signal."""
        self._feedback_listeners.append(listener)

    def set_muted(self, muted: bool) -> None:
        """Suppress or restore feedback delivery."""
        self._muted = bool(muted)

    def toggle_muted(self) -> bool:
        self._muted = not self._muted
        return self._muted

    def rotate(self, ring_index: int, direction: Direction = Direction.FORWARD) -> RotateResult:
        """
        Rotate one ring of the current state by one step.

        Raises:
            ValueError: If ring_index does not reference an active ring.
        """
        result = self._engine.rotate(self._state, ring_index, direction)
        self._last_feedback = result.feedback

        if self._debug:
            print(f"[DEBUG] Rotate ring {ring_index} {Direction.parse(direction).value}: "
                  f"moves={result.state.moves}, complete={result.state.is_complete}")

        self._publish(result.state)
        if not self._muted:
            for listener in self._feedback_listeners:
                listener(result.feedback)
        return result

    def restart(self) -> GameState:
        """Reshuffle the current level, resetting the move counter."""
        return self._publish(self._engine.initialize(self._state.level))

    def advance(self) -> GameState:
        """
        Go to the next level now.

        At the final level this is a no-op and the current state is kept.
        """
        pending = self._engine.advance_level(self._state)
        if pending is self._state:
            if self._debug:
                print(f"[DEBUG] Advance ignored: already at final level {self._state.level}")
            return self._state
        return self._publish(self._engine.initialize(pending.level))

    def reset(self) -> GameState:
        """Play again from level 1."""
        pending = self._engine.reset_to_level_one(self._state)
        return self._publish(self._engine.initialize(pending.level))

    def tick(self, dt: float) -> bool:
        """
        Advance the session clock and fire a due level advance.

        Args:
            dt: Seconds since the previous tick.

        Returns:
            True if the level advanced during this tick.
        """
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._clock += dt

        pending = self._pending
        if pending is None or not pending.is_due(self._clock):
            return False

        self._pending = None
        if pending.state is not self._state:
            # Superseded without passing through _publish; drop it
            if self._debug:
                print(f"[DEBUG] Dropped stale advance scheduled for level {pending.state.level}")
            return False

        if self._debug:
            print(f"[DEBUG] Auto-advance from level {self._state.level}")
        self.advance()
        return True

    def _publish(self, state: GameState) -> GameState:
        """Install a new state, cancel stale work, and notify listeners."""
        if self._pending is not None and self._pending.state is not state:
            self._pending.cancel()
            if self._debug:
                print(f"[DEBUG] Cancelled pending advance for level {self._pending.state.level}")
            self._pending = None

        self._state = state

        if (
            self._auto_advance
            and state.is_complete
            and not self._engine.is_final_level(state)
        ):
            self._pending = PendingAdvance(
                state=state,
                due_time=self._clock + self._advance_delay
            )
            if self._debug:
                print(f"[DEBUG] Level {state.level} solved; advance at t={self._pending.due_time:.2f}")

        for listener in self._state_listeners:
            listener(state)
        return state

    def snapshot(self) -> GameSnapshot:
        """Fixed-size array view of the current state."""
        return self._snapshot_builder.build(self._state)

    def get_info(self) -> Dict[str, Any]:
        """Counters and flags for display."""
        return {
            "level": self._state.level,
            "max_level": self._engine.max_level,
            "moves": self._state.moves,
            "is_complete": self._state.is_complete,
            "is_final_success": self.is_final_success,
            "advance_pending": self.pending_advance is not None,
            "muted": self._muted,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """Colors, names and counters needed to draw the current state."""
        return build_render_data(self._state, self._engine.catalog)
