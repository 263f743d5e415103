"""
Puzzle Core - The ring puzzle engine.

This module provides the puzzle state machine, the stateful session used by
front ends, a Gymnasium environment wrapper, and all supporting systems
(configuration, ring catalog, rotation sources, feedback signals).

Main exports:
- PuzzleEngine: Generation, rotation, completion and level transitions
- GameState: Immutable puzzle state
- PuzzleSession: Current state, listeners and the delayed auto-advance
- PookalamEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from pookalam.puzzle_core.config_loader import GameConfig, load_config
from pookalam.puzzle_core.ring_catalog import RingType, RingCatalog
from pookalam.puzzle_core.ring_ops import Direction
from pookalam.puzzle_core.rng import RotationSource, ScriptedRotationSource
from pookalam.puzzle_core.feedback import FeedbackSignal
from pookalam.puzzle_core.game import (
    MAX_LEVEL,
    GameState,
    PuzzleEngine,
    RotateResult,
    segment_count_for,
    palette_size_for,
)
from pookalam.puzzle_core.session import PuzzleSession, PendingAdvance
from pookalam.puzzle_core.env_gym import PookalamEnv

__all__ = [
    "GameConfig",
    "load_config",
    "RingType",
    "RingCatalog",
    "Direction",
    "RotationSource",
    "ScriptedRotationSource",
    "FeedbackSignal",
    "MAX_LEVEL",
    "GameState",
    "PuzzleEngine",
    "RotateResult",
    "segment_count_for",
    "palette_size_for",
    "PuzzleSession",
    "PendingAdvance",
    "PookalamEnv",
]
