"""
State Snapshot
==============

Packs puzzle state into fixed-size numpy arrays for observations, and
derives the per-segment display data a renderer needs.

Nothing here is stored back into the engine: display data is recomputed
from the canonical color indices on every read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import numpy as np

from pookalam.puzzle_core.config_loader import GameConfig, get_config
from pookalam.puzzle_core.ring_ops import min_moves_to_solve

if TYPE_CHECKING:
    from pookalam.puzzle_core.game import GameState
    from pookalam.puzzle_core.ring_catalog import RingCatalog


@dataclass
class GameSnapshot:
    """
    Complete puzzle snapshot with derived features.

    Ring arrays are (max_level, max_segments), padded with -1 and masked.
    """
    # Core state
    level: int
    moves: int
    is_complete: bool

    # Derived features
    solved_ring_count: int
    min_moves_remaining: int          # Sum of per-ring shortest solves

    # Per-ring arrays (max_level,)
    ring_active: np.ndarray           # bool
    ring_solved: np.ndarray           # bool
    segment_counts: np.ndarray        # int32, 0 for inactive rings
    ring_offsets: np.ndarray          # int32, shortest solve per ring, -1 if inactive

    # Segment arrays (max_level, max_segments)
    rings: np.ndarray                 # int16
    target: np.ndarray                # int16
    segment_mask: np.ndarray          # bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "level": np.array(self.level, dtype=np.int32),
            "moves": np.array(self.moves, dtype=np.int32),
            "is_complete": np.array(int(self.is_complete), dtype=np.int8),
            "solved_ring_count": np.array(self.solved_ring_count, dtype=np.int32),
            "min_moves_remaining": np.array(self.min_moves_remaining, dtype=np.int32),
            "ring_active": self.ring_active.astype(np.int8),
            "ring_solved": self.ring_solved.astype(np.int8),
            "segment_counts": self.segment_counts,
            "ring_offsets": self.ring_offsets,
            "rings": self.rings,
            "target": self.target,
            "segment_mask": self.segment_mask.astype(np.int8),
        }


class SnapshotBuilder:
    """Builds puzzle snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_level = config.levels.max_level
        self._max_segments = config.max_segments

        # Pre-allocate arrays
        self._rings = np.full((self._max_level, self._max_segments), -1, dtype=np.int16)
        self._target = np.full((self._max_level, self._max_segments), -1, dtype=np.int16)
        self._segment_mask = np.zeros((self._max_level, self._max_segments), dtype=bool)
        self._ring_active = np.zeros(self._max_level, dtype=bool)
        self._ring_solved = np.zeros(self._max_level, dtype=bool)
        self._segment_counts = np.zeros(self._max_level, dtype=np.int32)
        self._ring_offsets = np.full(self._max_level, -1, dtype=np.int32)

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def max_segments(self) -> int:
        return self._max_segments

    def build(self, state: "GameState") -> GameSnapshot:
        """Build a snapshot from a game state."""
        # Reset arrays
        self._rings.fill(-1)
        self._target.fill(-1)
        self._segment_mask.fill(False)
        self._ring_active.fill(False)
        self._ring_solved.fill(False)
        self._segment_counts.fill(0)
        self._ring_offsets.fill(-1)

        solved_count = 0
        remaining = 0

        for i, (ring, target) in enumerate(zip(state.rings, state.target_pattern)):
            n = len(ring)
            self._rings[i, :n] = ring
            self._target[i, :n] = target
            self._segment_mask[i, :n] = True
            self._ring_active[i] = True
            self._segment_counts[i] = n

            offset = min_moves_to_solve(ring, target)
            self._ring_offsets[i] = offset
            if offset == 0:
                self._ring_solved[i] = True
                solved_count += 1
            if offset > 0:
                remaining += offset

        return GameSnapshot(
            level=state.level,
            moves=state.moves,
            is_complete=state.is_complete,
            solved_ring_count=solved_count,
            min_moves_remaining=remaining,
            ring_active=self._ring_active.copy(),
            ring_solved=self._ring_solved.copy(),
            segment_counts=self._segment_counts.copy(),
            ring_offsets=self._ring_offsets.copy(),
            rings=self._rings.copy(),
            target=self._target.copy(),
            segment_mask=self._segment_mask.copy()
        )


def build_render_data(state: "GameState", catalog: "RingCatalog") -> Dict[str, Any]:
    """
    Derive everything a renderer needs from a state.

    Color indices are mapped through each ring position's palette here, so
    the engine never holds display values.

    Args:
        state: Current game state.
        catalog: Ring catalog providing palettes and names.

    Returns:
        Dict with per-ring segment colors and the display counters.
    """
    rings_data: List[Dict[str, Any]] = []
    for i, (ring, target) in enumerate(zip(state.rings, state.target_pattern)):
        ring_type = catalog[i]
        rings_data.append({
            "ring_index": i,
            "name": ring_type.name,
            "description": ring_type.description,
            "segment_count": state.segment_count(i),
            "color_indices": list(ring),
            "colors": [ring_type.color_for(c) for c in ring],
            "target_colors": [ring_type.color_for(c) for c in target],
            "solved": tuple(ring) == tuple(target),
        })

    return {
        "level": state.level,
        "moves": state.moves,
        "is_complete": state.is_complete,
        "rings": rings_data,
    }
