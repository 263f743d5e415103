"""
Feedback Signals
================

Derives the audio/visual cue for each rotation from its outcome.

The engine never plays sound. It returns a FeedbackSignal and the
presentation layer decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pookalam.puzzle_core.config_loader import GameConfig, get_config


SUCCESS = "success"
STEP = "step"


@dataclass(frozen=True)
class FeedbackSignal:
    """Outcome discriminant of one rotation, with tone parameters."""
    kind: str            # SUCCESS or STEP
    ring_index: int
    frequency: float     # Hz
    duration: float      # Seconds

    @property
    def is_success(self) -> bool:
        return self.kind == SUCCESS

    def __repr__(self) -> str:
        return f"FeedbackSignal({self.kind}, ring={self.ring_index}, {self.frequency:.0f}Hz)"


class FeedbackMapper:
    """
    Maps rotation outcomes to feedback signals.

    Success uses a fixed tone; steps are pitched by ring so each ring
    sounds different.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize feedback mapper.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config.feedback

    def step_frequency(self, ring_index: int) -> float:
        """Tone for a non-completing rotation of a ring."""
        return self._config.step_base_frequency + ring_index * self._config.step_frequency_per_ring

    def signal_for(self, ring_index: int, became_complete: bool) -> FeedbackSignal:
        """
        Build the signal for a rotation.

        Args:
            ring_index: Ring that was rotated.
            became_complete: True if the resulting state is solved.

        Returns:
            FeedbackSignal of kind SUCCESS or STEP.
        """
        if became_complete:
            return FeedbackSignal(
                kind=SUCCESS,
                ring_index=ring_index,
                frequency=self._config.success_frequency,
                duration=self._config.success_duration
            )
        return FeedbackSignal(
            kind=STEP,
            ring_index=ring_index,
            frequency=self.step_frequency(ring_index),
            duration=self._config.step_duration
        )
