"""
RNG - Shuffle Rotation Sources
==============================

Provides the random rotation counts used to shuffle rings during generation.

Any object with a ``draw(n) -> int`` method returning a value in [0, n) can
be passed to the engine. RotationSource is the production source;
ScriptedRotationSource replays a fixed sequence for deterministic tests
and tutorials.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple


class RotationSource:
    """
    Uniform rotation-count source backed by ``random.Random``.

    A fixed seed reproduces the same sequence of shuffles.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize rotation source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)
        self._draws: int = 0

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values drawn since the last reset."""
        return self._draws

    def draw(self, n: int) -> int:
        """
        Draw a rotation count uniformly from [0, n).

        Args:
            n: Ring segment count.

        Returns:
            Integer r with 0 <= r < n.
        """
        if n < 1:
            raise ValueError(f"Segment count must be >= 1, got {n}")
        self._draws += 1
        return self._rng.randrange(n)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the source with optional new seed.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
            self._rng = random.Random(seed)
        self._draws = 0

    def get_state(self) -> Tuple[Optional[int], int]:
        """
        Get serializable state for checkpointing.

        Returns:
            Tuple of (seed, draws).
        """
        return (self._seed, self._draws)


class ScriptedRotationSource:
    """
    Replays a fixed sequence of rotation counts.

    Each value is reduced modulo the requested segment count so a script
    written for one ring size stays valid for another. The script cycles
    when exhausted.
    """

    def __init__(self, values: Iterable[int]):
        self._values: List[int] = [int(v) for v in values]
        if not self._values:
            raise ValueError("ScriptedRotationSource needs at least one value")
        self._index: int = 0

    def draw(self, n: int) -> int:
        if n < 1:
            raise ValueError(f"Segment count must be >= 1, got {n}")
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value % n

    def reset(self, seed: Optional[int] = None) -> None:
        """Rewind to the start of the script (seed is ignored)."""
        self._index = 0

    @property
    def draws(self) -> int:
        return self._index
