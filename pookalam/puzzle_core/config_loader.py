"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class RingConfig:
    """Configuration for a single ring position."""
    id: int
    name: str                    # Flower name shown by the presentation layer
    description: str
    segments: int                # Fixed segment count for this position
    palette: Tuple[str, ...]     # Ordered color identifiers (only the size matters to the engine)


@dataclass(frozen=True)
class LevelConfig:
    """Level progression settings."""
    max_level: int
    start_level: int
    advance_delay_seconds: float  # Observation delay before auto-advance


@dataclass(frozen=True)
class FeedbackConfig:
    """Tone parameters attached to rotation feedback signals."""
    success_frequency: float
    success_duration: float
    step_base_frequency: float
    step_frequency_per_ring: float
    step_duration: float


@dataclass(frozen=True)
class RngConfig:
    """Shuffle randomness parameters."""
    seed: Optional[int]


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits for agent environments."""
    max_moves: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    rings: Tuple[RingConfig, ...]
    levels: LevelConfig
    feedback: FeedbackConfig
    rng: RngConfig
    caps: CapsConfig

    @property
    def max_level(self) -> int:
        """Number of rings in the final level."""
        return self.levels.max_level

    @property
    def segment_counts(self) -> Tuple[int, ...]:
        """Segment count per ring position."""
        return tuple(r.segments for r in self.rings)

    @property
    def palette_sizes(self) -> Tuple[int, ...]:
        """Palette size per ring position."""
        return tuple(len(r.palette) for r in self.rings)

    @property
    def max_segments(self) -> int:
        """Segment count of the largest ring."""
        return max(self.segment_counts)

    def get_ring(self, ring_index: int) -> RingConfig:
        """Get ring config by position."""
        if 0 <= ring_index < len(self.rings):
            return self.rings[ring_index]
        raise ValueError(f"Invalid ring index: {ring_index}")


def _parse_palette(palette_data: List) -> Tuple[str, ...]:
    """Parse a palette list from YAML."""
    if not isinstance(palette_data, list) or len(palette_data) == 0:
        raise ValueError(f"Palette must be a non-empty list, got {palette_data!r}")
    return tuple(str(color) for color in palette_data)


def _parse_ring(ring_data: dict) -> RingConfig:
    """Parse a single ring configuration from YAML."""
    return RingConfig(
        id=int(ring_data["id"]),
        name=str(ring_data.get("name", f"Ring {ring_data['id']}")),
        description=str(ring_data.get("description", "")),
        segments=int(ring_data["segments"]),
        palette=_parse_palette(ring_data["palette"])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if len(config.rings) == 0:
        raise ValueError("At least one ring must be configured")

    # Validate ring IDs are sequential
    for i, ring in enumerate(config.rings):
        if ring.id != i:
            raise ValueError(f"Ring ID mismatch: expected {i}, got {ring.id}")
        if ring.segments < 1:
            raise ValueError(f"Ring {i} must have at least one segment, got {ring.segments}")

    # Segment counts strictly increase with position
    counts = config.segment_counts
    for prev, cur in zip(counts, counts[1:]):
        if cur <= prev:
            raise ValueError(f"Segment counts must strictly increase, got {list(counts)}")

    # One ring per level
    if config.levels.max_level != len(config.rings):
        raise ValueError(
            f"levels.max_level ({config.levels.max_level}) must match "
            f"ring count ({len(config.rings)})"
        )

    if not 1 <= config.levels.start_level <= config.levels.max_level:
        raise ValueError(
            f"levels.start_level ({config.levels.start_level}) must be in "
            f"[1, {config.levels.max_level}]"
        )

    if config.levels.advance_delay_seconds < 0:
        raise ValueError(
            f"levels.advance_delay_seconds must be >= 0, got {config.levels.advance_delay_seconds}"
        )

    if config.caps.max_moves < 1:
        raise ValueError(f"caps.max_moves must be >= 1, got {config.caps.max_moves}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    rings = tuple(_parse_ring(r) for r in raw["rings"])

    levels_data = raw.get("levels", {})
    levels = LevelConfig(
        max_level=int(levels_data.get("max_level", len(rings))),
        start_level=int(levels_data.get("start_level", 1)),
        advance_delay_seconds=float(levels_data.get("advance_delay_seconds", 2.0))
    )

    fb_data = raw.get("feedback", {})
    feedback = FeedbackConfig(
        success_frequency=float(fb_data.get("success_frequency", 800.0)),
        success_duration=float(fb_data.get("success_duration", 0.3)),
        step_base_frequency=float(fb_data.get("step_base_frequency", 400.0)),
        step_frequency_per_ring=float(fb_data.get("step_frequency_per_ring", 100.0)),
        step_duration=float(fb_data.get("step_duration", 0.1))
    )

    rng_data = raw.get("rng") or {}
    seed = rng_data.get("seed")
    rng = RngConfig(seed=None if seed is None else int(seed))

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_moves=int(caps_data.get("max_moves", 500))
    )

    config = GameConfig(
        rings=rings,
        levels=levels,
        feedback=feedback,
        rng=rng,
        caps=caps
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
