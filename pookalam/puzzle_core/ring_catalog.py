"""
Ring Catalog
============

Provides convenient access to ring position definitions loaded from config.

The engine only ever asks for segment counts and palette sizes. Palette
values, flower names and descriptions are here for the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Optional

from pookalam.puzzle_core.config_loader import (
    GameConfig,
    RingConfig,
    get_config
)


@dataclass
class RingType:
    """
    Runtime representation of one ring position.

    Wraps RingConfig with computed properties and the index -> color derivation.
    """
    config: RingConfig

    @property
    def id(self) -> int:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def description(self) -> str:
        return self.config.description

    @property
    def segment_count(self) -> int:
        return self.config.segments

    @property
    def palette(self) -> Tuple[str, ...]:
        return self.config.palette

    @property
    def palette_size(self) -> int:
        return len(self.config.palette)

    @property
    def has_repeating_colors(self) -> bool:
        """True if the palette is smaller than the ring, so colors repeat."""
        return self.palette_size < self.segment_count

    def canonical_sequence(self) -> Tuple[int, ...]:
        """Unrotated color index sequence: k mod palette size."""
        size = self.palette_size
        return tuple(k % size for k in range(self.segment_count))

    def color_for(self, color_index: int) -> str:
        """
        Map a segment's color index to its palette color.

        Args:
            color_index: Color index stored in a ring.

        Returns:
            Color identifier from the palette.
        """
        return self.config.palette[color_index % self.palette_size]

    def __repr__(self) -> str:
        return f"RingType({self.id}: {self.name}, {self.segment_count} segments)"


class RingCatalog:
    """
    Collection of all ring positions, outermost first.

    Position i is the ring that becomes active at level i + 1.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._types: Tuple[RingType, ...] = tuple(
            RingType(ring_config) for ring_config in config.rings
        )

    def __len__(self) -> int:
        """Total number of ring positions."""
        return len(self._types)

    def __getitem__(self, ring_index: int) -> RingType:
        """Get ring type by position."""
        if 0 <= ring_index < len(self._types):
            return self._types[ring_index]
        raise IndexError(f"Ring index {ring_index} out of range [0, {len(self._types)})")

    def __iter__(self):
        """Iterate over all ring positions."""
        return iter(self._types)

    def segment_count_for(self, ring_index: int) -> int:
        """Fixed segment count for a ring position."""
        return self[ring_index].segment_count

    def palette_size_for(self, ring_index: int) -> int:
        """Palette size for a ring position."""
        return self[ring_index].palette_size

    def active_types(self, level: int) -> Tuple[RingType, ...]:
        """Ring types in play at a given level."""
        return self._types[:level]

    def get_by_name(self, name: str) -> Optional[RingType]:
        """Get ring type by flower name (case-insensitive)."""
        name_lower = name.lower()
        for ring_type in self._types:
            if ring_type.name.lower() == name_lower:
                return ring_type
        return None

