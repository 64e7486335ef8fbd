"""Contains the base class for tile sets placed by the WFC solver."""

from __future__ import annotations

from enum import IntEnum

from mapgen2d.constants import INVALID_TILE_INDEX


class Tile(IntEnum):
    """Base class for a finite, densely indexed set of tiles.

    Concrete tile sets subclass this with one member per tile. Member values must be the indices 0 to N-1, where 0 is
    reserved for the "not set" tile:

        class Terrain(Tile):
            NOT_SET = 0
            WATER = 1
            GRASS = 2

    Members compare equal to their index, so they can be used wherever the solver expects a plain tile index.
    """

    @classmethod
    def invalid(cls) -> Tile:
        """Returns the member marking a cell that has not been set yet."""
        return cls(INVALID_TILE_INDEX)

    @classmethod
    def from_index(cls, index: int) -> Tile:
        """Returns the member with the given index."""
        return cls(int(index))

    @classmethod
    def tile_count(cls) -> int:
        """Returns the number of tiles in the set, including the "not set" tile."""
        return len(cls)

    def as_index(self) -> int:
        """Returns the index of the tile."""
        return int(self)

    def is_valid(self) -> bool:
        """Returns True if the tile is an actual tile rather than the "not set" marker."""
        return self.value != INVALID_TILE_INDEX
