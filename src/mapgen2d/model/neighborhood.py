"""Contains the view on the tiles surrounding a grid position."""

from __future__ import annotations

from collections import Counter
from collections.abc import Collection, Iterator
from typing import Any, TYPE_CHECKING

from mapgen2d.constants import INVALID_TILE_INDEX, WFC_DISTANCE_METRIC_DEFAULT, WFC_NEIGHBORHOOD_RADIUS_DEFAULT

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from mapgen2d.enums import DistanceMetric
    from mapgen2d.model.tile import Tile


class Neighborhood:
    """Read-only view on the tiles around a position of a tile grid.

    The neighborhood consists of all grid cells whose distance to the center (according to the distance metric) is at
    most the radius. The center cell itself is never part of its neighborhood. The center may lie outside the grid, in
    which case only the in-bounds part of the neighborhood is visible. Neighbors are always visited in the same order:
    row by row, columns varying fastest.

    Tile values are reported as members of the tile type if one is given, and as plain indices otherwise. Cells that
    have not been set yet report the "not set" tile (index 0).
    """

    # The tile grid the neighborhood looks at (tile indices, shape (height, width)).
    _tiles: NDArray[np.int_]
    # The (row, col) coords of the center, possibly outside the grid.
    _center: tuple[int, int]
    # The distance function deciding which cells around the center are neighbors.
    _metric: DistanceMetric
    # The maximum distance of a neighbor from the center.
    _radius: int
    # The tile set used to convert tile indices into tiles, or None to report plain indices.
    _tile_type: type[Tile] | None

    def __init__(
        self,
        tiles: NDArray[np.int_],
        center: tuple[int, int],
        metric: DistanceMetric = WFC_DISTANCE_METRIC_DEFAULT,
        radius: int = WFC_NEIGHBORHOOD_RADIUS_DEFAULT,
        tile_type: type[Tile] | None = None,
    ) -> None:
        """Creates a neighborhood view.

        Args:
            tiles: The tile grid (tile indices, shape (height, width)).
            center: The (row, col) coords of the center. Allowed to lie outside the grid.
            metric: The distance function deciding which cells around the center are neighbors. Defaults to
                constants.WFC_DISTANCE_METRIC_DEFAULT.
            radius: The maximum distance of a neighbor from the center. Defaults to
                constants.WFC_NEIGHBORHOOD_RADIUS_DEFAULT.
            tile_type: The tile set used to convert tile indices into tiles. Defaults to None (plain indices).
        """
        if radius < 0:
            raise ValueError(f"Neighborhood radius must not be negative, got {radius}")

        self._tiles = tiles
        self._center = (int(center[0]), int(center[1]))
        self._metric = metric
        self._radius = radius
        self._tile_type = tile_type

    @property
    def center(self) -> tuple[int, int]:
        """The (row, col) coords of the center."""
        return self._center

    @property
    def metric(self) -> DistanceMetric:
        """The distance function of the neighborhood."""
        return self._metric

    @property
    def radius(self) -> int:
        """The maximum distance of a neighbor from the center."""
        return self._radius

    @property
    def grid_size(self) -> tuple[int, int]:
        """The (height, width) of the underlying tile grid."""
        return self._tiles.shape[0], self._tiles.shape[1]

    def iter_positions(self) -> Iterator[tuple[int, int]]:
        """Yields the coords of all neighbors. All yielded coords lie inside the grid."""
        height, width = self.grid_size
        min_row = max(self._center[0] - self._radius, 0)
        max_row = min(self._center[0] + self._radius, height - 1)
        min_col = max(self._center[1] - self._radius, 0)
        max_col = min(self._center[1] + self._radius, width - 1)

        for row in range(min_row, max_row + 1):
            for col in range(min_col, max_col + 1):
                if (row, col) == self._center:
                    continue
                if self._metric.distance((row - self._center[0], col - self._center[1])) <= self._radius:
                    yield row, col

    def iter_with_positions(self) -> Iterator[tuple[tuple[int, int], Any]]:
        """Yields (coords, tile) pairs for all neighbors."""
        for coords in self.iter_positions():
            yield coords, self._to_tile(self._tiles[coords])

    def __iter__(self) -> Iterator[Any]:
        """Yields the tiles of all neighbors."""
        for _, tile in self.iter_with_positions():
            yield tile

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_positions())

    def __contains__(self, tile: object) -> bool:
        return any(neighbor == tile for neighbor in self)

    def get(self, offset: tuple[int, int]) -> Any | None:
        """Returns the tile at the given (row, col) offset from the center.

        Returns None if the offset points outside the grid or outside the neighborhood (including the center itself).
        """
        if offset == (0, 0) or self._metric.distance(offset) > self._radius:
            return None
        row = self._center[0] + offset[0]
        col = self._center[1] + offset[1]
        height, width = self.grid_size
        if not (0 <= row < height and 0 <= col < width):
            return None
        return self._to_tile(self._tiles[row, col])

    def count(self, tile: object) -> int:
        """Counts the neighbors holding the given tile."""
        return sum(1 for neighbor in self if neighbor == tile)

    def has_only(self, tiles: Collection[Any]) -> bool:
        """Returns True if every neighbor holds one of the given tiles (also True for an empty neighborhood)."""
        return all(neighbor in tiles for neighbor in self)

    def has_any(self, tiles: Collection[Any]) -> bool:
        """Returns True if at least one neighbor holds one of the given tiles."""
        return any(neighbor in tiles for neighbor in self)

    def most_common(self) -> Any | None:
        """Returns the tile held by the most neighbors, or None if the neighborhood is empty.

        Ties are broken in favor of the tile with the lowest index.
        """
        counts = Counter(int(tile) for tile in self)
        if not counts:
            return None
        tile_index = min(counts, key=lambda index: (-counts[index], index))
        return self._to_tile(tile_index)

    def range(self) -> tuple[Any, Any] | None:
        """Returns the (lowest, highest) tile among the neighbors that have been set.

        Returns None if no neighbor has been set yet.
        """
        tile_indices = [int(tile) for tile in self if int(tile) != INVALID_TILE_INDEX]
        if not tile_indices:
            return None
        return self._to_tile(min(tile_indices)), self._to_tile(max(tile_indices))

    def _to_tile(self, tile_index: Any) -> Any:
        """Converts a raw grid value into the tile reported to the caller."""
        if self._tile_type is None:
            return int(tile_index)
        return self._tile_type.from_index(int(tile_index))
