"""Contains the class for axis-aligned rectangular areas of a grid."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass
class Region:
    """An axis-aligned rectangle of grid cells with inclusive corners.

    Regions delimit the batches of cells that the WFC solver (re)initializes, and the bounding boxes of Voronoi cells.
    A region whose top-left corner lies below or to the right of its bottom-right corner is empty.

    Attributes:
        top_left: The (row, col) coords of the top-left corner (inclusive).
        bottom_right: The (row, col) coords of the bottom-right corner (inclusive).
    """

    top_left: tuple[int, int]
    bottom_right: tuple[int, int]

    @classmethod
    def from_size(cls, size: tuple[int, int]) -> Region:
        """Creates a region of the given (rows, cols) size anchored at (0, 0)."""
        return cls((0, 0), (size[0] - 1, size[1] - 1))

    @classmethod
    def from_corners(cls, corner_a: tuple[int, int], corner_b: tuple[int, int]) -> Region:
        """Creates the smallest region containing both (inclusive) corners."""
        return cls(
            (min(corner_a[0], corner_b[0]), min(corner_a[1], corner_b[1])),
            (max(corner_a[0], corner_b[0]), max(corner_a[1], corner_b[1])),
        )

    @classmethod
    def around(cls, center: tuple[int, int], radius: int) -> Region:
        """Creates a square region reaching 'radius' cells from 'center' in each direction.

        The top-left corner is clamped to non-negative coords. The bottom-right corner is not clamped; use intersect()
        with the grid bounds for that.
        """
        return cls(
            (max(center[0] - radius, 0), max(center[1] - radius, 0)),
            (center[0] + radius, center[1] + radius),
        )

    @property
    def size(self) -> tuple[int, int]:
        """The (rows, cols) extent of the region, (0, 0) if it is empty."""
        if self.is_empty():
            return 0, 0
        return self.bottom_right[0] - self.top_left[0] + 1, self.bottom_right[1] - self.top_left[1] + 1

    @property
    def area(self) -> int:
        """The number of cells in the region."""
        rows, cols = self.size
        return rows * cols

    @property
    def center(self) -> tuple[int, int]:
        """The (row, col) coords of the center cell, rounded towards the top-left."""
        return (self.top_left[0] + self.bottom_right[0]) // 2, (self.top_left[1] + self.bottom_right[1]) // 2

    def is_empty(self) -> bool:
        """Returns True if the region contains no cell."""
        return self.top_left[0] > self.bottom_right[0] or self.top_left[1] > self.bottom_right[1]

    def contains(self, coords: tuple[int, int]) -> bool:
        """Returns True if the cell at 'coords' lies inside the region."""
        return (
            self.top_left[0] <= coords[0] <= self.bottom_right[0]
            and self.top_left[1] <= coords[1] <= self.bottom_right[1]
        )

    def grow_to_include(self, coords: tuple[int, int]) -> None:
        """Extends the region minimally so that it contains the cell at 'coords'."""
        self.top_left = (min(self.top_left[0], coords[0]), min(self.top_left[1], coords[1]))
        self.bottom_right = (max(self.bottom_right[0], coords[0]), max(self.bottom_right[1], coords[1]))

    def intersect(self, other: Region) -> Region:
        """Returns the part of the region that lies inside 'other'.

        To clip a region to a grid, pass the grid bounds (Region.from_size(grid.shape)) as 'other'. The result never
        extends outside 'other'; it is empty if the two regions don't overlap.
        """
        return Region(
            (max(self.top_left[0], other.top_left[0]), max(self.top_left[1], other.top_left[1])),
            (min(self.bottom_right[0], other.bottom_right[0]), min(self.bottom_right[1], other.bottom_right[1])),
        )

    def as_slices(self) -> tuple[slice, slice]:
        """Returns the (row, col) slices selecting the region from a 2D (or higher) array."""
        if self.is_empty():
            return slice(0, 0), slice(0, 0)
        return slice(self.top_left[0], self.bottom_right[0] + 1), slice(self.top_left[1], self.bottom_right[1] + 1)

    def iter_indices(self) -> Iterator[tuple[int, int]]:
        """Yields the coords of every cell in the region, row by row (columns varying fastest)."""
        if self.is_empty():
            return
        row, col = self.top_left
        while row <= self.bottom_right[0]:
            yield row, col
            col += 1
            if col > self.bottom_right[1]:
                col = self.top_left[1]
                row += 1
