"""Contains all global enumeration classes used throughout the project."""

from __future__ import annotations

from enum import Enum
import math


class NoiseType(Enum):
    """Defines the available noise functions used for noise map creation."""

    COLORED = "Colored Noise"
    """Noise synthesized in the frequency domain with a power spectral density of f^color."""
    PERLIN = "Perlin Noise"
    """Standard Perlin noise function, known for its soft, cloud-like gradients."""
    OPENSIMPLEX = "OpenSimplex Noise"
    """Unpatented alternative to simplex noise, offers improvements over Perlin noise in terms of visual artifacts."""


class CellCollapseOrder(Enum):
    """Defines the order in which the cells of the grid are collapsed."""

    HIGHEST_ENTROPY_FIRST = "Highest Entropy First (Default)"
    """Always picks the cell with the highest entropy as the cell to collapse next."""
    LOWEST_ENTROPY_FIRST = "Lowest Entropy First"
    """Always picks the cell with the lowest entropy as the cell to collapse next."""


class DistanceMetric(Enum):
    """Defines the distance functions that shape a neighborhood."""

    MANHATTAN = "Manhattan"
    """Sum of the absolute offsets. Neighborhoods are diamond shaped."""
    CHEBYSHEV = "Chebyshev"
    """Maximum of the absolute offsets. Neighborhoods are square shaped."""
    EUCLIDEAN = "Euclidean"
    """Straight-line distance truncated to an integer. Neighborhoods are disc shaped."""

    def distance(self, offset: tuple[int, int]) -> int:
        """Returns the non-negative integer length of a (row, col) offset."""
        d_row = abs(offset[0])
        d_col = abs(offset[1])
        match self:
            case DistanceMetric.MANHATTAN:
                return d_row + d_col
            case DistanceMetric.CHEBYSHEV:
                return max(d_row, d_col)
            case DistanceMetric.EUCLIDEAN:
                # Integer square root, i.e. the truncated Euclidean length.
                return math.isqrt(d_row * d_row + d_col * d_col)
