"""Contains global constants and default values used throughout the project."""

from mapgen2d.enums import CellCollapseOrder, DistanceMetric, NoiseType


# === WFC CONSTANTS ===

# Marks a probability entry that has not been computed yet. A probability callback returning this value in slot 0
# declares the evaluated cell a contradiction.
NO_PROBABILITY: float = -1.0

# Tile index reserved for cells that have not been set yet. Never a candidate for commitment.
INVALID_TILE_INDEX: int = 0

WFC_NEIGHBORHOOD_RADIUS_DEFAULT: int = 1
WFC_DISTANCE_METRIC_DEFAULT: DistanceMetric = DistanceMetric.CHEBYSHEV
WFC_CELL_COLLAPSE_ORDER_DEFAULT: CellCollapseOrder = CellCollapseOrder.HIGHEST_ENTROPY_FIRST

# Radius of the first area reset around a contradiction. Every further reset doubles it.
WFC_BACKTRACK_RADIUS_DEFAULT: int = 2
# Total number of area resets allowed during one solve before giving up.
WFC_MAX_BOMBINGS_DEFAULT: int = 10

TILEMAP_SIZE_DEFAULT: int = 100

RANDOM_SEED_DEFAULT: int = 1234

# === NOISE CONSTANTS ===

# Exponent of the power spectral density. -2.0 yields Brownian ("red") noise.
NOISE_COLOR_DEFAULT: float = -2.0
NOISE_TYPE_DEFAULT: NoiseType = NoiseType.COLORED
NOISE_OCTAVES_DEFAULT: float = 5.0

# === VORONOI CONSTANTS ===

VORONOI_CELL_COUNT_DEFAULT: int = 100
VORONOI_BORDER_MARKER: int = -1
VORONOI_BORDER_COEFFICIENT_DEFAULT: float = 10.0
VORONOI_RELAXATION_STEPS_DEFAULT: int = 2

# === RENDERING CONSTANTS ===

TILE_SIZE_DEFAULT: int = 1

# Color used for cells without a committed tile and for Voronoi borders.
UNSET_COLOR_RGB: tuple[int, int, int] = (0, 0, 0)
