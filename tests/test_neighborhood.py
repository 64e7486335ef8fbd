"""Tests for the Neighborhood view and the distance metrics."""

from __future__ import annotations

import itertools

import numpy as np
import pytest

from mapgen2d.enums import DistanceMetric
from mapgen2d.model.neighborhood import Neighborhood
from mapgen2d.model.tile import Tile


class Shade(Tile):
    """Small tile set for neighborhood tests."""

    NOT_SET = 0
    LIGHT = 1
    DARK = 2


@pytest.fixture
def tiles() -> np.ndarray:
    return np.array(
        [
            [1, 1, 2],
            [0, 2, 2],
            [1, 0, 2],
        ],
        dtype=np.int_,
    )


# =============================================================================
# Distance metrics
# =============================================================================


@pytest.mark.parametrize(
    ("metric", "offset", "expected"),
    [
        (DistanceMetric.MANHATTAN, (2, -3), 5),
        (DistanceMetric.CHEBYSHEV, (2, -3), 3),
        (DistanceMetric.EUCLIDEAN, (2, -3), 3),
        (DistanceMetric.EUCLIDEAN, (3, 3), 4),
        (DistanceMetric.EUCLIDEAN, (1, 1), 1),
        (DistanceMetric.EUCLIDEAN, (0, 0), 0),
    ],
)
def test_metric_distance(metric: DistanceMetric, offset: tuple[int, int], expected: int) -> None:
    assert metric.distance(offset) == expected


# =============================================================================
# Shapes
# =============================================================================


def test_chebyshev_neighborhood_is_square_in_row_major_order() -> None:
    grid = np.zeros((3, 3), dtype=np.int_)
    positions = list(Neighborhood(grid, (1, 1), DistanceMetric.CHEBYSHEV, 1).iter_positions())
    assert positions == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 1), (2, 2)]


def test_manhattan_neighborhood_is_diamond() -> None:
    grid = np.zeros((5, 5), dtype=np.int_)
    assert list(Neighborhood(grid, (1, 1), DistanceMetric.MANHATTAN, 1).iter_positions()) == [
        (0, 1),
        (1, 0),
        (1, 2),
        (2, 1),
    ]
    assert len(Neighborhood(grid, (2, 2), DistanceMetric.MANHATTAN, 2)) == 12


def test_euclidean_neighborhood_is_disc() -> None:
    grid = np.zeros((7, 7), dtype=np.int_)
    neighborhood = Neighborhood(grid, (3, 3), DistanceMetric.EUCLIDEAN, 3)
    positions = set(neighborhood.iter_positions())
    assert len(positions) == 7 * 7 - 1 - 4
    assert (0, 0) not in positions
    assert (0, 1) in positions


def test_radius_zero_neighborhood_is_empty() -> None:
    grid = np.zeros((3, 3), dtype=np.int_)
    assert len(Neighborhood(grid, (1, 1), DistanceMetric.CHEBYSHEV, 0)) == 0


def test_negative_radius_is_rejected() -> None:
    with pytest.raises(ValueError):
        Neighborhood(np.zeros((3, 3), dtype=np.int_), (1, 1), DistanceMetric.CHEBYSHEV, -1)


def test_center_outside_grid_only_sees_in_bounds_cells() -> None:
    grid = np.zeros((3, 3), dtype=np.int_)
    assert list(Neighborhood(grid, (-1, -1), DistanceMetric.CHEBYSHEV, 1).iter_positions()) == [(0, 0)]
    assert list(Neighborhood(grid, (3, 1), DistanceMetric.MANHATTAN, 1).iter_positions()) == [(2, 1)]
    assert list(Neighborhood(grid, (-5, 10), DistanceMetric.CHEBYSHEV, 2).iter_positions()) == []


@pytest.mark.parametrize("metric", list(DistanceMetric))
def test_positions_are_in_bounds_and_exclude_center(metric: DistanceMetric) -> None:
    height, width = 4, 6
    grid = np.zeros((height, width), dtype=np.int_)
    for center, radius in itertools.product(itertools.product(range(-4, 10), repeat=2), range(0, 5)):
        for row, col in Neighborhood(grid, center, metric, radius).iter_positions():
            assert 0 <= row < height
            assert 0 <= col < width
            assert (row, col) != center
            assert metric.distance((row - center[0], col - center[1])) <= radius


# =============================================================================
# Queries
# =============================================================================


def test_iter_yields_tile_values(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (1, 1))
    assert list(neighborhood) == [1, 1, 2, 0, 2, 1, 0, 2]


def test_iter_converts_to_tile_type(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (0, 0), tile_type=Shade)
    values = list(neighborhood)
    assert values == [Shade.LIGHT, Shade.NOT_SET, Shade.DARK]
    assert all(isinstance(value, Shade) for value in values)


def test_iter_with_positions(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (2, 2), tile_type=Shade)
    assert list(neighborhood.iter_with_positions()) == [
        ((1, 1), Shade.DARK),
        ((1, 2), Shade.DARK),
        ((2, 1), Shade.NOT_SET),
    ]


def test_count(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (1, 1), tile_type=Shade)
    assert neighborhood.count(Shade.LIGHT) == 3
    assert neighborhood.count(Shade.DARK) == 3
    assert neighborhood.count(Shade.NOT_SET) == 2


def test_membership_queries(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (2, 2), tile_type=Shade)
    assert Shade.DARK in neighborhood
    assert Shade.LIGHT not in neighborhood
    assert neighborhood.has_only({Shade.DARK, Shade.NOT_SET})
    assert not neighborhood.has_only({Shade.DARK})
    assert neighborhood.has_any({Shade.LIGHT, Shade.DARK})
    assert not neighborhood.has_any({Shade.LIGHT})


def test_has_only_is_true_for_empty_neighborhood() -> None:
    grid = np.zeros((2, 2), dtype=np.int_)
    assert Neighborhood(grid, (10, 10)).has_only(set())


def test_most_common_breaks_ties_by_lowest_index(tiles: np.ndarray) -> None:
    # LIGHT and DARK both occur three times.
    assert Neighborhood(tiles, (1, 1), tile_type=Shade).most_common() == Shade.LIGHT
    assert Neighborhood(tiles, (2, 2), tile_type=Shade).most_common() == Shade.DARK


def test_most_common_of_empty_neighborhood_is_none() -> None:
    grid = np.zeros((2, 2), dtype=np.int_)
    assert Neighborhood(grid, (-3, -3)).most_common() is None


def test_range_ignores_unset_tiles(tiles: np.ndarray) -> None:
    assert Neighborhood(tiles, (1, 1), tile_type=Shade).range() == (Shade.LIGHT, Shade.DARK)
    assert Neighborhood(np.zeros((3, 3), dtype=np.int_), (1, 1)).range() is None


def test_get_by_offset(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (0, 0), DistanceMetric.CHEBYSHEV, 1, Shade)
    assert neighborhood.get((0, 1)) == Shade.LIGHT
    assert neighborhood.get((1, 1)) == Shade.DARK
    assert neighborhood.get((-1, 0)) is None
    assert neighborhood.get((0, 0)) is None
    assert neighborhood.get((0, 2)) is None


def test_center_is_reported(tiles: np.ndarray) -> None:
    neighborhood = Neighborhood(tiles, (-2, 5), DistanceMetric.MANHATTAN, 3)
    assert neighborhood.center == (-2, 5)
    assert neighborhood.metric == DistanceMetric.MANHATTAN
    assert neighborhood.radius == 3
    assert neighborhood.grid_size == (3, 3)
