"""Tests for the Voronoi tessellation."""

from __future__ import annotations

import numpy as np
import pytest

from mapgen2d.model.voronoi import Voronoi, VoronoiCenter


def _voronoi(border_coefficient: float, relaxation_steps: int = 0) -> Voronoi:
    config = Voronoi.with_random_centers((40, 30), 8, seed=21, border_coefficient=border_coefficient)
    config.relaxation_steps = relaxation_steps
    return config


def test_random_centers_lie_on_the_grid() -> None:
    config = Voronoi.with_random_centers((40, 30), 25, seed=1)
    assert [center.index for center in config.centers] == list(range(25))
    for center in config.centers:
        assert 0.0 <= center.position[0] < 40.0
        assert 0.0 <= center.position[1] < 30.0


def test_invalid_center_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        Voronoi.with_random_centers((10, 10), 0)
    with pytest.raises(ValueError):
        Voronoi((10, 10)).generate()


def test_every_cell_belongs_to_its_nearest_center() -> None:
    centers = [VoronoiCenter((2.0, 2.0), 0), VoronoiCenter((2.0, 17.0), 1), VoronoiCenter((8.0, 10.0), 2)]
    result = Voronoi((10, 20), centers, border_coefficient=0.0, relaxation_steps=0).generate()

    assert result.map.shape == (10, 20)
    assert result.map[0, 0] == 0
    assert result.map[1, 19] == 1
    assert result.map[9, 10] == 2


def test_without_borders_every_cell_is_assigned() -> None:
    result = _voronoi(border_coefficient=0.0, relaxation_steps=2).generate()
    assert result.map.min() >= 0
    assert result.map.max() < 8


def test_huge_border_coefficient_makes_every_cell_a_border() -> None:
    result = _voronoi(border_coefficient=1e12).generate()
    assert np.all(result.map == result.output_configuration.border_marker)
    assert all(region is None for region in result.regions)


def test_borders_grow_with_the_coefficient() -> None:
    plain = _voronoi(0.0).generate().map
    thin = _voronoi(1.0).generate().map
    thick = _voronoi(50.0).generate().map

    thin_border = thin == -1
    thick_border = thick == -1
    assert np.all(thick_border[thin_border])
    assert thick_border.sum() >= thin_border.sum()
    # Borders only replace cells, they never move them to another Voronoi cell.
    assert np.array_equal(thick[~thick_border], plain[~thick_border])


def test_regions_bound_their_cells() -> None:
    result = _voronoi(border_coefficient=2.0, relaxation_steps=1).generate()
    for index, region in enumerate(result.regions):
        rows, cols = np.nonzero(result.map == index)
        if region is None:
            assert rows.size == 0
            continue
        assert region.top_left == (rows.min(), cols.min())
        assert region.bottom_right == (rows.max(), cols.max())


def test_single_center_covers_whole_grid() -> None:
    result = Voronoi((6, 5), [VoronoiCenter((1.0, 1.0), 0)], relaxation_steps=1).generate()
    assert np.all(result.map == 0)
    assert result.regions[0].size == (6, 5)
    assert result.output_configuration.centers[0].position == pytest.approx((3.0, 2.5))


def test_relaxation_moves_centers_and_keeps_input() -> None:
    config = _voronoi(border_coefficient=0.0, relaxation_steps=1)
    original_centers = list(config.centers)

    result = config.generate()

    assert result.input_configuration.centers == original_centers
    assert config.centers == original_centers
    moved = [
        before.position != after.position
        for before, after in zip(original_centers, result.output_configuration.centers)
    ]
    assert any(moved)


def test_without_relaxation_output_equals_input() -> None:
    result = _voronoi(border_coefficient=0.0).generate()
    assert result.output_configuration.centers == result.input_configuration.centers


def test_lloyd_step_moves_center_to_cell_centroid() -> None:
    centers = [VoronoiCenter((0.0, 0.0), 0), VoronoiCenter((0.0, 10.0), 1)]
    result = Voronoi((4, 10), centers, border_coefficient=0.0, relaxation_steps=0).generate()
    result.lloyd_step()

    left, right = result.output_configuration.centers
    # Columns 0..4 are closer to the left center, 5..9 to the right one.
    assert left.position == pytest.approx((2.0, 2.5))
    assert right.position == pytest.approx((2.0, 7.5))
