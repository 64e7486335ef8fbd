"""Partitions a grid into Voronoi cells with optional smooth borders and Lloyd relaxation."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial import cKDTree

from mapgen2d.constants import (
    RANDOM_SEED_DEFAULT,
    VORONOI_BORDER_COEFFICIENT_DEFAULT,
    VORONOI_BORDER_MARKER,
    VORONOI_RELAXATION_STEPS_DEFAULT,
)
from mapgen2d.model.region import Region

if TYPE_CHECKING:
    from numpy.typing import NDArray


logger = logging.getLogger(__name__)


@dataclass
class VoronoiCenter:
    """The seed point of a Voronoi cell.

    Attributes:
        position: The (row, col) position of the point. Cell (r, c) covers the area from (r, c) to (r + 1, c + 1).
        index: The index identifying the cell on the region map.
    """

    position: tuple[float, float]
    index: int


@dataclass
class Voronoi:
    """Configuration of a Voronoi tessellation.

    Every grid cell is assigned to the nearest center. With a positive border coefficient, cells that are almost as close
    to their second and third nearest centers as to their nearest one become border cells, which yields smooth walls
    between the Voronoi cells.

    Attributes:
        shape: The (height, width) of the region map (in cells).
        centers: The seed points of the Voronoi cells.
        border_marker: The value stored for border cells on the region map.
        border_coefficient: Controls the border thickness relative to the map area. 0.0 disables borders.
        relaxation_steps: Number of Lloyd relaxation steps performed by generate().
    """

    shape: tuple[int, int]
    centers: list[VoronoiCenter] = field(default_factory=list)
    border_marker: int = VORONOI_BORDER_MARKER
    border_coefficient: float = VORONOI_BORDER_COEFFICIENT_DEFAULT
    relaxation_steps: int = VORONOI_RELAXATION_STEPS_DEFAULT

    @classmethod
    def with_random_centers(
        cls,
        shape: tuple[int, int],
        count: int,
        seed: int = RANDOM_SEED_DEFAULT,
        border_coefficient: float = VORONOI_BORDER_COEFFICIENT_DEFAULT,
    ) -> Voronoi:
        """Creates a configuration with 'count' centers placed uniformly at random on the grid."""
        if count <= 0:
            raise ValueError(f"A Voronoi tessellation needs at least one center, got {count}")
        rng = np.random.default_rng(seed)
        rows = rng.uniform(0.0, shape[0], count)
        cols = rng.uniform(0.0, shape[1], count)
        centers = [VoronoiCenter((float(row), float(col)), index) for index, (row, col) in enumerate(zip(rows, cols))]
        return cls(shape, centers, border_coefficient=border_coefficient)

    def generate(self) -> VoronoiResult:
        """Computes the region map, relaxing the centers 'relaxation_steps' times."""
        if not self.centers:
            raise ValueError("A Voronoi tessellation needs at least one center")

        result = VoronoiResult(
            input_configuration=copy.deepcopy(self),
            output_configuration=copy.deepcopy(self),
            map=np.full(self.shape, self.border_marker, dtype=np.int_),
        )
        result.recompute()
        for _ in range(self.relaxation_steps):
            result.lloyd_step()
            result.recompute()
        return result


@dataclass
class VoronoiResult:
    """A computed Voronoi tessellation.

    Attributes:
        input_configuration: The configuration generate() was called on.
        output_configuration: The configuration with the relaxed centers the map was computed from.
        map: The index of the Voronoi cell each grid cell belongs to (border_marker for border cells), shape
            (height, width).
        regions: The bounding box of each Voronoi cell (by cell index), None for cells without any grid cell.
    """

    input_configuration: Voronoi
    output_configuration: Voronoi
    map: NDArray[np.int_]
    regions: list[Region | None] = field(default_factory=list)

    def recompute(self) -> None:
        """Reassigns every grid cell to the nearest center of the output configuration."""
        config = self.output_configuration
        height, width = config.shape

        tree = cKDTree(np.array([center.position for center in config.centers], dtype=np.double))
        rows, cols = np.indices((height, width))
        # Distances are measured from the middle of each grid cell.
        points = np.column_stack([rows.ravel() + 0.5, cols.ravel() + 0.5])

        neighbor_count = min(3, len(config.centers))
        distances, nearest = tree.query(points, k=neighbor_count)
        if neighbor_count == 1:
            distances = distances[:, np.newaxis]
            nearest = nearest[:, np.newaxis]

        center_indices = np.array([center.index for center in config.centers], dtype=np.int_)
        assignment = center_indices[nearest[:, 0]]

        if config.border_coefficient > 0.0 and neighbor_count == 3:
            squared = distances**2
            d1 = squared[:, 1] - squared[:, 0]
            d2 = squared[:, 2] - squared[:, 0]
            is_border = d1 * d2 < config.border_coefficient * height * width
            assignment[is_border] = config.border_marker

        self.map = assignment.reshape((height, width))

        self.regions = [None] * (int(center_indices.max()) + 1)
        for coords in Region.from_size((height, width)).iter_indices():
            index = self.map[coords]
            if index == config.border_marker:
                continue
            region = self.regions[index]
            if region is None:
                self.regions[index] = Region(coords, coords)
            else:
                region.grow_to_include(coords)

        logger.debug(f"Computed Voronoi map with {len(config.centers)} cells on a {width}x{height} grid")

    def lloyd_step(self) -> None:
        """Moves every center of the output configuration to the centroid of its current Voronoi cell.

        Centers whose cell contains no grid cell keep their position.
        """
        config = self.output_configuration
        rows, cols = np.indices(self.map.shape)

        relaxed_centers = []
        for center in config.centers:
            mask = self.map == center.index
            count = np.count_nonzero(mask)
            if count == 0:
                relaxed_centers.append(center)
                continue
            position = (float(rows[mask].mean() + 0.5), float(cols[mask].mean() + 0.5))
            relaxed_centers.append(VoronoiCenter(position, center.index))

        config.centers = relaxed_centers
