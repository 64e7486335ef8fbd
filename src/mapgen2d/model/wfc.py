"""Implements the core WFC algorithm with area-reset backtracking."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import TYPE_CHECKING

import numpy as np

from mapgen2d.constants import (
    INVALID_TILE_INDEX,
    NO_PROBABILITY,
    WFC_BACKTRACK_RADIUS_DEFAULT,
    WFC_CELL_COLLAPSE_ORDER_DEFAULT,
    WFC_DISTANCE_METRIC_DEFAULT,
    WFC_MAX_BOMBINGS_DEFAULT,
    WFC_NEIGHBORHOOD_RADIUS_DEFAULT,
)
from mapgen2d.enums import CellCollapseOrder
from mapgen2d.model.entropy_queue import EntropyQueue
from mapgen2d.model.errors import BacktrackExhaustedError, ContradictionError, InitContradictionError
from mapgen2d.model.neighborhood import Neighborhood
from mapgen2d.model.probability import compute_entropy, evaluate_probability
from mapgen2d.model.region import Region

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray

    from mapgen2d.enums import DistanceMetric
    from mapgen2d.model.probability import ProbabilityCallback
    from mapgen2d.model.tile import Tile


logger = logging.getLogger(__name__)


class WaveFunctionCollapse:
    """Fills a tile grid cell by cell so that every tile is consistent with its neighborhood.

    The tile weights of each cell are derived from its neighborhood by a caller-supplied probability callback. The
    solver repeatedly picks the cell with the most extreme entropy, commits it to a tile drawn according to the cell's
    probabilities, and re-evaluates the probabilities of the uncommitted cells around it. When a re-evaluation leaves a
    cell without any possible tile (a contradiction), the solver "bombs" a square area around that cell: all tiles in
    the area are cleared and their probabilities are derived anew. Every bombing doubles the radius of the next one.
    Once the number of bombings exceeds 'max_bombings', the solve fails.

    A solve is fully determined by the configuration: two solvers with the same size, seed, callback, metric and radii
    produce identical grids, provided the callback itself is deterministic.

    Attributes:
        width: The width of the grid (in cells).
        height: The height of the grid (in cells).
        commits: The number of tiles committed during the last call to generate().
        bombings: The number of area resets performed during the last call to generate().
    """

    width: int
    height: int
    commits: int
    bombings: int

    # === CONSTRUCTOR PARAMETERS (initialized in __init__()) ===

    # Seed used for the tile rolls.
    _random_seed: int
    # Callback mapping a cell's neighborhood to one unnormalized weight per tile index.
    _probability: ProbabilityCallback
    # The tile set placed by the solver.
    _tile_type: type[Tile]
    # Total number of tile indices, including the "not set" index 0.
    _tile_count: int
    # The maximum distance (according to '_metric') of a cell's neighbors.
    _neighborhood_radius: int
    # The distance function shaping neighborhoods.
    _metric: DistanceMetric
    # Radius of the first area reset. Each further reset doubles it.
    _backtrack_radius: int
    # Number of area resets allowed during one solve.
    _max_bombings: int
    # Strategy for selecting the next cell to commit.
    _cell_collapse_order: CellCollapseOrder

    # === RUNTIME STATE (initialized in generate()) ===

    # Random number generator seeded with '_random_seed'.
    _rng: random.Random
    # The region covering the whole grid.
    _bounds: Region
    # The tile grid (tile indices, 0 for cells that have not been committed yet).
    _tiles: NDArray[np.int_]
    # True for each cell that has been committed.
    _valid: NDArray[np.bool_]
    # Normalized tile probabilities per cell, shape (height, width, tile count).
    _probabilities: NDArray[np.double]
    # Uncommitted cells, ordered by their entropy according to '_cell_collapse_order'.
    _entropy_queue: EntropyQueue

    def __init__(
        self,
        width: int,
        height: int,
        random_seed: int,
        probability: ProbabilityCallback,
        tile_type: type[Tile],
        neighborhood_radius: int = WFC_NEIGHBORHOOD_RADIUS_DEFAULT,
        metric: DistanceMetric = WFC_DISTANCE_METRIC_DEFAULT,
        backtrack_radius: int = WFC_BACKTRACK_RADIUS_DEFAULT,
        max_bombings: int = WFC_MAX_BOMBINGS_DEFAULT,
        cell_collapse_order: CellCollapseOrder = WFC_CELL_COLLAPSE_ORDER_DEFAULT,
    ) -> None:
        """Initializes the solver with all necessary config data.

        Args:
            width: The width of the grid (in cells).
            height: The height of the grid (in cells).
            random_seed: Seed used for the tile rolls.
            probability: Callback mapping a cell's neighborhood to one unnormalized, non-negative weight per tile index
                (NO_PROBABILITY in slot 0 to declare a contradiction). Must be deterministic.
            tile_type: The tile set placed by the solver. Must contain at least one tile besides the "not set" tile.
            neighborhood_radius: The maximum distance of a cell's neighbors. Defaults to
                constants.WFC_NEIGHBORHOOD_RADIUS_DEFAULT.
            metric: The distance function shaping neighborhoods. Defaults to constants.WFC_DISTANCE_METRIC_DEFAULT.
            backtrack_radius: Radius of the first area reset around a contradiction. Must be at least 1. Defaults to
                constants.WFC_BACKTRACK_RADIUS_DEFAULT.
            max_bombings: Number of area resets allowed during one solve. Defaults to
                constants.WFC_MAX_BOMBINGS_DEFAULT.
            cell_collapse_order: Strategy for selecting the next cell to commit. Defaults to
                constants.WFC_CELL_COLLAPSE_ORDER_DEFAULT.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        if tile_type.tile_count() < 2:
            raise ValueError(f"{tile_type.__name__} must contain at least one tile besides the 'not set' tile")
        if neighborhood_radius < 0 or max_bombings < 0:
            raise ValueError("The neighborhood radius and the bombing budget must not be negative")
        if backtrack_radius < 1:
            raise ValueError(f"Backtrack radius must be at least 1 for area resets to grow, got {backtrack_radius}")

        self.width = width
        self.height = height
        self.commits = 0
        self.bombings = 0

        self._random_seed = random_seed
        self._probability = probability
        self._tile_type = tile_type
        self._tile_count = tile_type.tile_count()
        self._neighborhood_radius = neighborhood_radius
        self._metric = metric
        self._backtrack_radius = backtrack_radius
        self._max_bombings = max_bombings
        self._cell_collapse_order = cell_collapse_order

    def generate(self) -> WFCResult:
        """Solves the whole grid.

        Returns:
            The fully committed grid.

        Raises:
            InitContradictionError: The probability callback declared a contradiction for the empty grid.
            BacktrackExhaustedError: A contradiction could not be resolved within the bombing budget.
        """
        self._rng = random.Random(self._random_seed)
        self._bounds = Region.from_size((self.height, self.width))
        self._tiles = np.full((self.height, self.width), INVALID_TILE_INDEX, dtype=np.int_)
        self._valid = np.full((self.height, self.width), False, dtype=bool)
        self._probabilities = np.full((self.height, self.width, self._tile_count), NO_PROBABILITY, dtype=np.double)
        self._entropy_queue = EntropyQueue()
        self.commits = 0
        self.bombings = 0

        logger.info(f"Starting WFC on a {self.width}x{self.height} grid with {self._tile_count} tiles")

        try:
            self._initialize_region(self._bounds)
        except ContradictionError as exc:
            raise InitContradictionError(
                f"Probability callback declared a contradiction for the empty grid at cell {exc.coords}"
            ) from exc
        self._compute_entropies(self._bounds)

        while self._entropy_queue:
            target, _ = self._entropy_queue.pop()
            tile_index = self._choose_tile_index(target)

            contradictions = self._set_tile(target, tile_index)
            if contradictions:
                self._resolve_contradictions(contradictions)

        assert self._valid.all()

        logger.info(f"WFC finished after {self.commits} commits and {self.bombings} area resets")

        return WFCResult(
            tiles=self._tiles.copy(),
            valid=self._valid.copy(),
            probabilities=self._probabilities.copy(),
            tile_type=self._tile_type,
            commits=self.commits,
            bombings=self.bombings,
        )

    def _initialize_region(self, region: Region) -> None:
        """Clears all cells of a region and evaluates their probabilities against the rest of the grid."""
        slice2d = region.as_slices()
        self._tiles[slice2d] = INVALID_TILE_INDEX
        self._valid[slice2d] = False
        self._probabilities[slice2d] = NO_PROBABILITY

        for coords in region.iter_indices():
            self._compute_probability(coords)

    def _compute_entropies(self, region: Region) -> None:
        """(Re)queues all cells of a region with their current entropy."""
        for coords in region.iter_indices():
            self._add_to_entropy_queue(coords)

    def _compute_probability(self, coords: tuple[int, int]) -> None:
        """Evaluates the probability callback for a single cell."""
        evaluate_probability(
            coords,
            self._tiles,
            self._probability,
            self._probabilities,
            self._neighborhood_radius,
            self._metric,
            self._tile_type,
        )

    def _add_to_entropy_queue(self, coords: tuple[int, int]) -> None:
        """Adds cell coords to the priority queue (or updates them) based on collapse order."""
        entropy = compute_entropy(self._probabilities[coords])
        match self._cell_collapse_order:
            case CellCollapseOrder.HIGHEST_ENTROPY_FIRST:
                # Use negative entropy to pop the highest entropy from the min-heap first.
                self._entropy_queue.push(coords, -entropy)
            case CellCollapseOrder.LOWEST_ENTROPY_FIRST:
                self._entropy_queue.push(coords, entropy)

    def _choose_tile_index(self, coords: tuple[int, int]) -> int:
        """Randomly picks a tile index for a cell, weighed by the cell's probabilities.

        Walks the probabilities in increasing index order and returns the first tile at which the running sum reaches
        the roll. Tiles with zero probability are never returned.
        """
        roll = self._rng.random()
        probabilities = self._probabilities[coords]

        p_sum = 0.0
        tile_index = None
        for i in range(self._tile_count):
            p = float(probabilities[i])
            if p <= 0.0:
                continue
            p_sum += p
            tile_index = i
            if roll <= p_sum:
                break

        # Falls through to the last possible tile if rounding left p_sum slightly below the roll.
        assert tile_index is not None, f"Cell {coords} has no possible tile: {probabilities.tolist()}"
        assert tile_index != INVALID_TILE_INDEX
        return tile_index

    def _set_tile(self, coords: tuple[int, int], tile_index: int) -> list[ContradictionError]:
        """Commits a cell to a tile and re-evaluates all uncommitted cells around it.

        Returns:
            The contradictions found while re-evaluating the neighbors, in neighborhood order. Every neighbor is
            re-evaluated, even after a contradiction has been found.
        """
        assert not self._valid[coords]

        self._tiles[coords] = tile_index
        self._valid[coords] = True
        self.commits += 1

        # The committed tile has probability 1.0, every other tile 0.0.
        self._probabilities[coords] = 0.0
        self._probabilities[coords + (tile_index,)] = 1.0

        logger.debug(f"Committed cell {coords} to tile {self._tile_type.from_index(tile_index)!r}")

        contradictions = []
        neighborhood = Neighborhood(self._tiles, coords, self._metric, self._neighborhood_radius)
        for neighbor_coords in neighborhood.iter_positions():
            # Only cells that have not been committed yet are affected.
            if self._valid[neighbor_coords]:
                continue
            try:
                self._compute_probability(neighbor_coords)
            except ContradictionError as exc:
                contradictions.append(exc)
                continue
            self._add_to_entropy_queue(neighbor_coords)
        return contradictions

    def _resolve_contradictions(self, contradictions: list[ContradictionError]) -> None:
        """Backtracks until none of the given contradictions is left.

        An area reset around the first contradiction may leave later ones outside the reset area. Those cells still
        hold probabilities from before the last commit, so they are evaluated again and backtracked from if they are
        still contradictory. The same goes for the uncommitted cells bordering the reset area, whose neighborhoods
        lost the tiles that were cleared.

        Raises:
            BacktrackExhaustedError: The bombing budget is used up.
        """
        while contradictions:
            reset_region = self._backtrack(contradictions[0])

            stale_cells = [
                contradiction.coords
                for contradiction in contradictions[1:]
                if not reset_region.contains(contradiction.coords)
            ]
            stale_cells.extend(self._iter_border_cells(reset_region))

            remaining_contradictions = []
            for coords in dict.fromkeys(stale_cells):
                if self._valid[coords]:
                    continue
                try:
                    self._compute_probability(coords)
                except ContradictionError as exc:
                    remaining_contradictions.append(exc)
                    continue
                self._add_to_entropy_queue(coords)
            contradictions = remaining_contradictions

    def _iter_border_cells(self, region: Region) -> Iterator[tuple[int, int]]:
        """Yields the cells outside a region that have a cell of the region in their neighborhood."""
        radius = self._neighborhood_radius
        border = Region(
            (region.top_left[0] - radius, region.top_left[1] - radius),
            (region.bottom_right[0] + radius, region.bottom_right[1] + radius),
        ).intersect(self._bounds)
        for coords in border.iter_indices():
            if region.contains(coords):
                continue
            neighborhood = Neighborhood(self._tiles, coords, self._metric, radius)
            if any(region.contains(position) for position in neighborhood.iter_positions()):
                yield coords

    def _backtrack(self, contradiction: ContradictionError) -> Region:
        """Resets an area around a contradictory cell so that it can be solved anew.

        The area is a square around the cell, clipped to the grid, with a radius of 'backtrack_radius * 2^bombings'.
        If even the cleared area is contradictory (because of the commitments around it), the next larger area is
        tried. Every attempt counts against the bombing budget. Cells outside the area keep their tiles.

        Returns:
            The area that was reset.

        Raises:
            BacktrackExhaustedError: The bombing budget is used up.
        """
        coords = contradiction.coords
        cause: ContradictionError = contradiction
        while True:
            radius = self._backtrack_radius * 2**self.bombings
            self.bombings += 1
            if self.bombings > self._max_bombings:
                raise BacktrackExhaustedError(coords, self._max_bombings) from cause

            region = Region.around(coords, radius).intersect(self._bounds)
            logger.info(
                f"Contradiction at cell {cause.coords}, resetting {region.size[0]}x{region.size[1]} cells around "
                f"{coords} (area reset {self.bombings}/{self._max_bombings})"
            )

            try:
                self._initialize_region(region)
            except ContradictionError as exc:
                logger.debug(f"Cleared area is still contradictory at cell {exc.coords}, growing the area")
                cause = exc
                continue

            self._compute_entropies(region)
            return region


@dataclass(frozen=True)
class WFCResult:
    """The outcome of a successful solve.

    Attributes:
        tiles: The committed tile indices, shape (height, width).
        valid: True for each committed cell (all cells of a solved grid), shape (height, width).
        probabilities: The final one-hot probability vectors, shape (height, width, tile count).
        tile_type: The tile set the indices belong to.
        commits: The number of tiles committed during the solve (more than the cell count if area resets occurred).
        bombings: The number of area resets performed during the solve.
    """

    tiles: NDArray[np.int_]
    valid: NDArray[np.bool_]
    probabilities: NDArray[np.double]
    tile_type: type[Tile]
    commits: int
    bombings: int

    @property
    def size(self) -> tuple[int, int]:
        """The (width, height) of the grid."""
        return self.tiles.shape[1], self.tiles.shape[0]

    def tile_at(self, coords: tuple[int, int]) -> Tile:
        """Returns the tile committed at the given (row, col) coords."""
        return self.tile_type.from_index(self.tiles[coords])

    def tile_grid(self) -> list[list[Tile]]:
        """Returns the grid as rows of tiles."""
        return [[self.tile_type.from_index(tile_index) for tile_index in row] for row in self.tiles]
