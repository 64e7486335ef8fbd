"""Procedural 2D map generation: a neighborhood-driven WFC solver, noise maps and Voronoi tessellation."""

from mapgen2d.constants import NO_PROBABILITY
from mapgen2d.enums import CellCollapseOrder, DistanceMetric, NoiseType
from mapgen2d.model.errors import BacktrackExhaustedError, ContradictionError, InitContradictionError, WFCError
from mapgen2d.model.neighborhood import Neighborhood
from mapgen2d.model.region import Region
from mapgen2d.model.tile import Tile
from mapgen2d.model.wfc import WaveFunctionCollapse, WFCResult

__all__ = [
    "NO_PROBABILITY",
    "BacktrackExhaustedError",
    "CellCollapseOrder",
    "ContradictionError",
    "DistanceMetric",
    "InitContradictionError",
    "Neighborhood",
    "NoiseType",
    "Region",
    "Tile",
    "WFCError",
    "WFCResult",
    "WaveFunctionCollapse",
]
