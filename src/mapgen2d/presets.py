"""Contains an example tile set and probability callback for quick testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapgen2d.model.tile import Tile

if TYPE_CHECKING:
    from mapgen2d.model.neighborhood import Neighborhood


class RainbowTile(Tile):
    """Five colors that only border their neighbors in the rainbow."""

    NOT_SET = 0
    RED = 1
    ORANGE = 2
    YELLOW = 3
    GREEN = 4
    BLUE = 5


RAINBOW_PALETTE: dict[int, tuple[int, int, int]] = {
    RainbowTile.RED: (255, 0, 0),
    RainbowTile.ORANGE: (255, 128, 0),
    RainbowTile.YELLOW: (255, 255, 0),
    RainbowTile.GREEN: (0, 255, 0),
    RainbowTile.BLUE: (0, 0, 255),
}


def rainbow_probability(neighbors: Neighborhood) -> list[float]:
    """Weights the rainbow colors of a cell so that distant colors avoid each other.

    Each color that occurs more than twice in the neighborhood rules out the colors far from it in the rainbow.
    """
    ps = [0.0, 1.0, 1.0, 1.0, 1.0, 1.0]

    if neighbors.count(RainbowTile.RED) > 2:
        ps[RainbowTile.YELLOW] = 0.0
        ps[RainbowTile.GREEN] = 0.0
        ps[RainbowTile.BLUE] = 0.0
    if neighbors.count(RainbowTile.ORANGE) > 2:
        ps[RainbowTile.GREEN] = 0.0
        ps[RainbowTile.BLUE] = 0.0
    if neighbors.count(RainbowTile.YELLOW) > 2:
        ps[RainbowTile.RED] = 0.0
        ps[RainbowTile.BLUE] = 0.0
    if neighbors.count(RainbowTile.GREEN) > 2:
        ps[RainbowTile.RED] = 0.0
        ps[RainbowTile.ORANGE] = 0.0
    if neighbors.count(RainbowTile.BLUE) > 2:
        ps[RainbowTile.RED] = 0.0
        ps[RainbowTile.ORANGE] = 0.0
        ps[RainbowTile.YELLOW] = 0.0

    return ps
