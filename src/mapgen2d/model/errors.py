"""Contains the exceptions raised by the WFC solver."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray


class WFCError(Exception):
    """Base class of all errors raised while solving a grid."""


class ContradictionError(WFCError):
    """Raised when a cell is left without any tile of nonzero probability.

    Within a solve this is recoverable: the engine catches it and resets an area around the cell. It only reaches the
    caller wrapped in one of the fatal errors below.

    Attributes:
        coords: The (row, col) coords of the contradictory cell.
        weights: The weights the probability callback returned for the cell.
    """

    coords: tuple[int, int]
    weights: NDArray[np.double]

    def __init__(self, coords: tuple[int, int], weights: NDArray[np.double]) -> None:
        super().__init__(f"Contradiction at cell {coords}: no tile has a positive weight ({weights.tolist()})")
        self.coords = coords
        self.weights = weights


class InitContradictionError(WFCError):
    """Raised when the probability callback declares a contradiction for the empty grid.

    This indicates a malformed callback and is not recoverable.
    """


class BacktrackExhaustedError(WFCError):
    """Raised when area resets at growing radii failed to resolve a contradiction within the bombing budget.

    Attributes:
        coords: The (row, col) coords of the contradiction that could not be resolved.
        bombings: The number of area resets performed before giving up.
    """

    coords: tuple[int, int]
    bombings: int

    def __init__(self, coords: tuple[int, int], bombings: int) -> None:
        super().__init__(f"Could not resolve the contradiction at cell {coords} within {bombings} area resets")
        self.coords = coords
        self.bombings = bombings
