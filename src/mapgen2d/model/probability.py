"""Computes per-cell tile probabilities and their Shannon entropy."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeAlias

import numpy as np

from mapgen2d.constants import INVALID_TILE_INDEX, NO_PROBABILITY
from mapgen2d.model.errors import ContradictionError
from mapgen2d.model.neighborhood import Neighborhood

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from mapgen2d.enums import DistanceMetric
    from mapgen2d.model.tile import Tile


# Maps the neighborhood of a cell to one unnormalized, non-negative weight per tile index. Returning NO_PROBABILITY in
# slot 0 declares the cell a contradiction. Must be a deterministic function of the neighborhood.
ProbabilityCallback: TypeAlias = Callable[[Neighborhood], "Sequence[float] | NDArray[np.double]"]


def evaluate_probability(
    coords: tuple[int, int],
    tiles: NDArray[np.int_],
    probability: ProbabilityCallback,
    probabilities: NDArray[np.double],
    radius: int,
    metric: DistanceMetric,
    tile_type: type[Tile] | None = None,
) -> None:
    """Evaluates the probability callback for a cell and stores the normalized result.

    The weight of the "not set" tile (slot 0) is discarded, so that tile can never be chosen. The remaining weights are
    divided by their sum and written to 'probabilities[coords]'.

    Args:
        coords: The (row, col) coords of the cell to evaluate.
        tiles: The current tile grid (tile indices, shape (height, width)).
        probability: The probability callback.
        probabilities: The probability tensor (shape (height, width, tile count)) receiving the result.
        radius: The neighborhood radius handed to the callback.
        metric: The distance metric of the neighborhood handed to the callback.
        tile_type: The tile set the neighborhood reports tiles in. Defaults to None (plain indices).

    Raises:
        ContradictionError: The callback returned NO_PROBABILITY in slot 0, or no tile has a positive weight.
        ValueError: The callback returned the wrong number of weights or a negative weight.
    """
    neighborhood = Neighborhood(tiles, coords, metric, radius, tile_type)
    weights = np.asarray(probability(neighborhood), dtype=np.double)

    tile_count = probabilities.shape[2]
    if weights.shape != (tile_count,):
        raise ValueError(f"Probability callback must return {tile_count} weights, got shape {weights.shape}")

    if weights[INVALID_TILE_INDEX] == NO_PROBABILITY:
        raise ContradictionError(coords, weights)

    tile_weights = weights.copy()
    tile_weights[INVALID_TILE_INDEX] = 0.0
    if np.any(tile_weights < 0.0) or np.any(np.isnan(tile_weights)):
        raise ValueError(f"Probability callback returned invalid weights {weights.tolist()} for cell {coords}")

    weight_sum = tile_weights.sum()
    if weight_sum <= 0.0:
        raise ContradictionError(coords, weights)

    probabilities[coords] = tile_weights / weight_sum


def compute_entropy(probabilities: NDArray[np.double]) -> float:
    """Calculates the Shannon entropy (in bits) of a normalized probability vector.

    Zero entries contribute nothing, so a one-hot vector has an entropy of exactly 0.
    """
    nonzero = probabilities[probabilities > 0.0]
    entropy = -float((nonzero * np.log2(nonzero)).sum())
    # -0.0 for a one-hot vector
    return entropy if entropy > 0.0 else 0.0
