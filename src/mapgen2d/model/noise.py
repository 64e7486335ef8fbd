"""Generates 2D noise maps used as input for map generation."""

from __future__ import annotations

from dataclasses import dataclass
import math
import sys
from typing import TYPE_CHECKING

import numpy as np
import opensimplex
from perlin_noise import PerlinNoise

from mapgen2d.constants import NOISE_COLOR_DEFAULT, NOISE_OCTAVES_DEFAULT, RANDOM_SEED_DEFAULT
from mapgen2d.enums import NoiseType

if TYPE_CHECKING:
    from numpy.typing import NDArray


@dataclass
class ColoredNoise:
    """Generator for 2D noise with a power spectral density of f^color.

    See e.g. https://en.wikipedia.org/wiki/Colors_of_noise. For Brownian or "red" noise, set color to -2.0; for white
    noise, set it to 0.0.

    Attributes:
        shape: The (height, width) of the noise map to generate (in cells).
        color: The exponent applied to the frequency when weighting the spectrum.
        seed: Seed used for the random spectrum.
    """

    shape: tuple[int, int]
    color: float = NOISE_COLOR_DEFAULT
    seed: int = RANDOM_SEED_DEFAULT

    def generate(self) -> NDArray[np.double]:
        """Generates a noise map with values in [0.0, 1.0).

        The random spectrum from generate_frequencies() is transformed back into the spatial domain, and the magnitudes
        of the result are normalized to [0.0, 1.0).
        """
        f_domain = self.generate_frequencies()
        noise_map = np.abs(np.fft.irfft2(f_domain, s=self.shape))

        min_value = noise_map.min()
        value_range = noise_map.max() - min_value
        if value_range == 0.0:
            return np.zeros(self.shape, dtype=np.double)

        noise_map = (noise_map - min_value) / value_range
        # Normalization leaves exactly one element at 1.0, which is moved just below 1.0.
        noise_map[noise_map >= 1.0] = 1.0 - sys.float_info.epsilon
        return noise_map

    def generate_frequencies(self) -> NDArray[np.complex128]:
        """Generates the frequency domain part of the noise.

        Called by generate(). Useful on its own for debugging and visualization. Each coefficient is a complex number
        with real and imaginary part drawn uniformly from [-1, 1), scaled by its distance from the center of the
        spectrum to the power of 'color'. The center itself is zeroed.

        Returns:
            Array of shape (height, width // 2 + 1), the non-redundant half of a real signal's spectrum.
        """
        if self.shape[0] <= 0 or self.shape[1] <= 0:
            raise ValueError(f"Noise map shape must be positive, got {self.shape}")

        rng = np.random.default_rng(self.seed)
        f_shape = (self.shape[0], self.shape[1] // 2 + 1)

        rows, cols = np.indices(f_shape, dtype=np.double)
        distance = np.hypot(rows - self.shape[0] / 2, cols - self.shape[1] / 2)
        weight = np.zeros(f_shape, dtype=np.double)
        np.power(distance, self.color, out=weight, where=distance != 0.0)

        real = rng.uniform(-1.0, 1.0, f_shape)
        imag = rng.uniform(-1.0, 1.0, f_shape)
        return (real + 1j * imag) * weight


def generate_noise_map(
    noise_type: NoiseType,
    shape: tuple[int, int],
    octaves: float = NOISE_OCTAVES_DEFAULT,
    seed: int = RANDOM_SEED_DEFAULT,
    color: float = NOISE_COLOR_DEFAULT,
) -> NDArray[np.double]:
    """Generates a noise map with values in [-1.0, 1.0] using the specified noise type.

    Args:
        noise_type: The noise algorithm to use.
        shape: The (height, width) of the noise map (in cells).
        octaves: The octave setting for Perlin and OpenSimplex noise. Higher values result in more high-frequency
            detail and roughness on the map. Defaults to constants.NOISE_OCTAVES_DEFAULT.
        seed: Seed used for the noise function. Defaults to constants.RANDOM_SEED_DEFAULT.
        color: The spectral exponent for colored noise. Defaults to constants.NOISE_COLOR_DEFAULT.
    """
    height, width = shape
    noise_map = np.full(shape, 0.0, dtype=np.double)

    match noise_type:
        case NoiseType.COLORED:
            noise_map = ColoredNoise(shape, color, seed).generate() * 2.0 - 1.0

        case NoiseType.PERLIN:
            noise = PerlinNoise(octaves=octaves, seed=seed)
            for col in range(width):
                for row in range(height):
                    noise_map[row, col] = noise([col / width, row / height])
            # Normalize noise array values so that they are in the range of [-1.0, 1.0].
            noise_map *= math.sqrt(2)
            # Perlin noise values can rarely be slightly outside of [-1.0, 1.0].
            noise_map = noise_map.clip(-1.0, 1.0)

        case NoiseType.OPENSIMPLEX:
            opensimplex.seed(seed)
            for col in range(width):
                for row in range(height):
                    noise_map[row, col] = opensimplex.noise2(octaves * col / width, octaves * row / height)
            # Normalize noise array values so that they are in the range of [-1.0, 1.0].
            noise_map *= 2 / math.sqrt(3)
            noise_map = noise_map.clip(-1.0, 1.0)

    return noise_map


def interpolate_noise_map(noise_map: NDArray[np.double], min_value: float, max_value: float) -> NDArray[np.double]:
    """Linearly maps noise values from [-1.0, 1.0] to [min_value, max_value]."""
    return np.interp(noise_map, [-1.0, 1.0], [min_value, max_value])
