"""Tests for noise map generation."""

from __future__ import annotations

import numpy as np
import pytest

from mapgen2d.enums import NoiseType
from mapgen2d.model.noise import ColoredNoise, generate_noise_map, interpolate_noise_map


@pytest.mark.parametrize("color", [-2.0, -1.0, 0.0, 1.0])
def test_colored_noise_is_normalized(color: float) -> None:
    noise_map = ColoredNoise((32, 24), color, seed=5).generate()
    assert noise_map.shape == (32, 24)
    assert noise_map.min() == 0.0
    assert noise_map.max() < 1.0
    assert noise_map.max() > 0.99


def test_colored_noise_is_deterministic() -> None:
    first = ColoredNoise((16, 16), seed=3).generate()
    second = ColoredNoise((16, 16), seed=3).generate()
    other = ColoredNoise((16, 16), seed=4).generate()
    assert np.array_equal(first, second)
    assert not np.array_equal(first, other)


@pytest.mark.parametrize("shape", [(8, 8), (9, 7), (4, 11)])
def test_frequencies_cover_half_spectrum(shape: tuple[int, int]) -> None:
    frequencies = ColoredNoise(shape).generate_frequencies()
    assert frequencies.shape == (shape[0], shape[1] // 2 + 1)
    assert np.iscomplexobj(frequencies)


def test_frequency_center_is_zeroed() -> None:
    frequencies = ColoredNoise((8, 8), color=-2.0).generate_frequencies()
    assert frequencies[4, 4] == 0.0
    assert np.all(np.isfinite(frequencies))


def test_red_noise_weights_low_frequencies_higher() -> None:
    magnitudes = np.abs(ColoredNoise((64, 64), color=-2.0, seed=1).generate_frequencies())
    near_center = magnitudes[30:35, 30:33].mean()
    far_from_center = magnitudes[0:5, 0:5].mean()
    assert near_center > far_from_center


def test_non_positive_shape_is_rejected() -> None:
    with pytest.raises(ValueError):
        ColoredNoise((0, 4)).generate()


@pytest.mark.parametrize("noise_type", list(NoiseType))
def test_noise_map_is_in_signed_unit_range(noise_type: NoiseType) -> None:
    noise_map = generate_noise_map(noise_type, (12, 10), octaves=3.0, seed=7)
    assert noise_map.shape == (12, 10)
    assert noise_map.min() >= -1.0
    assert noise_map.max() <= 1.0
    assert noise_map.std() > 0.0


@pytest.mark.parametrize("noise_type", list(NoiseType))
def test_noise_map_is_deterministic(noise_type: NoiseType) -> None:
    first = generate_noise_map(noise_type, (10, 10), octaves=2.0, seed=11)
    second = generate_noise_map(noise_type, (10, 10), octaves=2.0, seed=11)
    assert np.array_equal(first, second)


def test_interpolate_noise_map() -> None:
    noise_map = np.array([[-1.0, 0.0], [0.5, 1.0]])
    assert interpolate_noise_map(noise_map, 10.0, 20.0).tolist() == pytest.approx([[10.0, 15.0], [17.5, 20.0]])
