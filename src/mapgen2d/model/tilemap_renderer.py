"""Manages the visual representation of tile grids, noise maps and region maps."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from mapgen2d.constants import TILE_SIZE_DEFAULT, UNSET_COLOR_RGB

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from numpy.typing import NDArray


class TilemapRenderer:
    """Renders 2D arrays of map data into PIL images.

    Each grid cell becomes a square block of 'tile_size' x 'tile_size' pixels. Tile grids are colored through a palette
    mapping tile indices to RGB colors; indices missing from the palette (e.g. the "not set" tile) are drawn in
    UNSET_COLOR_RGB.
    """

    # A dictionary mapping tile indices to their RGB colors.
    _palette: dict[int, tuple[int, int, int]]
    # The side length of the block of pixels drawn for each cell.
    _tile_size: int

    def __init__(self, palette: Mapping[int, tuple[int, int, int]] | None = None, tile_size: int = TILE_SIZE_DEFAULT):
        """Initializes the renderer.

        Args:
            palette: Maps tile indices to RGB colors. Defaults to None (an empty palette).
            tile_size: The side length of the block of pixels drawn for each cell. Defaults to
                constants.TILE_SIZE_DEFAULT.
        """
        if tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {tile_size}")
        self._palette = {int(index): color for index, color in (palette or {}).items()}
        self._tile_size = tile_size

    def get_tilemap_img(self, tilemap_array: NDArray[np.int_]) -> Image.Image:
        """Renders a tile grid into a PIL image using the palette.

        Args:
            tilemap_array: A 2D array containing tile indices.

        Returns:
            A PIL Image representing the visual tilemap.
        """
        colors = np.full(tilemap_array.shape + (3,), UNSET_COLOR_RGB, dtype=np.uint8)
        for tile_index, color in self._palette.items():
            colors[tilemap_array == tile_index] = color
        return self._to_img(colors)

    def get_field_img(self, field_array: NDArray[np.double]) -> Image.Image:
        """Renders a scalar field (e.g. a noise map) with values in [0.0, 1.0] as a grayscale image."""
        gray = (np.clip(field_array, 0.0, 1.0) * 255.0).astype(np.uint8)
        return self._to_img(np.repeat(gray[:, :, np.newaxis], 3, axis=2))

    def get_region_map_img(
        self, region_map: NDArray[np.int_], colors_rgb: NDArray[np.uint8], border_marker: int
    ) -> Image.Image:
        """Renders a region map (e.g. a Voronoi map), coloring each region by its index.

        Args:
            region_map: A 2D array containing region indices.
            colors_rgb: Array of shape (region count, 3) with the color of each region.
            border_marker: The value marking border cells, which are drawn in UNSET_COLOR_RGB.
        """
        colors = np.full(region_map.shape + (3,), UNSET_COLOR_RGB, dtype=np.uint8)
        mask = region_map != border_marker
        colors[mask] = colors_rgb[region_map[mask]]
        return self._to_img(colors)

    def save_img(self, img: Image.Image, file_path: str | Path) -> None:
        """Saves a generated image to the specified file path.

        Args:
            img: The PIL Image object to be saved.
            file_path: The destination path (including filename and extension).
        """
        img.save(file_path)

    def _to_img(self, colors: NDArray[np.uint8]) -> Image.Image:
        """Scales an array of (row, col, rgb) colors up by the tile size and converts it into an image."""
        if self._tile_size > 1:
            colors = colors.repeat(self._tile_size, axis=0).repeat(self._tile_size, axis=1)
        return Image.fromarray(np.ascontiguousarray(colors))
