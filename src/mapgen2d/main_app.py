"""Serves as the command line entry point of the map generator."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from mapgen2d import constants
from mapgen2d.enums import CellCollapseOrder, DistanceMetric, NoiseType
from mapgen2d.model.errors import WFCError
from mapgen2d.model.noise import ColoredNoise, generate_noise_map
from mapgen2d.model.tilemap_renderer import TilemapRenderer
from mapgen2d.model.voronoi import Voronoi
from mapgen2d.model.wfc import WaveFunctionCollapse
from mapgen2d.presets import RAINBOW_PALETTE, RainbowTile, rainbow_probability


logger = logging.getLogger(__name__)


def run_wfc(args: argparse.Namespace) -> None:
    """Solves the rainbow example tile set and saves the result as an image."""
    wfc = WaveFunctionCollapse(
        args.width,
        args.height,
        args.seed,
        rainbow_probability,
        RainbowTile,
        neighborhood_radius=args.radius,
        metric=DistanceMetric[args.metric.upper()],
        backtrack_radius=args.backtrack_radius,
        max_bombings=args.max_bombings,
        cell_collapse_order=CellCollapseOrder[args.collapse_order.upper()],
    )
    result = wfc.generate()

    renderer = TilemapRenderer(RAINBOW_PALETTE, args.tile_size)
    renderer.save_img(renderer.get_tilemap_img(result.tiles), args.output)
    logger.info(f"Saved tilemap to {args.output}")


def run_noise(args: argparse.Namespace) -> None:
    """Generates a noise map and saves it as a grayscale image."""
    shape = (args.height, args.width)
    noise_type = NoiseType[args.noise_type.upper()]
    renderer = TilemapRenderer(tile_size=args.tile_size)

    if noise_type == NoiseType.COLORED:
        noise_map = ColoredNoise(shape, args.color, args.seed).generate()
    else:
        noise_map = (generate_noise_map(noise_type, shape, args.octaves, args.seed) + 1.0) / 2.0

    renderer.save_img(renderer.get_field_img(noise_map), args.output)
    logger.info(f"Saved {noise_type.value} map to {args.output}")


def run_voronoi(args: argparse.Namespace) -> None:
    """Generates a Voronoi tessellation and saves it with a random color per cell."""
    result = Voronoi.with_random_centers(
        (args.height, args.width), args.cells, args.seed, args.border_coefficient
    ).generate()

    rng = np.random.default_rng(0)
    colors_rgb = rng.integers(10, 240, size=(args.cells, 3), dtype=np.uint8)

    renderer = TilemapRenderer(tile_size=args.tile_size)
    img = renderer.get_region_map_img(result.map, colors_rgb, result.output_configuration.border_marker)
    renderer.save_img(img, args.output)
    logger.info(f"Saved Voronoi map to {args.output}")


def build_parser() -> argparse.ArgumentParser:
    """Creates the argument parser with one subcommand per generator."""
    parser = argparse.ArgumentParser(prog="mapgen2d", description="Procedural 2D map generation.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every step of the generation")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--width", type=int, default=constants.TILEMAP_SIZE_DEFAULT)
    common.add_argument("--height", type=int, default=constants.TILEMAP_SIZE_DEFAULT)
    common.add_argument("--seed", type=int, default=constants.RANDOM_SEED_DEFAULT)
    common.add_argument("--tile-size", type=int, default=constants.TILE_SIZE_DEFAULT, help="pixels per cell")

    subparsers = parser.add_subparsers(dest="command", required=True)

    wfc_parser = subparsers.add_parser("wfc", parents=[common], help="solve the rainbow tile set")
    wfc_parser.add_argument("--output", default="wfc.png")
    wfc_parser.add_argument("--radius", type=int, default=constants.WFC_NEIGHBORHOOD_RADIUS_DEFAULT)
    wfc_parser.add_argument(
        "--metric",
        choices=[metric.name.lower() for metric in DistanceMetric],
        default=constants.WFC_DISTANCE_METRIC_DEFAULT.name.lower(),
    )
    wfc_parser.add_argument("--backtrack-radius", type=int, default=constants.WFC_BACKTRACK_RADIUS_DEFAULT)
    wfc_parser.add_argument("--max-bombings", type=int, default=constants.WFC_MAX_BOMBINGS_DEFAULT)
    wfc_parser.add_argument(
        "--collapse-order",
        choices=[order.name.lower() for order in CellCollapseOrder],
        default=constants.WFC_CELL_COLLAPSE_ORDER_DEFAULT.name.lower(),
    )
    wfc_parser.set_defaults(handler=run_wfc)

    noise_parser = subparsers.add_parser("noise", parents=[common], help="generate a noise map")
    noise_parser.add_argument("--output", default="noise.png")
    noise_parser.add_argument(
        "--noise-type",
        choices=[noise_type.name.lower() for noise_type in NoiseType],
        default=constants.NOISE_TYPE_DEFAULT.name.lower(),
    )
    noise_parser.add_argument("--color", type=float, default=constants.NOISE_COLOR_DEFAULT)
    noise_parser.add_argument("--octaves", type=float, default=constants.NOISE_OCTAVES_DEFAULT)
    noise_parser.set_defaults(handler=run_noise)

    voronoi_parser = subparsers.add_parser("voronoi", parents=[common], help="generate a Voronoi tessellation")
    voronoi_parser.add_argument("--output", default="voronoi.png")
    voronoi_parser.add_argument("--cells", type=int, default=constants.VORONOI_CELL_COUNT_DEFAULT)
    voronoi_parser.add_argument(
        "--border-coefficient", type=float, default=constants.VORONOI_BORDER_COEFFICIENT_DEFAULT
    )
    voronoi_parser.set_defaults(handler=run_voronoi)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parses the command line, runs the selected generator and returns the exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.handler(args)
    except WFCError as exc:
        logger.error(f"Generation failed: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
