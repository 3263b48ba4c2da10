"""Render the built-in sphere scene from the command line.

Usage:
    spheretracer-render WIDTH HEIGHT [options]

Options:
    --output OUTPUT         PPM output path (default: output.ppm)
    --png PATH              Also save a PNG copy
    --threads N             CPU worker threads (default: all cores)
    --rows-per-batch N      Rows per kernel launch (default: one per core)
    --quiet                 Suppress per-row progress output
    --log-level LEVEL       Logging level (default: INFO)

Example:
    spheretracer-render 800 600 --output spheres.ppm --png spheres.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from spheretracer.config import (
    DEFAULT_OUTPUT,
    LOG_LEVELS,
    RenderConfig,
    configure_logging,
    init_taichi,
)

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spheretracer-render",
        description="Render the built-in sphere scene to a PPM image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("width", type=positive_int, help="Image width in pixels")
    parser.add_argument("height", type=positive_int, help="Image height in pixels")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"PPM output path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--png",
        type=Path,
        default=None,
        help="Also save a PNG copy to this path",
    )
    parser.add_argument(
        "--threads",
        type=positive_int,
        default=None,
        help="CPU worker threads (default: all cores)",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=positive_int,
        default=None,
        help="Rows per kernel launch (default: one per core)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress per-row progress output",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> RenderConfig:
    """Parse command-line arguments into a RenderConfig."""
    args = build_parser().parse_args(argv)
    return RenderConfig(
        width=args.width,
        height=args.height,
        output=args.output,
        png_output=args.png,
        num_threads=args.threads,
        rows_per_batch=args.rows_per_batch,
        quiet=args.quiet,
        log_level=args.log_level,
    )


def run(config: RenderConfig) -> Path:
    """Render the default scene and write the output files.

    Taichi must already be initialised.

    Args:
        config: Render settings.

    Returns:
        Path to the PPM file written.
    """
    # Lazy imports to allow Taichi initialization first
    from spheretracer.core.renderer import RowRenderer
    from spheretracer.scene.default import create_default_camera, create_default_scene

    scene = create_default_scene()
    camera = create_default_camera(config.aspect_ratio)
    renderer = RowRenderer(scene, camera, config.width, config.height, rows_per_batch=config.rows_per_batch)

    def progress_callback(row: int, total: int) -> None:
        logger.info("Rendering row %d/%d", row + 1, total)

    start_time = time.time()
    renderer.render(callback=None if config.quiet else progress_callback)

    output_file = renderer.save_ppm(config.output)
    if config.png_output is not None:
        renderer.save_png(config.png_output)

    logger.info("Rendering complete in %.2fs, output saved to %s", time.time() - start_time, output_file)
    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    config = parse_args(argv)
    configure_logging(config.log_level)
    init_taichi(config.num_threads)

    try:
        run(config)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
