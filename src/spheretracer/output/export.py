"""Pixel grid conversion and image export.

This module turns linear float colors into the 8-bit pixel grid and writes
that grid to disk.

Supported formats:
    - PPM P3 (plain-text pixel triplets), the primary render output
    - PNG (8-bit RGB via Pillow)

Channel conversion clamps to [0, 1], scales to [0, 255] and rounds half up.
No tone mapping or gamma correction is applied.

Example:
    >>> from spheretracer.output.export import colors_to_uint8, write_ppm
    >>> pixels = colors_to_uint8(colors)  # (H, W, 3) float -> uint8
    >>> write_ppm(pixels, "output.ppm")
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

PPM_MAGIC = "P3"
MAX_CHANNEL_VALUE = 255


def clamp_channel(x: float) -> int:
    """Convert one linear color channel to an 8-bit value."""
    return int(math.floor(min(max(x, 0.0), 1.0) * 255.0 + 0.5))


def colors_to_uint8(colors: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a float color array to 8-bit channels.

    Uses the same clamp-and-round rule as clamp_channel, element-wise.

    Args:
        colors: Linear color array of shape (H, W, 3).

    Returns:
        Array of the same shape with dtype uint8.
    """
    clamped = np.clip(np.asarray(colors, dtype=np.float64), 0.0, 1.0)
    return np.floor(clamped * 255.0 + 0.5).astype(np.uint8)


def _check_pixels(pixels: npt.NDArray[np.uint8]) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Pixel grid must have shape (H, W, 3), got {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Pixel grid must have dtype uint8, got {pixels.dtype}")


def format_ppm(pixels: npt.NDArray[np.uint8]) -> str:
    """Serialize a pixel grid as plain-text PPM.

    The layout is the magic token, a "width height" line, the maximum
    channel value, then one "r g b" line per pixel in row-major order
    starting from the top-left pixel.

    Args:
        pixels: 8-bit pixel grid of shape (H, W, 3), top row first.

    Returns:
        The complete file contents, ending with a newline.

    Raises:
        ValueError: If the grid has the wrong shape or dtype.
    """
    _check_pixels(pixels)
    height, width, _ = pixels.shape

    lines = [PPM_MAGIC, f"{width} {height}", str(MAX_CHANNEL_VALUE)]
    for r, g, b in pixels.reshape(-1, 3).tolist():
        lines.append(f"{r} {g} {b}")
    return "\n".join(lines) + "\n"


def write_ppm(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Write a pixel grid to a plain-text PPM file.

    The output depends only on the pixel values, so identical grids produce
    byte-identical files.

    Args:
        pixels: 8-bit pixel grid of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        ValueError: If the grid has the wrong shape or dtype.
        OSError: If the file cannot be written.
    """
    contents = format_ppm(pixels)
    path = Path(filepath)
    with path.open("w", encoding="ascii", newline="\n") as f:
        f.write(contents)
    logger.info("Wrote %dx%d PPM to %s", pixels.shape[1], pixels.shape[0], path)
    return path


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a pixel grid as an 8-bit RGB PNG file.

    Args:
        pixels: 8-bit pixel grid of shape (H, W, 3).
        filepath: Output file path (should end in .png).

    Returns:
        The path written.

    Raises:
        ValueError: If the grid has the wrong shape or dtype.
        OSError: If the file cannot be written.
    """
    _check_pixels(pixels)
    path = Path(filepath)
    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels))
    pil_image.save(path, format="PNG")
    logger.info("Wrote %dx%d PNG to %s", pixels.shape[1], pixels.shape[0], path)
    return path
