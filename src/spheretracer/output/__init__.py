"""Output module for pixel grids and image files.

Components:
    export: 8-bit conversion, plain-text PPM writer, PNG export
"""

from .export import (
    clamp_channel,
    colors_to_uint8,
    format_ppm,
    save_png,
    write_ppm,
)

__all__ = [
    "clamp_channel",
    "colors_to_uint8",
    "format_ppm",
    "write_ppm",
    "save_png",
]
