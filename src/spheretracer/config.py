"""Render configuration and Taichi runtime initialisation.

Taichi must be initialised before any device module (camera.viewport,
scene.intersection, core.renderer) is imported, because those modules
declare Taichi fields at import time.

Example:
    >>> from spheretracer.config import RenderConfig, init_taichi
    >>> config = RenderConfig(width=320, height=240)
    >>> init_taichi(config.num_threads)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import taichi as ti

DEFAULT_OUTPUT = Path("output.ppm")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RenderConfig:
    """Settings for a single batch render.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        output: PPM output path.
        png_output: Optional path for an additional PNG copy.
        num_threads: CPU worker threads for Taichi. None uses all cores.
        rows_per_batch: Rows rendered per kernel launch. None uses one row
            per CPU core.
        quiet: Suppress per-row progress output.
        log_level: Logging level name for the command-line entry point.

    Raises:
        ValueError: If any numeric setting is not positive or the log level
            is unknown.
    """

    width: int
    height: int
    output: Path = DEFAULT_OUTPUT
    png_output: Path | None = None
    num_threads: int | None = None
    rows_per_batch: int | None = None
    quiet: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.num_threads is not None and self.num_threads <= 0:
            raise ValueError(f"Thread count = {self.num_threads} must be positive.")
        if self.rows_per_batch is not None and self.rows_per_batch <= 0:
            raise ValueError(f"Rows per batch = {self.rows_per_batch} must be positive.")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")
        self.output = Path(self.output)
        if self.png_output is not None:
            self.png_output = Path(self.png_output)

    @property
    def aspect_ratio(self) -> float:
        """Image width divided by image height."""
        return self.width / self.height


def init_taichi(num_threads: int | None = None) -> None:
    """Initialise Taichi on the CPU backend in double precision.

    Args:
        num_threads: Maximum number of CPU worker threads. None lets Taichi
            use the hardware parallelism.
    """
    kwargs = {}
    if num_threads is not None:
        kwargs["cpu_max_num_threads"] = num_threads
    ti.init(arch=ti.cpu, default_fp=ti.f64, **kwargs)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
