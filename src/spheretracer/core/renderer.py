"""Row-parallel render driver.

This module renders a Scene through a Camera into an 8-bit pixel grid with a
Taichi kernel. The kernel's outermost loop ranges over a batch of image rows,
which Taichi spreads across its CPU thread pool; within a row, pixels are
computed left to right. Every row writes only its own slot of a
(height, width) color field, so no locking is needed and the output order is
fixed by row index rather than completion order.

Rows are launched in batches so that a progress callback can be invoked once
per completed row. The pixel grid becomes readable only after every row has
been rendered.

Example:
    >>> from spheretracer.config import init_taichi
    >>> init_taichi()
    >>> from spheretracer.core.renderer import RowRenderer
    >>> from spheretracer.scene.default import create_default_camera, create_default_scene
    >>>
    >>> renderer = RowRenderer(create_default_scene(), create_default_camera(4 / 3), 320, 240)
    >>> renderer.render(callback=lambda row, total: print(f"{row + 1}/{total}"))
    >>> renderer.save_ppm("output.ppm")
"""

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti

from spheretracer.camera.perspective import Camera
from spheretracer.camera.viewport import get_ray, setup_camera
from spheretracer.output.export import colors_to_uint8, save_png, write_ppm
from spheretracer.scene.intersection import trace_ray, upload_scene
from spheretracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (row_index, total_rows)
ProgressCallback = Callable[[int, int], None]


def default_rows_per_batch() -> int:
    """One row per available CPU core."""
    return os.cpu_count() or 1


# =============================================================================
# Shared Color Buffer
# =============================================================================

# Device color buffer reused across renders; rebuilt only when the image size
# changes, and the previous SNode tree is destroyed so memory does not grow.
_color_buffer = None
_color_buffer_tree = None


def get_color_buffer(width: int, height: int):
    """Get the device color buffer for an image size, reallocating if needed.

    Renders share this buffer (like the scene and camera fields), so only
    one render may be in progress at a time.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Taichi vector field of shape (height, width).
    """
    global _color_buffer, _color_buffer_tree

    if _color_buffer is not None and _color_buffer.shape == (height, width):
        return _color_buffer

    if _color_buffer_tree is not None:
        _color_buffer_tree.destroy()
        _color_buffer = None
        _color_buffer_tree = None

    builder = ti.FieldsBuilder()
    buffer = ti.Vector.field(3, dtype=ti.f64)
    builder.dense(ti.ij, (height, width)).place(buffer)
    _color_buffer_tree = builder.finalize()
    _color_buffer = buffer
    logger.debug("Allocated %dx%d color buffer", width, height)
    return buffer


# =============================================================================
# Taichi Kernels
# =============================================================================


@ti.func
def _image_fraction(index: ti.i32, extent: ti.i32) -> ti.f64:
    """Map a pixel index to [0, 1]; a single-pixel dimension maps to 0."""
    result = 0.0
    if extent > 1:
        result = ti.cast(index, ti.f64) / ti.cast(extent - 1, ti.f64)
    return result


@ti.kernel
def _render_rows(colors: ti.template(), row_start: ti.i32, row_end: ti.i32, width: ti.i32, height: ti.i32):
    """Render rows [row_start, row_end) into the color field.

    Only the outermost loop is parallelized, so each row is handled by one
    thread and its columns are visited in order.
    """
    for j in range(row_start, row_end):
        # Row 0 is the top of the image
        v = 1.0 - _image_fraction(j, height)
        for i in range(width):
            u = _image_fraction(i, width)
            origin, direction = get_ray(u, v)
            colors[j, i] = trace_ray(origin, direction)


# =============================================================================
# Renderer
# =============================================================================


class RowRenderer:
    """Renders one scene/camera pair into a fixed-size image.

    Kernels write into the shared device color buffer; when the last row is
    done the colors are copied to a host array that the renderer keeps.
    Scene and camera data are uploaded to the device at the start of each
    render and are read-only while kernels run.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        rows_per_batch: Rows rendered per kernel launch.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        width: int,
        height: int,
        *,
        rows_per_batch: int | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            camera: The camera to render from.
            width: Image width in pixels.
            height: Image height in pixels.
            rows_per_batch: Rows per kernel launch. Defaults to one row per
                CPU core.

        Raises:
            ValueError: If any dimension or the batch size is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if rows_per_batch is None:
            rows_per_batch = default_rows_per_batch()
        if rows_per_batch <= 0:
            raise ValueError(f"Rows per batch = {rows_per_batch} must be positive.")

        self._scene = scene
        self._camera = camera
        self._width = width
        self._height = height
        self._rows_per_batch = rows_per_batch
        self._colors: npt.NDArray[np.float64] | None = None
        self._complete = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rows_per_batch(self) -> int:
        return self._rows_per_batch

    @property
    def is_complete(self) -> bool:
        """Whether every row of the image has been rendered."""
        return self._complete

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding after each completed row.

        Rows are rendered a batch at a time; once a batch finishes, one
        (row_index, total_rows) pair is yielded per row in that batch, in
        row order.

        Yields:
            Tuple of (row_index, total_rows).
        """
        self._complete = False
        upload_scene(self._scene)
        setup_camera(self._camera)
        buffer = get_color_buffer(self._width, self._height)

        for row_start in range(0, self._height, self._rows_per_batch):
            row_end = min(row_start + self._rows_per_batch, self._height)
            logger.debug("Rendering rows %d-%d of %d", row_start, row_end - 1, self._height)
            _render_rows(buffer, row_start, row_end, self._width, self._height)
            for row in range(row_start, row_end):
                yield (row, self._height)

        self._colors = buffer.to_numpy()
        self._complete = True
        logger.info("Rendered %dx%d image", self._width, self._height)

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render the full image.

        Args:
            callback: Optional function called once per completed row with
                (row_index, total_rows). It only observes progress and has
                no effect on the pixels.
        """
        for row, total in self.render_progressive():
            if callback is not None:
                callback(row, total)

    def _check_complete(self) -> None:
        if not self._complete:
            raise RuntimeError("Render has not completed. Call render() first.")

    def get_colors_numpy(self) -> npt.NDArray[np.float64]:
        """Get the unclamped linear colors as an array of shape (height, width, 3).

        Raises:
            RuntimeError: If the render has not completed.
        """
        self._check_complete()
        return self._colors.copy()

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the 8-bit pixel grid of shape (height, width, 3), top row first.

        Raises:
            RuntimeError: If the render has not completed.
        """
        return colors_to_uint8(self.get_colors_numpy())

    def save_ppm(self, filepath: str | Path) -> Path:
        """Write the rendered image as a plain-text PPM file."""
        return write_ppm(self.get_image_uint8(), filepath)

    def save_png(self, filepath: str | Path) -> Path:
        """Write the rendered image as a PNG file."""
        return save_png(self.get_image_uint8(), filepath)

    def __repr__(self) -> str:
        return (
            f"RowRenderer(width={self.width}, height={self.height}, "
            f"rows_per_batch={self.rows_per_batch}, complete={self.is_complete})"
        )


def render_image(
    scene: Scene,
    camera: Camera,
    width: int,
    height: int,
    *,
    rows_per_batch: int | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.uint8]:
    """Render a scene and return the 8-bit pixel grid.

    Args:
        scene: The scene to render.
        camera: The camera to render from.
        width: Image width in pixels.
        height: Image height in pixels.
        rows_per_batch: Rows per kernel launch. Defaults to one per CPU core.
        callback: Optional per-row progress callback.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.
    """
    renderer = RowRenderer(scene, camera, width, height, rows_per_batch=rows_per_batch)
    renderer.render(callback=callback)
    return renderer.get_image_uint8()
