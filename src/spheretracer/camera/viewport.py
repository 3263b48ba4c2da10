"""Device-side camera state and ray generation for Taichi kernels.

setup_camera() copies the viewport derived by a host Camera into Taichi
fields; get_ray() then evaluates the same ray-direction expression inside
kernels. Importing this module declares Taichi fields, so Taichi must be
initialised first.

Example:
    >>> from spheretracer.config import init_taichi
    >>> init_taichi()
    >>> from spheretracer.camera.viewport import get_ray, setup_camera
    >>> setup_camera(camera)
    >>> # Use get_ray(u, v) within a Taichi kernel
"""

import taichi as ti

from spheretracer.camera.perspective import Camera
from spheretracer.core.vector import safe_normalize

# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f64, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f64, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f64, shape=())


def setup_camera(camera: Camera) -> None:
    """Upload camera geometry to the device.

    Must be called from Python (not from within a Taichi kernel) before
    launching kernels that call get_ray().

    Args:
        camera: The camera to render from.
    """
    view = camera.viewport
    _camera_origin[None] = camera.position.to_list()
    _lower_left_corner[None] = view.lower_left.to_list()
    _viewport_horizontal[None] = view.horizontal.to_list()
    _viewport_vertical[None] = view.vertical.to_list()


@ti.func
def get_ray(u: ti.f64, v: ti.f64):
    """Generate a primary ray through normalized image coordinates (u, v).

    Args:
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A tuple (origin, direction) with a normalized direction.
    """
    origin = _camera_origin[None]
    direction = (
        _lower_left_corner[None] - origin + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    return origin, safe_normalize(direction)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get the uploaded camera state for debugging."""
    fields = {
        "origin": _camera_origin,
        "lower_left": _lower_left_corner,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
    }
    info = {}
    for name, field in fields.items():
        value = field[None]
        info[name] = (float(value[0]), float(value[1]), float(value[2]))
    return info
