"""Serial host-side renderer.

Renders a scene pixel by pixel with the pure-Python Camera and Scene
objects. It walks the same image coordinates as the parallel renderer and is
mainly used to verify kernel output on small images.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from spheretracer.camera.perspective import Camera
from spheretracer.output.export import clamp_channel
from spheretracer.scene.scene import Scene


def image_fraction(index: int, extent: int) -> float:
    """Map a pixel index to [0, 1] across an image dimension.

    A dimension of a single pixel has no span to divide by; its only
    index maps to 0.
    """
    if extent > 1:
        return index / (extent - 1)
    return 0.0


def render_reference(scene: Scene, camera: Camera, width: int, height: int) -> npt.NDArray[np.uint8]:
    """Render a scene serially on the host.

    Args:
        scene: The scene to render.
        camera: The camera to render from.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        8-bit pixel grid of shape (height, width, 3), top row first.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for j in range(height):
        # Row 0 is the top of the image
        v = 1.0 - image_fraction(j, height)
        for i in range(width):
            u = image_fraction(i, width)
            color = scene.trace(camera.get_ray(u, v))
            pixels[j, i] = (clamp_channel(color.x), clamp_channel(color.y), clamp_channel(color.z))
    return pixels
