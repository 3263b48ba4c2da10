"""Built-in demo scene: three colored spheres under one point light.

The scene places a red, a green and a blue unit sphere in front of a camera
at the origin looking down the negative z axis, lit from the upper right.

Layout (viewed from the camera):
    - Red sphere straight ahead at z = -5
    - Green sphere to the right, slightly further away (z = -6)
    - Blue sphere to the left, slightly closer (z = -4)
    - Point light at (5, 5, 5), behind and above the camera

Example:
    >>> from spheretracer.scene.default import create_default_camera, create_default_scene
    >>> scene = create_default_scene()
    >>> camera = create_default_camera(aspect_ratio=16 / 9)
    >>> len(scene.spheres)
    3
"""

from spheretracer.camera.perspective import Camera
from spheretracer.core.vector import Vec3
from spheretracer.geometry.sphere import Sphere
from spheretracer.scene.scene import Scene

# Scene constants
LIGHT_POSITION = Vec3(5.0, 5.0, 5.0)
LIGHT_INTENSITY = 1.0
AMBIENT_INTENSITY = 0.1

# Sphere colors
RED = Vec3(1.0, 0.2, 0.2)
GREEN = Vec3(0.2, 1.0, 0.2)
BLUE = Vec3(0.2, 0.2, 1.0)

# Camera constants
CAMERA_POSITION = Vec3(0.0, 0.0, 0.0)
CAMERA_DIRECTION = Vec3(0.0, 0.0, -1.0)
CAMERA_UP = Vec3(0.0, 1.0, 0.0)
CAMERA_FOV = 90.0


def create_default_scene() -> Scene:
    """Create the three-sphere demo scene."""
    spheres = [
        Sphere(center=Vec3(0.0, 0.0, -5.0), radius=1.0, color=RED),
        Sphere(center=Vec3(2.0, 0.0, -6.0), radius=1.0, color=GREEN),
        Sphere(center=Vec3(-2.0, 0.0, -4.0), radius=1.0, color=BLUE),
    ]
    return Scene(
        spheres=spheres,
        light_position=LIGHT_POSITION,
        light_intensity=LIGHT_INTENSITY,
        ambient_intensity=AMBIENT_INTENSITY,
    )


def create_default_camera(aspect_ratio: float) -> Camera:
    """Create the demo camera for a given image aspect ratio (width / height)."""
    return Camera(
        position=CAMERA_POSITION,
        direction=CAMERA_DIRECTION,
        up=CAMERA_UP,
        fov=CAMERA_FOV,
        aspect_ratio=aspect_ratio,
    )
