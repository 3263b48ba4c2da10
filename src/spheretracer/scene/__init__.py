"""Scene module for scene description and ray-scene queries.

Components:
    scene: Scene container with nearest-hit tracing and shading
    default: Built-in three-sphere demo scene and camera
    intersection: Device-side scene storage and Taichi queries

Scene data is read-only once a render starts; the device copy is refreshed
at the beginning of each render.
"""

from .default import create_default_camera, create_default_scene
from .scene import BACKGROUND_COLOR, SHADOW_EPSILON, Scene

# Note: intersection is NOT imported here because it declares Taichi fields.
# Import it directly from spheretracer.scene.intersection after ti.init().

__all__ = [
    "Scene",
    "BACKGROUND_COLOR",
    "SHADOW_EPSILON",
    "create_default_scene",
    "create_default_camera",
]
