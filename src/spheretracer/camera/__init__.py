"""Camera module for view and ray generation.

Components:
    perspective: Perspective camera model and viewport geometry
    viewport: Device-side camera state and Taichi ray generation

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .perspective import Camera, Viewport

# Note: viewport is NOT imported here because it declares Taichi fields.
# Import it directly from spheretracer.camera.viewport after ti.init().

__all__ = [
    "Camera",
    "Viewport",
]
