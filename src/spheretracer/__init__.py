"""Taichi-based sphere ray tracer.

This package renders a static scene of spheres lit by a single point light,
with support for:
- Diffuse plus ambient shading with hard shadows
- Perspective camera ray generation
- Row-parallel rendering on the Taichi CPU backend
- Deterministic PPM (and optional PNG) output

Subpackages:
    core: Vector math, rays, and the render driver
    geometry: Sphere primitive and ray-sphere intersection
    camera: Perspective camera and its device-side viewport state
    scene: Scene container, tracing/shading, and device-side scene storage
    output: Pixel grid conversion and image writers
"""

__version__ = "0.1.0"
