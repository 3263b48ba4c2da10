"""Pytest configuration for spheretracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the fields declared by the device modules. Double precision
    matches the runtime set up by spheretracer.config.init_taichi.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64)
    yield


@pytest.fixture(autouse=True)
def clear_device_scene():
    """Clear device-side scene data before and after each test."""
    # Import here so the fields are declared after Taichi is initialized
    from spheretracer.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def single_sphere_scene():
    """A red unit sphere straight ahead of the origin, lit from the camera position."""
    from spheretracer.core.vector import Vec3
    from spheretracer.geometry.sphere import Sphere
    from spheretracer.scene.scene import Scene

    return Scene(
        spheres=[Sphere(Vec3(0.0, 0.0, -5.0), 1.0, Vec3(1.0, 0.2, 0.2))],
        light_position=Vec3(0.0, 0.0, 0.0),
        light_intensity=1.0,
        ambient_intensity=0.1,
    )


@pytest.fixture
def forward_camera():
    """Square-aspect camera at the origin looking down -z."""
    from spheretracer.camera.perspective import Camera
    from spheretracer.core.vector import Vec3

    return Camera(
        position=Vec3(0.0, 0.0, 0.0),
        direction=Vec3(0.0, 0.0, -1.0),
        up=Vec3(0.0, 1.0, 0.0),
        fov=90.0,
        aspect_ratio=1.0,
    )
