"""Unit tests for host-side scene tracing and shading.

Tests cover:
- Scene construction and validation
- Nearest-hit selection and tie-breaking
- Background color on miss
- Diffuse plus ambient shading
- Hard shadows from occluding spheres
- Monotonic brightness in the light angle
- The built-in default scene
"""

import math

import pytest


def make_sphere(center, radius=1.0, color=(1.0, 1.0, 1.0)):
    from spheretracer.core.vector import Vec3
    from spheretracer.geometry.sphere import Sphere

    return Sphere(Vec3(*center), radius, Vec3(*color))


def make_scene(spheres, light=(0.0, 0.0, 0.0), light_intensity=1.0, ambient=0.1):
    from spheretracer.core.vector import Vec3
    from spheretracer.scene.scene import Scene

    return Scene(
        spheres=spheres,
        light_position=Vec3(*light),
        light_intensity=light_intensity,
        ambient_intensity=ambient,
    )


def brightness(color):
    return color.x + color.y + color.z


class TestSceneConstruction:
    """Tests for Scene construction."""

    def test_spheres_are_stored_as_tuple(self):
        spheres = [make_sphere((0.0, 0.0, -5.0)), make_sphere((2.0, 0.0, -5.0))]
        scene = make_scene(spheres)

        assert isinstance(scene.spheres, tuple)
        assert scene.spheres == tuple(spheres)

    def test_negative_light_intensity_raises(self):
        with pytest.raises(ValueError, match="Light intensity"):
            make_scene([], light_intensity=-0.5)

    def test_negative_ambient_intensity_raises(self):
        with pytest.raises(ValueError, match="Ambient intensity"):
            make_scene([], ambient=-0.1)


class TestClosestHit:
    """Tests for nearest-hit selection."""

    def test_nearest_sphere_wins_regardless_of_order(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        near = make_sphere((0.0, 0.0, -3.0), color=(1.0, 0.0, 0.0))
        far = make_sphere((0.0, 0.0, -8.0), color=(0.0, 1.0, 0.0))
        ray = Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0))

        for spheres in ([near, far], [far, near]):
            t, sphere = make_scene(spheres).closest_hit(ray)
            assert sphere is near
            assert abs(t - 2.0) < 1e-12

    def test_exact_tie_keeps_first_listed(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        first = make_sphere((0.0, 0.0, -5.0), color=(1.0, 0.0, 0.0))
        second = make_sphere((0.0, 0.0, -5.0), color=(0.0, 0.0, 1.0))
        ray = Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0))

        _, sphere = make_scene([first, second]).closest_hit(ray)
        assert sphere is first

    def test_no_hit(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        scene = make_scene([make_sphere((0.0, 0.0, -5.0))])
        assert scene.closest_hit(Ray(Vec3.zero(), Vec3(0.0, 0.0, 1.0))) is None


class TestTrace:
    """Tests for Scene.trace shading."""

    def test_miss_returns_black(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        scene = make_scene([make_sphere((0.0, 0.0, -5.0))])
        assert scene.trace(Ray(Vec3.zero(), Vec3(0.0, 1.0, 0.0))) == Vec3.zero()

    def test_empty_scene_is_black(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        scene = make_scene([])
        assert scene.trace(Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0))) == Vec3.zero()

    def test_head_on_light_gives_full_diffuse(self, single_sphere_scene):
        """Light at the camera: normal and light direction coincide."""
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        color = single_sphere_scene.trace(Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0)))

        # color * (1.0 * light + ambient) = (1.0, 0.2, 0.2) * 1.1
        assert abs(color.x - 1.1) < 1e-12
        assert abs(color.y - 0.22) < 1e-12
        assert abs(color.z - 0.22) < 1e-12

    def test_light_behind_surface_gives_ambient_only(self):
        """A negative cosine is clamped to zero diffuse."""
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        scene = make_scene(
            [make_sphere((0.0, 0.0, -5.0), color=(0.5, 0.5, 0.5))],
            light=(0.0, 0.0, -20.0),
            ambient=0.2,
        )
        color = scene.trace(Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0)))

        # The sphere itself blocks the light, and the cosine is negative anyway
        assert abs(color.x - 0.1) < 1e-12

    def test_occluded_point_gets_ambient_only(self):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3

        target = make_sphere((0.0, 0.0, -5.0), color=(0.8, 0.6, 0.4))
        occluder = make_sphere((5.5, 5.0, -5.0), color=(1.0, 1.0, 1.0))
        light = (10.0, 10.0, -5.0)
        ray = Ray(Vec3(5.0, 0.0, -5.0), Vec3(-1.0, 0.0, 0.0))

        lit = make_scene([target], light=light, ambient=0.1).trace(ray)
        shadowed = make_scene([target, occluder], light=light, ambient=0.1).trace(ray)

        assert abs(shadowed.x - 0.08) < 1e-12
        assert abs(shadowed.y - 0.06) < 1e-12
        assert abs(shadowed.z - 0.04) < 1e-12
        assert brightness(lit) > brightness(shadowed)

        # Unshadowed: cosine between (1, 0, 0) and the light direction
        cosine = 9.0 / math.sqrt(9.0**2 + 10.0**2)
        assert abs(lit.x - 0.8 * (cosine + 0.1)) < 1e-9

    def test_is_shadowed(self):
        from spheretracer.core.vector import Vec3

        target = make_sphere((0.0, 0.0, -5.0))
        occluder = make_sphere((5.5, 5.0, -5.0))
        scene = make_scene([target, occluder], light=(10.0, 10.0, -5.0))

        point = Vec3(1.0, 0.0, -5.0)
        normal = Vec3(1.0, 0.0, 0.0)
        to_light = Vec3(9.0, 10.0, 0.0).normalize()
        assert scene.is_shadowed(point, normal, to_light)
        assert not scene.is_shadowed(point, normal, Vec3(1.0, -1.0, 0.0).normalize())

    def test_shading_is_monotonic_in_light_angle(self):
        """Better alignment with the light never darkens an unshadowed point."""
        from spheretracer.core.vector import Vec3

        sphere = make_sphere((0.0, 0.0, 0.0), color=(0.9, 0.7, 0.5))
        hit_point = Vec3(0.0, 0.0, 1.0)

        # Sweep the light from grazing toward the normal
        previous = None
        for degrees in range(85, -1, -5):
            theta = math.radians(degrees)
            light = (10.0 * math.sin(theta), 0.0, 1.0 + 10.0 * math.cos(theta))
            scene = make_scene([sphere], light=light, ambient=0.05)
            value = brightness(scene.shade(sphere, hit_point))
            if previous is not None:
                assert value >= previous
            previous = value

    def test_zero_light_intensity_is_ambient_only(self, single_sphere_scene):
        from spheretracer.core.ray import Ray
        from spheretracer.core.vector import Vec3
        from spheretracer.scene.scene import Scene

        scene = Scene(
            spheres=single_sphere_scene.spheres,
            light_position=single_sphere_scene.light_position,
            light_intensity=0.0,
            ambient_intensity=0.1,
        )
        color = scene.trace(Ray(Vec3.zero(), Vec3(0.0, 0.0, -1.0)))
        assert abs(color.x - 0.1) < 1e-12


class TestDefaultScene:
    """Tests for the built-in demo scene."""

    def test_default_scene_contents(self):
        from spheretracer.core.vector import Vec3
        from spheretracer.scene.default import create_default_scene

        scene = create_default_scene()

        assert len(scene.spheres) == 3
        assert [s.center for s in scene.spheres] == [
            Vec3(0.0, 0.0, -5.0),
            Vec3(2.0, 0.0, -6.0),
            Vec3(-2.0, 0.0, -4.0),
        ]
        assert scene.light_position == Vec3(5.0, 5.0, 5.0)
        assert scene.light_intensity == 1.0
        assert scene.ambient_intensity == 0.1

    def test_default_camera(self):
        from spheretracer.core.vector import Vec3
        from spheretracer.scene.default import create_default_camera

        camera = create_default_camera(aspect_ratio=2.0)

        assert camera.position == Vec3.zero()
        assert camera.direction == Vec3(0.0, 0.0, -1.0)
        assert camera.fov == 90.0
        assert camera.aspect_ratio == 2.0

    def test_center_ray_hits_red_sphere(self):
        from spheretracer.scene.default import create_default_camera, create_default_scene

        scene = create_default_scene()
        color = scene.trace(create_default_camera(1.0).get_ray(0.5, 0.5))

        # Red dominates and the point is lit beyond the ambient level
        assert color.x > color.y
        assert color.x > 0.1
