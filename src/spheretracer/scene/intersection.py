"""Device-side scene storage and ray-scene queries.

This module mirrors a host Scene into Taichi fields so that render kernels
can run nearest-hit and shadow queries. Spheres are stored in a
Structure-of-Arrays layout; the light and ambient terms live in scalar
fields. Importing this module declares Taichi fields, so Taichi must be
initialised first.

Example:
    >>> from spheretracer.config import init_taichi
    >>> init_taichi()
    >>> from spheretracer.scene.intersection import upload_scene, intersect_scene
    >>> upload_scene(scene)
    >>> # Use intersect_scene / trace_ray within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import ray_at
from spheretracer.core.vector import safe_normalize, vec3
from spheretracer.geometry.sphere import hit_sphere, sphere_normal
from spheretracer.scene.scene import SHADOW_EPSILON, Scene

# Maximum number of spheres supported on the device
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Point light and ambient term
light_position = ti.Vector.field(3, dtype=ti.f64, shape=())
light_intensity = ti.field(dtype=ti.f64, shape=())
ambient_intensity = ti.field(dtype=ti.f64, shape=())


def clear_scene() -> None:
    """Remove all spheres and reset the lighting terms.

    The sphere field data is not cleared but will be overwritten when new
    spheres are uploaded.
    """
    num_spheres[None] = 0
    light_position[None] = [0.0, 0.0, 0.0]
    light_intensity[None] = 0.0
    ambient_intensity[None] = 0.0


def upload_scene(scene: Scene) -> None:
    """Copy a host Scene into the device fields, replacing any previous one.

    Args:
        scene: The scene to render.

    Raises:
        RuntimeError: If the scene has more than MAX_SPHERES spheres.
    """
    if len(scene.spheres) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    for idx, sphere in enumerate(scene.spheres):
        sphere_centers[idx] = sphere.center.to_list()
        sphere_radii[idx] = sphere.radius
        sphere_colors[idx] = sphere.color.to_list()
    num_spheres[None] = len(scene.spheres)

    light_position[None] = scene.light_position.to_list()
    light_intensity[None] = scene.light_intensity
    ambient_intensity[None] = scene.ambient_intensity


def get_sphere_count() -> int:
    """Get the number of spheres on the device."""
    return int(num_spheres[None])


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3):
    """Find the nearest sphere hit by a ray.

    Uses a strict less-than comparison, so on an exact tie the sphere with
    the lowest index is kept.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The normalized direction of the ray.

    Returns:
        A tuple (index, t). index is -1 when nothing is hit.
    """
    closest_index = -1
    closest_t = 0.0

    for k in range(num_spheres[None]):
        hit, t = hit_sphere(ray_origin, ray_direction, sphere_centers[k], sphere_radii[k])
        if hit == 1 and (closest_index < 0 or t < closest_t):
            closest_index = k
            closest_t = t

    return closest_index, closest_t


@ti.func
def intersect_scene_any(ray_origin: vec3, ray_direction: vec3) -> ti.i32:
    """Test if a ray hits any sphere (shadow ray query).

    Returns:
        1 if any sphere reports a positive intersection, 0 otherwise.
    """
    blocked = 0

    # Early exit on first hit
    for k in range(num_spheres[None]):
        if blocked == 0:
            hit, t = hit_sphere(ray_origin, ray_direction, sphere_centers[k], sphere_radii[k])
            if hit == 1:
                blocked = 1

    return blocked


@ti.func
def trace_ray(ray_origin: vec3, ray_direction: vec3) -> vec3:
    """Trace a primary ray and shade the nearest hit.

    Same policy as Scene.trace: black background, ambient-only color for
    shadowed points, diffuse plus ambient otherwise.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The normalized direction of the ray.

    Returns:
        The unclamped RGB color.
    """
    color = vec3(0.0, 0.0, 0.0)
    index, t = intersect_scene(ray_origin, ray_direction)

    if index >= 0:
        hit_point = ray_at(ray_origin, ray_direction, t)
        normal = sphere_normal(hit_point, sphere_centers[index])
        to_light = safe_normalize(light_position[None] - hit_point)
        albedo = sphere_colors[index]
        ambient = ambient_intensity[None]

        shadow_origin = hit_point + normal * SHADOW_EPSILON
        if intersect_scene_any(shadow_origin, safe_normalize(to_light)) == 1:
            color = albedo * ambient
        else:
            diffuse = ti.max(0.0, tm.dot(normal, to_light)) * light_intensity[None]
            color = albedo * (diffuse + ambient)

    return color
