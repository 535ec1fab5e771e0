"""Scene-level sphere storage and closest-hit intersection.

Spheres live in Taichi fields (Structure-of-Arrays layout) together with a
by-value copy of their material parameters. intersect_scene() scans them
linearly, shrinking the search interval to every closer hit, so only the
nearest surface along the ray is ever returned.

The fields are written from Python while the scene is built and only read by
kernels while rendering.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.materials import lambertian
    >>> from spheretracer.scene.intersection import add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -1.0), 0.5, lambertian((0.7, 0.3, 0.3)))
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import Ray
from spheretracer.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss_record
from spheretracer.materials.material import Material, MaterialInfo

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Per-sphere material parameters (copied by value, not shared)
sphere_material_kinds = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
sphere_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_fuzz = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_refractive_indices = ti.field(dtype=ti.f32, shape=MAX_SPHERES)


def clear_scene() -> None:
    """Clear all spheres from the scene.

    Resets the sphere count to zero. The field data is not cleared but will
    be overwritten when new spheres are added.
    """
    num_spheres[None] = 0


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    material: MaterialInfo,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        material: The sphere's material.

    Returns:
        The index of the added sphere.

    Raises:
        ValueError: If the radius is not positive.
        RuntimeError: If the maximum number of spheres is exceeded.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius = {radius} must be positive")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    sphere_centers[idx] = [center[0], center[1], center[2]]
    sphere_radii[idx] = radius
    sphere_material_kinds[idx] = int(material.kind)
    sphere_albedos[idx] = [material.albedo[0], material.albedo[1], material.albedo[2]]
    sphere_fuzz[idx] = material.fuzz
    sphere_refractive_indices[idx] = material.refractive_index
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


@ti.func
def get_sphere(i: ti.i32) -> Sphere:
    """Assemble the Sphere struct stored at index i."""
    return Sphere(
        center=sphere_centers[i],
        radius=sphere_radii[i],
        material=Material(
            kind=sphere_material_kinds[i],
            albedo=sphere_albedos[i],
            fuzz=sphere_fuzz[i],
            refractive_index=sphere_refractive_indices[i],
        ),
    )


@ti.func
def intersect_scene(ray: Ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Find the closest sphere hit by a ray within (t_min, t_max).

    Each sphere is tested against the current closest distance, so a later
    sphere can only replace the record with a strictly nearer hit. The
    result does not depend on insertion order.

    Args:
        ray: The ray to test.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        The HitRecord of the nearest intersection, or a miss record.
    """
    closest_t = t_max
    result = make_miss_record()

    for i in range(num_spheres[None]):
        rec = hit_sphere(ray, get_sphere(i), t_min, closest_t)
        if rec.hit == 1:
            closest_t = rec.t
            result = rec

    return result

