"""Sphere primitive and ray-sphere intersection.

The intersection solves the quadratic

    |origin + t * direction - center|^2 = radius^2

using the half-b form

    a = dot(direction, direction)
    b = dot(oc, direction)          (half of the traditional b)
    c = dot(oc, oc) - radius^2
    discriminant = b^2 - a*c
    oc = origin - center

and accepts the nearer root first, falling back to the farther one. Both
interval ends are exclusive, so a ray that starts exactly on the surface does
not re-hit it at t = 0 when t_min = 0.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.geometry.sphere import Sphere, hit_sphere
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import Ray, ray_at
from spheretracer.materials.material import Material

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        material: The material, carried by value.
    """

    center: vec3
    radius: ti.f32
    material: Material


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: Whether the ray intersected the surface (1 if hit, 0 if miss).
            The remaining fields are only valid if hit == 1.
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length).
            Always points back toward the side the ray came from.
        front_face: 1 if the ray hit the outward side of the surface, 0 if
            it hit from inside.
        material: Copy of the surface's material.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    front_face: ti.i32
    material: Material


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material=Material(kind=0, albedo=vec3(0.0, 0.0, 0.0), fuzz=0.0, refractive_index=1.0),
    )


@ti.func
def hit_sphere(ray: Ray, sphere: Sphere, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test a ray against a sphere within the open interval (t_min, t_max).

    Args:
        ray: The ray to test. Its direction need not be normalized but must
            not be the zero vector.
        sphere: The sphere to test against.
        t_min: Hits at or before this parameter are rejected.
        t_max: Hits at or after this parameter are rejected.

    Returns:
        A HitRecord with hit == 1 and the nearest accepted root, or a miss
        record.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    result = make_miss_record()

    if discriminant >= 0.0:
        sqrt_d = tm.sqrt(discriminant)

        # Nearer root first, then the farther one
        t = (-half_b - sqrt_d) / a
        valid = t_min < t and t < t_max
        if not valid:
            t = (-half_b + sqrt_d) / a
            valid = t_min < t and t < t_max

        if valid:
            hit_point = ray_at(ray, t)
            outward_normal = (hit_point - sphere.center) / sphere.radius

            is_front_face = 1
            hit_normal = outward_normal
            if tm.dot(ray.direction, outward_normal) >= 0.0:
                # Ray is inside the sphere, hitting back face
                is_front_face = 0
                hit_normal = -outward_normal

            result = HitRecord(
                hit=1,
                t=t,
                point=hit_point,
                normal=hit_normal,
                front_face=is_front_face,
                material=sphere.material,
            )

    return result
