"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the hit normal plus a random point on the unit
sphere. The resulting directions are cosine-distributed around the normal,
which is what an ideal diffuse surface reflects, so the attenuation is simply
the albedo.

Example:
    >>> from spheretracer.materials.lambertian import lambertian
    >>> red = lambertian((0.7, 0.3, 0.3))
    >>> # Inside a Taichi kernel:
    >>> # direction, attenuation, did_scatter = scatter_lambertian(albedo, normal, rng)
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import near_zero
from spheretracer.core.sampler import random_unit_vector
from spheretracer.materials.material import Color, MaterialInfo, MaterialKind, make_material

# Type alias for 3D vectors
vec3 = tm.vec3


def lambertian(albedo: Color) -> MaterialInfo:
    """Create a Lambertian material.

    Args:
        albedo: The diffuse reflectance color as (R, G, B) tuple.
            Each component must be in [0, 1].

    Returns:
        The material description.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    return make_material(MaterialKind.LAMBERTIAN, albedo=albedo)


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3, rng: ti.i32):
    """Sample a scattered ray direction for a Lambertian surface.

    Lambertian surfaces never absorb; when normal + random_unit_vector()
    cancels out almost exactly, the normal itself is used so that the
    outgoing ray never has a zero direction.

    Args:
        albedo: The diffuse reflectance color (RGB).
        normal: The surface normal at the hit point (unit length).
        rng: The random stream handle.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The sampled direction (not normalized).
        - attenuation: The albedo.
        - did_scatter: Always 1.
    """
    scattered_direction = normal + random_unit_vector(rng)

    if near_zero(scattered_direction):
        scattered_direction = normal

    did_scatter = 1
    return scattered_direction, albedo, did_scatter
