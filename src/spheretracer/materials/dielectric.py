"""Dielectric (glass/water) material implementation.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when the refraction ratio times sin(theta)
      exceeds 1

The material randomly chooses between reflection and refraction based on the
Fresnel reflectance, which grows at grazing angles. It never absorbs and does
not tint the light.

Example:
    >>> from spheretracer.materials.dielectric import dielectric
    >>> glass = dielectric(1.5)
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import normalize, reflect, reflectance, refract
from spheretracer.core.sampler import random_f32
from spheretracer.materials.material import MaterialInfo, MaterialKind, make_material

# Type alias for 3D vectors
vec3 = tm.vec3

# Common refractive indices
AIR_INDEX = 1.0
WATER_INDEX = 1.33
GLASS_INDEX = 1.5
DIAMOND_INDEX = 2.4


def dielectric(refractive_index: float = GLASS_INDEX) -> MaterialInfo:
    """Create a dielectric material.

    Args:
        refractive_index: Index of refraction relative to the surrounding
            medium. Must be positive. Default is 1.5 (typical glass).

    Raises:
        ValueError: If the refractive index is not positive.
    """
    return make_material(MaterialKind.DIELECTRIC, refractive_index=refractive_index)


@ti.func
def refraction_ratio(refractive_index: ti.f32, front_face: ti.i32) -> ti.f32:
    """Ratio of indices for a ray entering (front face) or leaving the medium."""
    ratio = 1.0 / refractive_index
    if front_face == 0:
        ratio = refractive_index
    return ratio


@ti.func
def cannot_refract(unit_direction: vec3, normal: vec3, ratio: ti.f32) -> ti.i32:
    """Check for total internal reflection.

    Args:
        unit_direction: The incoming direction (unit length).
        normal: The surface normal facing the incoming ray.
        ratio: The refraction ratio from refraction_ratio().

    Returns:
        1 if Snell's law has no solution, 0 otherwise.
    """
    cos_theta = tm.min(tm.dot(-unit_direction, normal), 1.0)
    sin_theta = tm.sqrt(1.0 - cos_theta * cos_theta)
    return ratio * sin_theta > 1.0


@ti.func
def scatter_dielectric(
    refractive_index: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
    rng: ti.i32,
):
    """Reflect or refract a ray at a dielectric boundary.

    Args:
        refractive_index: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The surface normal facing the incoming ray (unit length).
        front_face: 1 if the ray is entering the material, 0 if leaving.
        rng: The random stream handle.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The reflected or refracted unit direction.
        - attenuation: White.
        - did_scatter: Always 1.
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    ratio = refraction_ratio(refractive_index, front_face)

    unit_direction = normalize(incident_direction)
    cos_theta = tm.min(tm.dot(-unit_direction, normal), 1.0)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    if cannot_refract(unit_direction, normal, ratio) or random_f32(rng) < reflectance(
        cos_theta, ratio
    ):
        scattered_direction = reflect(unit_direction, normal)
    else:
        scattered_direction = refract(unit_direction, normal, ratio)

    did_scatter = 1
    return scattered_direction, attenuation, did_scatter
