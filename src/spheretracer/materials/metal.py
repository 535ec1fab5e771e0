"""Metal (specular reflective) material implementations.

Two kinds share this module:

    METAL        perfect mirror: R = I - 2(I . N)N
    FUZZY_METAL  mirror direction perturbed by fuzz * random_in_unit_sphere()

A reflected direction that ends up at or below the surface (dot with the
normal <= 0) means the ray is absorbed.

Example:
    >>> from spheretracer.materials.metal import fuzzy_metal, metal
    >>> gold = fuzzy_metal((0.8, 0.6, 0.2), fuzz=0.3)
    >>> mirror = metal((0.8, 0.8, 0.8))
"""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import normalize, reflect
from spheretracer.core.sampler import random_in_unit_sphere
from spheretracer.materials.material import Color, MaterialInfo, MaterialKind, make_material

# Type alias for 3D vectors
vec3 = tm.vec3


def metal(albedo: Color) -> MaterialInfo:
    """Create a perfect mirror metal.

    Args:
        albedo: The reflective color as (R, G, B), components in [0, 1].

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    return make_material(MaterialKind.METAL, albedo=albedo)


def fuzzy_metal(albedo: Color, fuzz: float) -> MaterialInfo:
    """Create a fuzzy (rough) metal.

    Args:
        albedo: The reflective color as (R, G, B), components in [0, 1].
        fuzz: Radius of the perturbation sphere in [0, 1].
            0 = perfect mirror, 1 = maximum fuzz.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
        ValueError: If fuzz is outside [0, 1].
    """
    return make_material(MaterialKind.FUZZY_METAL, albedo=albedo, fuzz=fuzz)


@ti.func
def scatter_metal(albedo: vec3, incident_direction: vec3, normal: vec3):
    """Reflect a ray off a perfect mirror.

    Args:
        albedo: The reflective color (RGB).
        incident_direction: The incoming ray direction (any length).
        normal: The surface normal (unit length).

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where:
        - scattered_direction: The reflected unit direction, or zero if
          absorbed.
        - attenuation: The albedo.
        - did_scatter: 1 if the reflection leaves the surface, 0 if absorbed.
    """
    scattered_direction = reflect(normalize(incident_direction), normal)

    did_scatter = 1
    if tm.dot(scattered_direction, normal) <= 0.0:
        did_scatter = 0
        scattered_direction = vec3(0.0, 0.0, 0.0)

    return scattered_direction, albedo, did_scatter


@ti.func
def scatter_fuzzy_metal(
    albedo: vec3,
    fuzz: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    rng: ti.i32,
):
    """Reflect a ray off a rough metal surface.

    The mirror direction is perturbed by a random offset scaled by fuzz. The
    absorption test runs on the perturbed direction, which is normalized only
    once it is known to leave the surface (and so cannot be zero).

    Args:
        albedo: The reflective color (RGB).
        fuzz: The fuzz radius, expected in [0, 1].
        incident_direction: The incoming ray direction (any length).
        normal: The surface normal (unit length).
        rng: The random stream handle.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter), see
        scatter_metal().
    """
    reflected = reflect(normalize(incident_direction), normal)
    perturbed = reflected + fuzz * random_in_unit_sphere(rng)

    did_scatter = 0
    scattered_direction = vec3(0.0, 0.0, 0.0)
    if tm.dot(perturbed, normal) > 0.0:
        did_scatter = 1
        scattered_direction = normalize(perturbed)

    return scattered_direction, albedo, did_scatter
