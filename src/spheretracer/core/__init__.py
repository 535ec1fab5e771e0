"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    sampler: Seeded random streams and sampling helpers
    integrator: Ray color evaluation and the scanline render kernel
    renderer: Renderer driving the integrator over a whole image
"""

from .ray import (
    Ray,
    lerp,
    length_squared,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    reflectance,
    refract,
    vec3,
)
from .sampler import (
    MAX_RANDOM_STREAMS,
    get_seeded_stream_count,
    pcg_hash,
    random_f32,
    random_in_unit_sphere,
    random_range,
    random_u32,
    random_unit_vector,
    seed_random_streams,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from spheretracer.core.integrator or spheretracer.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length_squared",
    "normalize",
    "near_zero",
    "reflect",
    "refract",
    "reflectance",
    "lerp",
    "MAX_RANDOM_STREAMS",
    "seed_random_streams",
    "get_seeded_stream_count",
    "pcg_hash",
    "random_u32",
    "random_f32",
    "random_range",
    "random_in_unit_sphere",
    "random_unit_vector",
]
