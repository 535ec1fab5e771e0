"""Material dispatch: one scatter() entry point for every material kind."""

import taichi as ti
import taichi.math as tm

from spheretracer.core.ray import Ray, make_ray
from spheretracer.geometry.sphere import HitRecord
from spheretracer.materials.dielectric import scatter_dielectric
from spheretracer.materials.lambertian import scatter_lambertian
from spheretracer.materials.material import MaterialKind
from spheretracer.materials.metal import scatter_fuzzy_metal, scatter_metal

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter(incoming: Ray, rec: HitRecord, rng: ti.i32):
    """Scatter a ray off the surface recorded in a hit record.

    Dispatches on rec.material.kind to the matching scatter function. The
    outgoing ray starts at the hit point.

    Args:
        incoming: The ray that produced the hit.
        rec: The hit record (must have hit == 1).
        rng: The random stream handle.

    Returns:
        A tuple of (scattered_ray, attenuation, did_scatter) where:
        - scattered_ray: The outgoing ray (only meaningful if did_scatter).
        - attenuation: The color attenuation for this bounce.
        - did_scatter: 1 if the ray scattered, 0 if absorbed.
    """
    material = rec.material

    # Default values
    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0

    if material.kind == int(MaterialKind.LAMBERTIAN):
        scattered_direction, attenuation, did_scatter = scatter_lambertian(
            material.albedo, rec.normal, rng
        )

    elif material.kind == int(MaterialKind.METAL):
        scattered_direction, attenuation, did_scatter = scatter_metal(
            material.albedo, incoming.direction, rec.normal
        )

    elif material.kind == int(MaterialKind.FUZZY_METAL):
        scattered_direction, attenuation, did_scatter = scatter_fuzzy_metal(
            material.albedo, material.fuzz, incoming.direction, rec.normal, rng
        )

    elif material.kind == int(MaterialKind.DIELECTRIC):
        scattered_direction, attenuation, did_scatter = scatter_dielectric(
            material.refractive_index, incoming.direction, rec.normal, rec.front_face, rng
        )

    return make_ray(rec.point, scattered_direction), attenuation, did_scatter
