"""Materials module for surface scattering models.

This module implements the four material kinds a sphere can carry:

Components:
    material: MaterialKind enum, the Material struct and MaterialInfo
    lambertian: Ideal diffuse reflection
    metal: Mirror reflection, with an optional fuzzy variant
    dielectric: Glass-like refraction with Schlick reflectance
    scatter: Single dispatch entry point used by the integrator (import
        spheretracer.materials.scatter directly)

Each material kind provides:
    - a Python-side constructor returning a validated MaterialInfo
    - a Taichi scatter function returning
      (scattered_direction, attenuation, did_scatter)
"""

from .material import (
    Material,
    MaterialInfo,
    MaterialKind,
    make_material,
    validate_albedo,
)
from .dielectric import (
    dielectric,
    reflectance,
    scatter_dielectric,
)
from .lambertian import (
    lambertian,
    scatter_lambertian,
)
from .metal import (
    fuzzy_metal,
    metal,
    scatter_fuzzy_metal,
    scatter_metal,
)
# Note: scatter is NOT imported here to avoid circular imports (it needs
# geometry.sphere, which itself imports materials.material).
# Import it directly from spheretracer.materials.scatter when needed.

__all__ = [
    # Variant
    "Material",
    "MaterialInfo",
    "MaterialKind",
    "make_material",
    "validate_albedo",
    # Lambertian
    "lambertian",
    "scatter_lambertian",
    # Metal
    "metal",
    "fuzzy_metal",
    "scatter_metal",
    "scatter_fuzzy_metal",
    # Dielectric
    "dielectric",
    "reflectance",
    "scatter_dielectric",
]
