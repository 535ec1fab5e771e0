"""Material variant shared by spheres, hit records and the scatter dispatch.

A material is one of four closed kinds (see MaterialKind). On the Taichi side
it is a small struct carried by value inside spheres and hit records; on the
Python side scene-building code works with the frozen MaterialInfo dataclass,
which knows how to validate itself and round-trip through plain dicts.

Only the fields relevant to a kind are meaningful:

    ============  =======  ======  ==================
    kind          albedo   fuzz    refractive_index
    ============  =======  ======  ==================
    LAMBERTIAN    yes      -       -
    METAL         yes      -       -
    FUZZY_METAL   yes      yes     -
    DIELECTRIC    -        -       yes
    ============  =======  ======  ==================
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

Color = tuple[float, float, float]


class MaterialKind(IntEnum):
    """Enumeration of the supported material kinds.

    The integer values are stored in Taichi fields and compared inside
    kernels, so they must stay stable.
    """

    LAMBERTIAN = 0
    METAL = 1
    FUZZY_METAL = 2
    DIELECTRIC = 3


@ti.dataclass
class Material:
    """Material parameters as seen inside Taichi kernels.

    Attributes:
        kind: The MaterialKind value.
        albedo: Reflectance color for Lambertian and metal kinds.
        fuzz: Reflection cone radius for fuzzy metal.
        refractive_index: Index of refraction for dielectrics.
    """

    kind: ti.i32
    albedo: vec3
    fuzz: ti.f32
    refractive_index: ti.f32


def validate_albedo(albedo: Color) -> Color:
    """Check that an albedo is an RGB triple with components in [0, 1].

    Args:
        albedo: The reflectance color as (R, G, B).

    Returns:
        The albedo as a tuple of floats.

    Raises:
        ValueError: If the albedo does not have three components or any
            component is outside [0, 1].
    """
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return (float(albedo[0]), float(albedo[1]), float(albedo[2]))


@dataclass(frozen=True)
class MaterialInfo:
    """Python-side description of a material.

    Use the constructors in the per-kind modules (lambertian(), metal(),
    fuzzy_metal(), dielectric()) rather than building this directly; they
    validate the parameters.

    Attributes:
        kind: The material kind.
        albedo: Reflectance color (unused by dielectrics).
        fuzz: Fuzz radius (fuzzy metal only).
        refractive_index: Index of refraction (dielectric only).
    """

    kind: MaterialKind
    albedo: Color = (0.0, 0.0, 0.0)
    fuzz: float = 0.0
    refractive_index: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict holding only the kind's parameters."""
        data: dict[str, Any] = {"type": self.kind.name.lower()}
        if self.kind == MaterialKind.DIELECTRIC:
            data["refractive_index"] = self.refractive_index
        else:
            data["albedo"] = list(self.albedo)
        if self.kind == MaterialKind.FUZZY_METAL:
            data["fuzz"] = self.fuzz
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaterialInfo":
        """Build a validated material from a dict produced by to_dict().

        Args:
            data: Dict with a "type" key and the kind's parameters.

        Returns:
            The reconstructed material.

        Raises:
            ValueError: If the type is unknown, a parameter is missing, or a
                parameter fails validation.
        """
        type_name = str(data.get("type", "")).upper()
        try:
            kind = MaterialKind[type_name]
        except KeyError:
            raise ValueError(f"Unknown material type: {data.get('type')!r}") from None

        try:
            if kind == MaterialKind.DIELECTRIC:
                return make_material(kind, refractive_index=data["refractive_index"])
            if kind == MaterialKind.FUZZY_METAL:
                return make_material(kind, albedo=tuple(data["albedo"]), fuzz=data["fuzz"])
            return make_material(kind, albedo=tuple(data["albedo"]))
        except KeyError as e:
            raise ValueError(f"Material of type {type_name.lower()} is missing {e}") from None


def make_material(
    kind: MaterialKind,
    *,
    albedo: Color = (0.0, 0.0, 0.0),
    fuzz: float = 0.0,
    refractive_index: float = 1.0,
) -> MaterialInfo:
    """Build a validated MaterialInfo of any kind.

    Args:
        kind: The material kind.
        albedo: Reflectance color; must be in [0, 1] for non-dielectrics.
        fuzz: Fuzz radius in [0, 1] for fuzzy metal.
        refractive_index: Positive index of refraction for dielectrics.

    Returns:
        The validated material.

    Raises:
        ValueError: If any parameter relevant to the kind is invalid.
    """
    if kind == MaterialKind.DIELECTRIC:
        if refractive_index <= 0.0:
            raise ValueError(
                f"Refractive index = {refractive_index} must be positive."
            )
        return MaterialInfo(kind=kind, refractive_index=float(refractive_index))

    albedo = validate_albedo(albedo)
    if kind == MaterialKind.FUZZY_METAL:
        if fuzz < 0.0 or fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        return MaterialInfo(kind=kind, albedo=albedo, fuzz=float(fuzz))
    return MaterialInfo(kind=kind, albedo=albedo)
