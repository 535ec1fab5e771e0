"""Scene manager for building sphere scenes.

This module provides a high-level scene building API on top of the Taichi
sphere storage in spheretracer.scene.intersection. Every sphere carries its
own copy of a MaterialInfo; there is no shared material table.

The SceneManager maintains:
- A Python-side list of SphereInfo mirroring the Taichi fields
- Convenience methods for adding spheres of each material kind
- Scene serialization to and from plain dicts

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> scene.add_lambertian_sphere(center=(0, 0, -1), radius=0.5, albedo=(0.7, 0.3, 0.3))
    >>> scene.add_dielectric_sphere(center=(-1, 0, -1), radius=0.5, refractive_index=1.5)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from spheretracer.materials.dielectric import GLASS_INDEX, dielectric
from spheretracer.materials.lambertian import lambertian
from spheretracer.materials.material import Color, MaterialInfo
from spheretracer.materials.metal import fuzzy_metal, metal
from spheretracer.scene.intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
)

Point = tuple[float, float, float]


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material: The sphere's material.
    """

    sphere_index: int
    center: Point
    radius: float
    material: MaterialInfo


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        spheres: List of sphere configurations, each a dict with "center",
            "radius" and "material" keys.
    """

    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """High-level builder for the sphere scene.

    The Taichi fields behind the scene are module-level, so there is one
    active scene per process; creating a SceneManager clears it.

    Attributes:
        spheres: List of SphereInfo for all spheres in the scene, in
            insertion order.

    Example:
        >>> scene = SceneManager()
        >>> scene.add_lambertian_sphere((0, -100.5, -1), 100, (0.8, 0.8, 0.0))
        >>> scene.add_fuzzy_metal_sphere((1, 0, -1), 0.5, (0.8, 0.6, 0.2), fuzz=0.3)
        >>> scene.add_dielectric_sphere((-1, 0, -1), 0.5, refractive_index=1.5)
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.spheres: list[SphereInfo] = []
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        self.spheres.clear()

    def clear(self) -> None:
        """Clear the entire scene."""
        self._clear_all()

    # =========================================================================
    # Sphere Management
    # =========================================================================

    def add_sphere(self, center: Point, radius: float, material: MaterialInfo) -> int:
        """Add a sphere with the given material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material: The material, e.g. from lambertian() or dielectric().

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If the radius is not positive.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        center = (float(center[0]), float(center[1]), float(center[2]))
        sphere_index = add_sphere(center, radius, material)

        info = SphereInfo(
            sphere_index=sphere_index,
            center=center,
            radius=float(radius),
            material=material,
        )
        self.spheres.append(info)

        return sphere_index

    def add_lambertian_sphere(self, center: Point, radius: float, albedo: Color) -> int:
        """Add a sphere with a new Lambertian material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            albedo: The diffuse reflectance color as (R, G, B).

        Returns:
            The index of the added sphere.
        """
        return self.add_sphere(center, radius, lambertian(albedo))

    def add_metal_sphere(self, center: Point, radius: float, albedo: Color) -> int:
        """Add a sphere with a new mirror metal material."""
        return self.add_sphere(center, radius, metal(albedo))

    def add_fuzzy_metal_sphere(
        self,
        center: Point,
        radius: float,
        albedo: Color,
        fuzz: float,
    ) -> int:
        """Add a sphere with a new fuzzy metal material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            albedo: The reflective color as (R, G, B).
            fuzz: The fuzz radius in [0, 1].

        Returns:
            The index of the added sphere.
        """
        return self.add_sphere(center, radius, fuzzy_metal(albedo, fuzz))

    def add_dielectric_sphere(
        self,
        center: Point,
        radius: float,
        refractive_index: float = GLASS_INDEX,
    ) -> int:
        """Add a sphere with a new dielectric material.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            refractive_index: Index of refraction. Default is 1.5 (glass).

        Returns:
            The index of the added sphere.
        """
        return self.add_sphere(center, radius, dielectric(refractive_index))

    def get_sphere_count(self) -> int:
        """Get the number of spheres stored in the Taichi fields."""
        return get_sphere_count()

    def get_sphere_info(self, sphere_index: int) -> SphereInfo | None:
        """Get information about a sphere by index.

        Returns:
            SphereInfo for the sphere, or None if not found.
        """
        if 0 <= sphere_index < len(self.spheres):
            return self.spheres[sphere_index]
        return None

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene as a SceneConfig."""
        return SceneConfig(
            spheres=[
                {
                    "center": list(info.center),
                    "radius": info.radius,
                    "material": info.material.to_dict(),
                }
                for info in self.spheres
            ]
        )

    def from_config(self, config: SceneConfig) -> None:
        """Replace the current scene with one loaded from a SceneConfig.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If a sphere entry is malformed or invalid.
        """
        self.clear()
        for i, sphere in enumerate(config.spheres):
            try:
                center = tuple(sphere["center"])
                radius = sphere["radius"]
                material_data = sphere["material"]
            except KeyError as e:
                raise ValueError(f"Sphere {i} is missing {e}") from None
            if len(center) != 3:
                raise ValueError(f"Sphere {i} center must have 3 components")
            self.add_sphere(center, radius, MaterialInfo.from_dict(material_data))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene as a plain dict (JSON compatible)."""
        return {"spheres": self.to_config().spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace the current scene with one loaded from a dict.

        Args:
            data: Dict produced by to_dict().

        Raises:
            ValueError: If the dict is malformed or holds invalid values.
        """
        self.from_config(SceneConfig(spheres=list(data.get("spheres", []))))

    @staticmethod
    def get_max_spheres() -> int:
        """Get the maximum number of spheres supported."""
        return MAX_SPHERES
