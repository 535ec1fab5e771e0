"""Scene module for sphere storage, intersection and scene building.

Components:
    intersection: Sphere storage in Taichi fields and closest-hit queries
    manager: SceneManager builder with serialization
    presets: Named example scenes

Sphere data is kept in a Structure-of-Arrays layout, each sphere holding its
own copy of its material parameters.
"""

from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere,
    get_sphere_count,
    intersect_scene,
)
from .manager import (
    SceneConfig,
    SceneManager,
    SphereInfo,
)
from .presets import (
    SCENE_PRESETS,
    create_default_scene,
    create_scene,
    create_showcase_scene,
)

__all__ = [
    # Intersection module
    "add_sphere",
    "clear_scene",
    "get_sphere",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "SceneConfig",
    # Presets
    "SCENE_PRESETS",
    "create_scene",
    "create_default_scene",
    "create_showcase_scene",
]
