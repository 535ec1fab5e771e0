"""Named scene presets.

Two scenes are provided:

- "default": a large ground sphere with three spheres resting on it, a
  diffuse one in the middle flanked by two mirror metals.
- "showcase": the same layout using every material kind, with a glass sphere
  on the left and a brushed (fuzzy) metal on the right.

Both scenes are framed for the default pinhole camera at the origin looking
down -z.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.scene.presets import create_scene
    >>> scene = create_scene("default")
    >>> scene.get_sphere_count()
    4
"""

from typing import Callable

from spheretracer.materials.dielectric import GLASS_INDEX
from spheretracer.scene.manager import SceneManager

# =============================================================================
# Scene Constants
# =============================================================================

# Ground: a huge sphere whose top sits just below the small spheres
GROUND_CENTER = (0.0, -100.5, -1.0)
GROUND_RADIUS = 100.0
GROUND_ALBEDO = (0.8, 0.8, 0.0)

# Small spheres, left to right
SPHERE_RADIUS = 0.5
LEFT_CENTER = (-1.0, 0.0, -1.0)
CENTER_CENTER = (0.0, 0.0, -1.0)
RIGHT_CENTER = (1.0, 0.0, -1.0)

CENTER_ALBEDO = (0.7, 0.3, 0.3)
LEFT_METAL_ALBEDO = (0.8, 0.8, 0.8)
RIGHT_METAL_ALBEDO = (0.8, 0.6, 0.2)

# Showcase-only parameters
SHOWCASE_CENTER_ALBEDO = (0.1, 0.2, 0.5)
SHOWCASE_FUZZ = 0.3


# =============================================================================
# Scene Factories
# =============================================================================


def create_default_scene() -> SceneManager:
    """Create the default four-sphere scene.

    Returns:
        A SceneManager holding a yellow Lambertian ground, a reddish Lambertian
        sphere in the middle and two mirror metal spheres on either side.
    """
    scene = SceneManager()

    scene.add_lambertian_sphere(GROUND_CENTER, GROUND_RADIUS, GROUND_ALBEDO)
    scene.add_lambertian_sphere(CENTER_CENTER, SPHERE_RADIUS, CENTER_ALBEDO)
    scene.add_metal_sphere(LEFT_CENTER, SPHERE_RADIUS, LEFT_METAL_ALBEDO)
    scene.add_metal_sphere(RIGHT_CENTER, SPHERE_RADIUS, RIGHT_METAL_ALBEDO)

    return scene


def create_showcase_scene() -> SceneManager:
    """Create a scene exercising all four material kinds.

    The left sphere is glass, the middle one a blue Lambertian and the right
    one a fuzzy metal. A small mirror sphere sits behind the middle sphere.
    """
    scene = SceneManager()

    scene.add_lambertian_sphere(GROUND_CENTER, GROUND_RADIUS, GROUND_ALBEDO)
    scene.add_lambertian_sphere(CENTER_CENTER, SPHERE_RADIUS, SHOWCASE_CENTER_ALBEDO)
    scene.add_dielectric_sphere(LEFT_CENTER, SPHERE_RADIUS, refractive_index=GLASS_INDEX)
    scene.add_fuzzy_metal_sphere(
        RIGHT_CENTER, SPHERE_RADIUS, RIGHT_METAL_ALBEDO, fuzz=SHOWCASE_FUZZ
    )
    scene.add_metal_sphere((0.0, -0.25, -2.5), 0.25, LEFT_METAL_ALBEDO)

    return scene


SCENE_PRESETS: dict[str, Callable[[], SceneManager]] = {
    "default": create_default_scene,
    "showcase": create_showcase_scene,
}


def create_scene(name: str) -> SceneManager:
    """Build a preset scene by name.

    Args:
        name: One of the keys of SCENE_PRESETS.

    Returns:
        The populated SceneManager.

    Raises:
        ValueError: If name is not a known preset.
    """
    try:
        factory = SCENE_PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(SCENE_PRESETS))
        raise ValueError(f"Unknown scene preset '{name}' (expected one of: {known})") from None
    return factory()
