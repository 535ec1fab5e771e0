"""Pinhole camera with a fixed axis-aligned viewport.

The eye sits at the camera origin looking down -z. A virtual image plane one
focal length in front of it spans viewport_height vertically and
aspect_ratio * viewport_height horizontally. get_ray(u, v) interpolates
linearly across that plane:

    direction = lower_left + u * horizontal + v * vertical - origin

with u = 0 at the left edge, u = 1 at the right edge, v = 0 at the bottom and
v = 1 at the top.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.camera.pinhole import Camera, setup_camera, get_ray
    >>>
    >>> setup_camera(Camera(aspect_ratio=16.0 / 9.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(0.5, 0.5)  # Ray through image center
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti

from spheretracer.core.ray import Ray, make_ray, vec3

# Default viewport, matching the classic 16:9 setup
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_VIEWPORT_HEIGHT = 2.0
DEFAULT_FOCAL_LENGTH = 1.0

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class Camera:
    """Configuration for the pinhole camera.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        viewport_height: Height of the virtual image plane.
        focal_length: Distance from the origin to the image plane.
        origin: Eye position in world space (x, y, z).
    """

    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    viewport_height: float = DEFAULT_VIEWPORT_HEIGHT
    focal_length: float = DEFAULT_FOCAL_LENGTH
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {self.aspect_ratio} must be positive")
        if self.viewport_height <= 0.0:
            raise ValueError(f"Viewport height = {self.viewport_height} must be positive")
        if self.focal_length <= 0.0:
            raise ValueError(f"Focal length = {self.focal_length} must be positive")

    @property
    def viewport_width(self) -> float:
        """Width of the virtual image plane."""
        return self.aspect_ratio * self.viewport_height


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full width
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())  # Full height
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())  # Lower-left of viewport
_camera_initialized = ti.field(dtype=ti.i32, shape=())


# =============================================================================
# Camera Setup (Python-side, called once per camera configuration)
# =============================================================================


def setup_camera(camera: Camera) -> None:
    """Initialize camera state from configuration.

    Computes the viewport geometry and writes it to Taichi fields. Must be
    called from Python before rendering.

    Args:
        camera: Camera configuration.
    """
    origin = np.array(camera.origin, dtype=np.float64)
    horizontal = np.array([camera.viewport_width, 0.0, 0.0])
    vertical = np.array([0.0, camera.viewport_height, 0.0])
    forward = np.array([0.0, 0.0, camera.focal_length])

    lower_left = origin - horizontal / 2.0 - vertical / 2.0 - forward

    _camera_origin[None] = origin.tolist()
    _viewport_horizontal[None] = horizontal.tolist()
    _viewport_vertical[None] = vertical.tolist()
    _lower_left_corner[None] = lower_left.tolist()
    _camera_initialized[None] = 1


def is_camera_initialized() -> bool:
    """Check whether setup_camera() has been called."""
    return bool(_camera_initialized[None])


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate a ray through normalized image coordinates (u, v).

    Args:
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A Ray from the camera origin toward the point (u, v) on the image
        plane. The direction is not normalized.
    """
    point_on_viewport = (
        _lower_left_corner[None] + u * _viewport_horizontal[None] + v * _viewport_vertical[None]
    )
    origin = _camera_origin[None]
    return make_ray(origin, point_on_viewport - origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical, lower_left.
    """
    origin_vec = _camera_origin[None]
    h_vec = _viewport_horizontal[None]
    vert_vec = _viewport_vertical[None]
    ll_vec = _lower_left_corner[None]

    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "horizontal": (float(h_vec[0]), float(h_vec[1]), float(h_vec[2])),
        "vertical": (float(vert_vec[0]), float(vert_vec[1]), float(vert_vec[2])),
        "lower_left": (float(ll_vec[0]), float(ll_vec[1]), float(ll_vec[2])),
    }
