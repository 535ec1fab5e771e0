"""Camera module for primary ray generation.

Components:
    pinhole: Fixed axis-aligned pinhole camera

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import (
    Camera,
    get_camera_info,
    get_ray,
    is_camera_initialized,
    setup_camera,
)

__all__ = [
    "Camera",
    "setup_camera",
    "is_camera_initialized",
    "get_ray",
    "get_camera_info",
]
