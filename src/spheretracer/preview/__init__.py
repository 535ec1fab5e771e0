"""Preview module for image output.

Components:
    export: PPM and PNG image export utilities

Example:
    >>> from spheretracer.preview import save_image
    >>> save_image(renderer.render(), "output.png")
"""

from spheretracer.preview.export import (
    compute_rmse,
    format_ppm,
    save_image,
    save_png,
    save_ppm,
    write_ppm,
)

__all__ = [
    "format_ppm",
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "compute_rmse",
]
