"""Image export utilities for rendered images.

This module writes 8-bit images produced by the renderer to files.

Supported formats:
    - PPM (plain text "P3", one line per image row)
    - PNG (8-bit sRGB via Pillow)

Images are NumPy arrays of shape (height, width, 3) with dtype uint8 and the
top row first, as returned by Renderer.get_image_uint8().

Example:
    >>> from spheretracer.preview.export import save_image
    >>> image = renderer.render()
    >>> save_image(image, "output.ppm")
    >>> save_image(image, "output.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

PPM_MAX_VALUE = 255


def _check_image(image: npt.NDArray[np.uint8]) -> None:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Image must have shape (height, width, 3), got {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Image must have dtype uint8, got {image.dtype}")


def format_ppm(image: npt.NDArray[np.uint8]) -> str:
    """Format an image as plain-text PPM.

    The output is the header "P3", "width height" and "255" on separate
    lines, followed by one line per image row (top row first) holding the
    row's "R G B" triplets separated by spaces.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.

    Returns:
        The PPM text, ending in a newline.

    Raises:
        ValueError: If the image has the wrong shape or dtype.
    """
    _check_image(image)
    height, width, _ = image.shape

    lines = ["P3", f"{width} {height}", str(PPM_MAX_VALUE)]
    for row in image:
        lines.append(" ".join(str(int(value)) for value in row.reshape(-1)))
    return "\n".join(lines) + "\n"


def write_ppm(image: npt.NDArray[np.uint8], stream: TextIO) -> None:
    """Write an image as plain-text PPM to an open text stream (e.g. stdout)."""
    stream.write(format_ppm(image))


def save_ppm(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image as a plain-text PPM file.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.
        filepath: Output file path.
    """
    with open(filepath, "w", encoding="ascii") as f:
        write_ppm(image, f)


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image as an 8-bit PNG file.

    The values are written unchanged; gamma correction has already been
    applied by the renderer.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.
        filepath: Output file path (should end in .png).
    """
    _check_image(image)
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)


def save_image(image: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an image, choosing PNG for a ".png" suffix and PPM otherwise."""
    if Path(filepath).suffix.lower() == ".png":
        save_png(image, filepath)
    else:
        save_ppm(image, filepath)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
