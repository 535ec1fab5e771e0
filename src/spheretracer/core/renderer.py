"""Scanline renderer driving the integrator over a whole image.

This module provides a convenient wrapper around the core integrator that:
- Sets up the camera, render target and random streams from RenderSettings
- Renders the image one scanline at a time, top row first
- Reports progress per scanline through a callback or a generator
- Converts the accumulated samples to 8-bit color

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.config import RenderSettings
    >>> from spheretracer.core.renderer import Renderer
    >>> from spheretracer.scene.presets import create_scene
    >>>
    >>> scene = create_scene("default")
    >>> renderer = Renderer(RenderSettings(width=200, height=100, samples_per_pixel=10))
    >>> image = renderer.render()
    >>> image.shape
    (100, 200, 3)
"""

from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt

from spheretracer.camera.pinhole import Camera, setup_camera
from spheretracer.config import RenderSettings
from spheretracer.core.integrator import (
    gamma_correct_and_quantize,
    get_accumulated_image_numpy,
    render_scanline,
    setup_render_target,
)
from spheretracer.core.sampler import seed_random_streams
from spheretracer.preview.export import save_image

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """Renders the current scene according to a RenderSettings.

    The renderer writes to the global integrator buffers (which are Taichi
    fields), so only one render is in flight at a time. Every render starts
    from freshly seeded random streams, which makes it reproducible.

    Attributes:
        settings: The render settings.
        camera: The camera used for primary rays.
    """

    def __init__(self, settings: RenderSettings, camera: Camera | None = None) -> None:
        """Initialize the renderer.

        Args:
            settings: Render settings.
            camera: Camera to render through. Defaults to the standard
                pinhole camera with the image's aspect ratio.
        """
        self.settings = settings
        self.camera = camera if camera is not None else Camera(aspect_ratio=settings.aspect_ratio)
        self._rows_done = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    @property
    def rows_done(self) -> int:
        """Number of scanlines rendered by the current render."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        """Whether every scanline of the image has been rendered."""
        return self._rows_done == self.height

    def _prepare(self) -> None:
        setup_camera(self.camera)
        setup_render_target(self.width, self.height)
        seed_random_streams(self.settings.seed, self.settings.pixel_count)
        self._rows_done = 0

    def render_rows(self) -> Generator[tuple[int, int], None, None]:
        """Render the image scanline by scanline, yielding after each one.

        Rows are rendered from the top of the image (j = height - 1) down to
        the bottom (j = 0).

        Yields:
            Tuple of (rows_done, total_rows).

        Example:
            >>> for done, total in renderer.render_rows():
            ...     print(f"Scanlines remaining: {total - done}")
        """
        self._prepare()
        for j in range(self.height - 1, -1, -1):
            render_scanline(j, self.settings.samples_per_pixel, self.settings.max_depth)
            self._rows_done += 1
            yield (self._rows_done, self.height)

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.uint8]:
        """Render the full image.

        Args:
            callback: Optional callback called after each scanline with
                (rows_done, total_rows).

        Returns:
            The finished image, see get_image_uint8().
        """
        for done, total in self.render_rows():
            if callback is not None:
                callback(done, total)
        return self.get_image_uint8()

    def get_image_numpy(self) -> npt.NDArray[np.float64]:
        """Get the averaged linear color of every pixel.

        Returns:
            Array of shape (height, width, 3), top row first.
        """
        return get_accumulated_image_numpy() / self.settings.samples_per_pixel

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the gamma corrected, quantized image.

        Returns:
            Array of shape (height, width, 3) with dtype uint8, top row first.
        """
        return gamma_correct_and_quantize(
            get_accumulated_image_numpy(), self.settings.samples_per_pixel
        )

    def save_image(self, filepath: str | Path) -> None:
        """Save the rendered image as PNG or PPM depending on the extension."""
        save_image(self.get_image_uint8(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self.settings.samples_per_pixel}, "
            f"max_depth={self.settings.max_depth}, rows_done={self.rows_done})"
        )
