"""Render settings.

RenderSettings collects the values that control a render: image size,
samples per pixel, maximum bounce depth and the random seed. It validates
itself on construction, so a settings object that exists is always usable.

Example:
    >>> from spheretracer.config import RenderSettings
    >>> settings = RenderSettings.from_aspect_ratio(400, 16.0 / 9.0)
    >>> settings.height
    225
"""

from dataclasses import dataclass

# Largest image the preallocated render target can hold
MAX_IMAGE_SIZE = 2048

# Defaults: a 16:9 image, 400 pixels wide
DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = int(DEFAULT_WIDTH / DEFAULT_ASPECT_RATIO)
DEFAULT_SAMPLES_PER_PIXEL = 100
DEFAULT_MAX_DEPTH = 50
DEFAULT_SEED = 0


@dataclass
class RenderSettings:
    """Parameters for a single render.

    Attributes:
        width: Image width in pixels, in [2, MAX_IMAGE_SIZE].
        height: Image height in pixels, in [2, MAX_IMAGE_SIZE].
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of scatter events per path. Zero renders
            a black image.
        seed: Seed for the per-pixel random streams. Equal seeds give
            identical images.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = DEFAULT_MAX_DEPTH
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        # Pixel coordinates are divided by (size - 1)
        for name, value in (("width", self.width), ("height", self.height)):
            if value < 2:
                raise ValueError(f"Image {name} = {value} must be at least 2")
            if value > MAX_IMAGE_SIZE:
                raise ValueError(f"Image {name} = {value} exceeds maximum {MAX_IMAGE_SIZE}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"Samples per pixel = {self.samples_per_pixel} must be at least 1")
        if self.max_depth < 0:
            raise ValueError(f"Max depth = {self.max_depth} must not be negative")
        if self.seed < 0:
            raise ValueError(f"Seed = {self.seed} must not be negative")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def pixel_count(self) -> int:
        """Number of pixels in the image."""
        return self.width * self.height

    @classmethod
    def from_aspect_ratio(
        cls,
        width: int,
        aspect_ratio: float = DEFAULT_ASPECT_RATIO,
        **kwargs: int,
    ) -> "RenderSettings":
        """Build settings whose height is derived from width and aspect ratio.

        Args:
            width: Image width in pixels.
            aspect_ratio: Width divided by height; the height is truncated.
            **kwargs: Remaining RenderSettings fields.

        Raises:
            ValueError: If aspect_ratio is not positive or the result is invalid.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive")
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)
