"""Recursive ray color integrator and per-scanline render kernel.

The color carried by a ray is defined recursively:

    ray_color(ray, 0)     = black
    ray_color(ray, depth) = background(ray.direction)            on a miss
                          = black                                 on absorption
                          = attenuation * ray_color(scattered, depth - 1)

It is evaluated here as a loop with a running attenuation product, which is
equivalent and keeps the Taichi function free of recursion. The search
interval starts at T_MIN so a scattered ray does not re-hit the surface it
left because of floating point error.

Rendering is done one scanline per kernel launch. Each pixel accumulates the
sum of its samples into a preallocated buffer; averaging, gamma correction
and quantization happen in NumPy once all rows are done.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.camera.pinhole import Camera, setup_camera
    >>> from spheretracer.core.integrator import (
    ...     setup_render_target, render_scanline, get_accumulated_image_numpy
    ... )
    >>> from spheretracer.core.sampler import seed_random_streams
    >>> from spheretracer.scene.presets import create_scene
    >>>
    >>> scene = create_scene("default")
    >>> setup_camera(Camera(aspect_ratio=2.0))
    >>> setup_render_target(200, 100)
    >>> seed_random_streams(0, 200 * 100)
    >>> for j in reversed(range(100)):
    ...     render_scanline(j, samples_per_pixel=10, max_depth=50)
"""

import numpy as np
import taichi as ti
import taichi.math as tm

from spheretracer.camera.pinhole import get_ray, is_camera_initialized
from spheretracer.core.ray import Ray, lerp, make_ray, normalize
from spheretracer.core.sampler import random_f32
from spheretracer.materials.scatter import scatter
from spheretracer.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Path Tracing Constants
# =============================================================================

# Default maximum number of bounces
MAX_DEPTH = 50

# Lower end of the hit interval (avoids self-intersection "shadow acne")
T_MIN = 0.001
T_MAX = 1e10

# Sky gradient endpoints
SKY_HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

# Largest value written by quantization is int(256 * 0.999) = 255
QUANTIZE_CLAMP_MAX = 0.999

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Per-pixel sum of sample colors (preallocated to max size)
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Results of the single-ray helpers
_single_ray_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_single_ray_count = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and clears the buffers. The buffers are
    preallocated to MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT to avoid Taichi kernel
    recompilation issues.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffer to zero."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_camera_initialized() -> None:
    if not is_camera_initialized():
        raise RuntimeError("Camera not set up. Call setup_camera() first.")


# =============================================================================
# Ray Color
# =============================================================================


@ti.func
def background_color(direction: vec3) -> vec3:
    """Sky color seen by a ray that escapes the scene.

    Blends white at the horizon into light blue overhead based on the
    vertical component of the unit direction.
    """
    unit_direction = normalize(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return lerp(SKY_HORIZON_COLOR, SKY_ZENITH_COLOR, t)


@ti.func
def trace_path(ray: Ray, depth: ti.i32, rng: ti.i32):
    """Follow a path through the scene for at most depth scatter events.

    Args:
        ray: The starting ray.
        depth: Remaining bounce budget. Zero or less yields black.
        rng: The random stream handle.

    Returns:
        A tuple of (color, scatter_count) where scatter_count is the number of
        material scatter evaluations performed along the path.
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    current = ray
    scatter_count = 0

    # Active flag for path continuation (no break inside ti.func loops)
    active = 1

    for _ in range(depth):
        if active == 1:
            rec = intersect_scene(current, T_MIN, T_MAX)

            if rec.hit == 0:
                color = throughput * background_color(current.direction)
                active = 0
            else:
                scattered, attenuation, did_scatter = scatter(current, rec, rng)
                scatter_count += 1

                if did_scatter == 0:
                    # Absorbed
                    active = 0
                else:
                    throughput *= attenuation
                    current = scattered

    # Paths still active here ran out of depth and stay black
    return color, scatter_count


@ti.func
def ray_color(ray: Ray, depth: ti.i32, rng: ti.i32) -> vec3:
    """Compute the color carried back along a ray.

    Args:
        ray: The ray to evaluate.
        depth: Maximum number of scatter events.
        rng: The random stream handle.

    Returns:
        The RGB color, each channel in [0, 1].
    """
    color, _ = trace_path(ray, depth, rng)
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_row(
    j: ti.i32, width: ti.i32, height: ti.i32, samples_per_pixel: ti.i32, max_depth: ti.i32
):
    """Accumulate samples_per_pixel samples for every pixel of row j.

    Pixel (i, j) draws its randomness from stream j * width + i.
    """
    ti.loop_config(serialize=True)
    for i in range(width):
        rng = j * width + i
        color_sum = vec3(0.0, 0.0, 0.0)
        for _ in range(samples_per_pixel):
            u = (ti.cast(i, ti.f32) + random_f32(rng)) / ti.cast(width - 1, ti.f32)
            v = (ti.cast(j, ti.f32) + random_f32(rng)) / ti.cast(height - 1, ti.f32)
            color_sum += ray_color(get_ray(u, v), max_depth, rng)
        _color_buffer[i, j] = color_sum


@ti.kernel
def _trace_single_ray(
    ox: ti.f32, oy: ti.f32, oz: ti.f32,
    dx: ti.f32, dy: ti.f32, dz: ti.f32,
    depth: ti.i32, rng: ti.i32,
):
    """Trace one ray into _single_ray_color and _single_ray_count.

    The outermost loop of a kernel runs in parallel, so the bounce loop is
    nested inside a serialized single-iteration loop.
    """
    ti.loop_config(serialize=True)
    for _ in range(1):
        color, count = trace_path(make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz)), depth, rng)
        _single_ray_color[None] = color
        _single_ray_count[None] = count


# =============================================================================
# Public Rendering API
# =============================================================================


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = MAX_DEPTH,
    stream: int = 0,
) -> tuple[float, float, float]:
    """Evaluate ray_color for a single ray.

    This is a Python-callable function for testing. The random stream must
    already be seeded.

    Args:
        origin: Ray origin.
        direction: Ray direction (need not be normalized, must be non-zero).
        depth: Maximum number of scatter events.
        stream: Index of the random stream to draw from.

    Returns:
        Tuple of (R, G, B) color values.
    """
    _trace_single_ray(*origin, *direction, depth, stream)
    color = _single_ray_color[None]
    return (float(color[0]), float(color[1]), float(color[2]))


def count_scatter_events(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = MAX_DEPTH,
    stream: int = 0,
) -> int:
    """Count the scatter evaluations made while tracing a single ray."""
    _trace_single_ray(*origin, *direction, depth, stream)
    return int(_single_ray_count[None])


def render_scanline(j: int, samples_per_pixel: int, max_depth: int) -> None:
    """Render one row of the image into the render target.

    Args:
        j: Row index, 0 at the bottom of the image.
        samples_per_pixel: Number of jittered samples per pixel.
        max_depth: Maximum number of scatter events per path.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
        ValueError: If j is outside the image.
    """
    _check_render_target_initialized()
    _check_camera_initialized()

    width, height = get_image_dimensions()
    if j < 0 or j >= height:
        raise ValueError(f"Row {j} is outside the image (height {height})")

    _render_row(j, width, height, samples_per_pixel, max_depth)


def get_accumulated_image_numpy() -> np.ndarray:
    """Get the per-pixel sample sums as a NumPy array.

    Returns:
        Array of shape (height, width, 3), float64, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    # Extract active region of the full buffer
    image = _color_buffer.to_numpy()[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3) for standard image format
    image = np.transpose(image, (1, 0, 2))

    # Flip vertically (row 0 of the buffer is the bottom of the image)
    image = np.flipud(image)

    return image.astype(np.float64)


def gamma_correct_and_quantize(accumulated: np.ndarray, samples_per_pixel: int) -> np.ndarray:
    """Turn per-pixel sample sums into 8-bit color values.

    Each channel is averaged over the samples, gamma corrected with gamma 2
    (square root), clamped to [0, 0.999] and scaled by 256, then truncated.

    Args:
        accumulated: Array of sample sums, any shape ending in 3 channels.
        samples_per_pixel: The number of samples summed per pixel.

    Returns:
        Array of the same shape with dtype uint8.

    Raises:
        ValueError: If samples_per_pixel is less than 1.
    """
    if samples_per_pixel < 1:
        raise ValueError(f"Samples per pixel = {samples_per_pixel} must be at least 1")

    averaged = np.asarray(accumulated, dtype=np.float64) / samples_per_pixel
    corrected = np.sqrt(np.maximum(averaged, 0.0))
    clamped = np.clip(corrected, 0.0, QUANTIZE_CLAMP_MAX)
    return (256.0 * clamped).astype(np.uint8)
