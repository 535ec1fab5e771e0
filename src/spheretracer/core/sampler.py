"""Seeded random streams and Monte Carlo sampling helpers.

Every random draw in the renderer goes through an explicit stream handle: an
index into a table of 32-bit PCG states. Streams are seeded from a single
integer seed, so a render is reproducible whenever the seed is, and
independent pixels never share state.

The generator is a 32-bit linear congruential step whose output goes through
the PCG permutation hash (the same hash used for white noise in GPU shaders).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretracer.core.sampler import seed_random_streams, random_f32
    >>> seed_random_streams(1234)
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     return random_f32(0)
"""

import taichi as ti

from spheretracer.core.ray import length_squared, normalize, vec3

# One stream per pixel of the largest supported image
MAX_RANDOM_STREAMS = 2048 * 2048

# LCG step (multiplier is 1 mod 4 and increment is odd, so the period is 2^32)
_LCG_MULTIPLIER = 747796405
_LCG_INCREMENT = 1013904223

# PCG output permutation
_PCG_MULTIPLIER = 277803737

# 24 bits of mantissa make every output exactly representable in f32
_FLOAT_SCALE = 1.0 / 16777216.0

# Attempts before rejection sampling gives up (probability ~0.48^100)
_MAX_REJECTION_ATTEMPTS = 100

_rng_states = ti.field(dtype=ti.u32, shape=MAX_RANDOM_STREAMS)
_num_seeded_streams = ti.field(dtype=ti.i32, shape=())


@ti.func
def _lcg_step(state: ti.u32) -> ti.u32:
    return state * ti.u32(_LCG_MULTIPLIER) + ti.u32(_LCG_INCREMENT)


@ti.func
def _permute(state: ti.u32) -> ti.u32:
    word = ((state >> ((state >> ti.u32(28)) + ti.u32(4))) ^ state) * ti.u32(_PCG_MULTIPLIER)
    return (word >> ti.u32(22)) ^ word


@ti.func
def pcg_hash(value: ti.u32) -> ti.u32:
    """Scramble a 32-bit value with the PCG output permutation.

    Args:
        value: Any 32-bit unsigned integer.

    Returns:
        A well-mixed 32-bit unsigned integer.
    """
    return _permute(_lcg_step(value))


@ti.kernel
def _seed_streams(seed: ti.u32, count: ti.i32):
    scrambled_seed = pcg_hash(seed)
    for k in range(count):
        _rng_states[k] = pcg_hash(ti.cast(k, ti.u32) ^ scrambled_seed)


def seed_random_streams(seed: int, count: int = MAX_RANDOM_STREAMS) -> None:
    """Seed the first count random streams from a single integer seed.

    Args:
        seed: The render seed. Only the low 32 bits are used.
        count: How many streams to seed (one per pixel is enough for a render).

    Raises:
        ValueError: If count is not in [1, MAX_RANDOM_STREAMS].
    """
    if count < 1 or count > MAX_RANDOM_STREAMS:
        raise ValueError(
            f"Random stream count {count} is outside [1, {MAX_RANDOM_STREAMS}]"
        )
    _seed_streams(seed & 0xFFFFFFFF, count)
    _num_seeded_streams[None] = count


def get_seeded_stream_count() -> int:
    """Get the number of streams seeded by the last seed_random_streams() call."""
    return int(_num_seeded_streams[None])


@ti.func
def random_u32(rng: ti.i32) -> ti.u32:
    """Advance a stream and return its next 32-bit output.

    Args:
        rng: The random stream handle.
    """
    state = _lcg_step(_rng_states[rng])
    _rng_states[rng] = state
    return _permute(state)


@ti.func
def random_f32(rng: ti.i32) -> ti.f32:
    """Draw a uniform float in [0, 1) from a stream.

    Args:
        rng: The random stream handle.

    Returns:
        A uniformly distributed value in [0, 1).
    """
    return ti.cast(random_u32(rng) >> ti.u32(8), ti.f32) * _FLOAT_SCALE


@ti.func
def random_range(rng: ti.i32, low: ti.f32, high: ti.f32) -> ti.f32:
    """Draw a uniform float in [low, high) from a stream."""
    return low + (high - low) * random_f32(rng)


@ti.func
def random_in_unit_sphere(rng: ti.i32) -> vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling on the enclosing cube.

    Args:
        rng: The random stream handle.

    Returns:
        A random point with length < 1.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(_MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = vec3(
                random_range(rng, -1.0, 1.0),
                random_range(rng, -1.0, 1.0),
                random_range(rng, -1.0, 1.0),
            )
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p


@ti.func
def random_unit_vector(rng: ti.i32) -> vec3:
    """Generate a random point on the unit sphere.

    Normalizes a rejection-sampled point from inside the unit sphere. Points
    too close to the center to normalize safely are redrawn.

    Args:
        rng: The random stream handle.

    Returns:
        A random unit vector.
    """
    p = vec3(0.0, 0.0, 1.0)
    found = False
    for _ in range(_MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = random_in_unit_sphere(rng)
            if length_squared(candidate) > 1e-12:
                p = normalize(candidate)
                found = True
    return p
