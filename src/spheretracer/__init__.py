"""Taichi-based CPU path tracer for scenes made of spheres.

This package renders spheres with four material kinds (Lambertian, metal,
fuzzy metal and dielectric) under a sky gradient, using Monte Carlo path
tracing with per-pixel jittered sampling and gamma-corrected 8-bit output.

Subpackages:
    core: Rays, random streams, the integrator and the scanline renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Material variant and scattering models
    scene: Sphere storage, scene building and presets
    camera: Pinhole camera with ray generation
    preview: PPM and PNG image export

Modules:
    config: RenderSettings
    cli: Command-line entry point
"""

__version__ = "0.1.0"
