"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere primitive, hit records and ray-sphere intersection

All intersection routines are Taichi functions (@ti.func). They follow the
pattern:
    record = hit_sphere(ray, sphere, t_min, t_max)
and report a miss through record.hit == 0.
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_miss_record

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_miss_record",
]
