"""Geometry module: the sphere primitive and its ray intersection."""

from .sphere import (
    NO_HIT,
    HitRecord,
    Sphere,
    hit_sphere,
    make_miss_record,
    make_sphere,
    validate_sphere,
)

__all__ = [
    "Sphere",
    "HitRecord",
    "NO_HIT",
    "hit_sphere",
    "make_sphere",
    "make_miss_record",
    "validate_sphere",
]
