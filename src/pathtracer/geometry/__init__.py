"""Geometry module for materials and shape primitives.

Components:
    material: Diffuse/emissive material (host description and device record)
    sphere: Sphere primitive, hit records and ray-sphere intersection
    renderable: Primitive kind tags and intersection dispatch

Intersection is a linear scan over all primitives; there is no acceleration
structure.
"""

from .material import Material, MaterialInfo, emitted_light
from .renderable import PrimitiveKind, hit_renderable
from .sphere import (
    HitRecord,
    Sphere,
    SphereInfo,
    face_normal,
    hit_sphere,
    make_sphere,
    miss_record,
)

__all__ = [
    "Material",
    "MaterialInfo",
    "emitted_light",
    "PrimitiveKind",
    "hit_renderable",
    "HitRecord",
    "Sphere",
    "SphereInfo",
    "face_normal",
    "hit_sphere",
    "make_sphere",
    "miss_record",
]
