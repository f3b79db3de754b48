"""Renderable capability as a closed set of primitive kinds.

Every primitive kind answers the same question: given a ray and an interval
[t_min, t_max], is there an intersection and where. The scene stores a kind
tag per object and dispatches through hit_renderable().
"""

from enum import IntEnum

import taichi as ti

from pathtracer.core.ray import Ray
from pathtracer.core.vector import real
from pathtracer.geometry.sphere import HitRecord, Sphere, hit_sphere, miss_record


class PrimitiveKind(IntEnum):
    """Enumeration of supported primitive kinds."""

    SPHERE = 0


@ti.func
def hit_renderable(
    kind: ti.i32,
    sphere: Sphere,
    ray: Ray,
    t_min: real,
    t_max: real,
) -> HitRecord:
    """Dispatch an intersection test on the primitive kind.

    Args:
        kind: The PrimitiveKind of the object.
        sphere: Sphere geometry (used when kind is SPHERE).
        ray: The ray to test.
        t_min: Minimum accepted parametric distance.
        t_max: Maximum accepted parametric distance.

    Returns:
        The HitRecord from the kind-specific test, or a miss for an unknown
        kind.
    """
    result = miss_record()
    if kind == int(PrimitiveKind.SPHERE):
        result = hit_sphere(sphere, ray, t_min, t_max)
    return result
