"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray.origin + t * ray.direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*half_b*t + c = 0

where:
    a = dot(direction, direction)
    half_b = dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The ray direction need not be normalized; t is measured in multiples of the
direction's length.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.vector import vec3
    >>> from pathtracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0.0, 0.0, -3.0), radius=1.0, material_id=0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import math
from dataclasses import dataclass
from typing import Any

import taichi as ti

from pathtracer.core.ray import Ray, ray_at
from pathtracer.core.vector import dot, real, vec3
from pathtracer.geometry.material import MaterialInfo

Point = tuple[float, float, float]


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive).
        material_id: Index into the scene's material table.
    """

    center: vec3
    radius: real
    material_id: ti.i32


@ti.dataclass
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: Whether the ray intersected the primitive (1 if hit, 0 if miss).
        t: Parametric distance along the ray. Only valid if hit == 1.
        point: World-space intersection point. Only valid if hit == 1.
        normal: Unit surface normal, re-oriented to face against the ray.
            Only valid if hit == 1.
        front_face: 1 if the ray struck the outside of the surface, 0 if it
            struck from the inside. Only valid if hit == 1.
        material_id: Material of the struck surface, -1 on a miss.
    """

    hit: ti.i32
    t: real
    point: vec3
    normal: vec3
    front_face: ti.i32
    material_id: ti.i32


@ti.func
def miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material_id=-1,
    )


@ti.func
def face_normal(ray: Ray, outward_normal: vec3):
    """Orient a normal against the incoming ray direction.

    Args:
        ray: The incoming ray.
        outward_normal: Unit normal pointing out of the surface.

    Returns:
        Tuple of (normal, front_face) where normal opposes the ray direction
        and front_face is 1 if outward_normal already did.
    """
    front_face = 1
    normal = outward_normal
    if dot(ray.direction, outward_normal) >= 0.0:
        front_face = 0
        normal = -outward_normal
    return normal, front_face


@ti.func
def hit_sphere(sphere: Sphere, ray: Ray, t_min: real, t_max: real) -> HitRecord:
    """Find the nearest intersection of a ray with a sphere.

    The smaller root is tried first; if it lies outside [t_min, t_max] the
    larger root is tried. Both bounds are inclusive. A ray with a zero
    direction never hits.

    Args:
        sphere: The sphere to test.
        ray: The ray to test.
        t_min: Minimum accepted parametric distance.
        t_max: Maximum accepted parametric distance.

    Returns:
        A HitRecord. Check the hit field to determine if an intersection
        occurred.
    """
    oc = ray.origin - sphere.center

    a = dot(ray.direction, ray.direction)
    half_b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = half_b * half_b - a * c

    result = miss_record()

    if a > 0.0 and discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        # Nearest root first (entry point before exit point)
        root = (-half_b - sqrt_d) / a
        valid = (root >= t_min) and (root <= t_max)

        if not valid:
            root = (-half_b + sqrt_d) / a
            valid = (root >= t_min) and (root <= t_max)

        if valid:
            point = ray_at(ray, root)
            outward_normal = (point - sphere.center) / sphere.radius
            normal, front_face = face_normal(ray, outward_normal)
            result = HitRecord(
                hit=1,
                t=root,
                point=point,
                normal=normal,
                front_face=front_face,
                material_id=sphere.material_id,
            )

    return result


@ti.func
def make_sphere(center: vec3, radius: real, material_id: ti.i32) -> Sphere:
    """Create a sphere from center, radius and material index."""
    return Sphere(center=center, radius=radius, material_id=material_id)


@dataclass(frozen=True)
class SphereInfo:
    """Host-side sphere description used to build scenes.

    Attributes:
        center: The center point as (x, y, z).
        radius: The radius. Must be positive.
        material: The surface material.

    Raises:
        ValueError: If the center is malformed or the radius is not positive.
    """

    center: Point
    radius: float
    material: MaterialInfo

    def __post_init__(self) -> None:
        try:
            x, y, z = (float(c) for c in self.center)
        except (TypeError, ValueError) as e:
            raise ValueError(f"center must be three numbers, got {self.center!r}") from e
        try:
            radius = float(self.radius)
        except (TypeError, ValueError) as e:
            raise ValueError(f"radius must be a number, got {self.radius!r}") from e
        if not math.isfinite(radius) or radius <= 0.0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", (x, y, z))
        object.__setattr__(self, "radius", radius)

    def to_dict(self) -> dict[str, Any]:
        """Export the sphere to a JSON-compatible dictionary."""
        return {
            "type": "sphere",
            "center": list(self.center),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SphereInfo":
        """Load a sphere from a dictionary produced by to_dict().

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        try:
            center = data["center"]
            radius = data["radius"]
        except KeyError as e:
            raise ValueError(f"sphere is missing required key {e}") from e
        material = MaterialInfo.from_dict(data.get("material", {}))
        return cls(center=center, radius=radius, material=material)
