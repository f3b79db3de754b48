"""Core rendering module.

Components:
    vector: 3D vector type, named constants and geometric operations
    sampler: Explicitly threaded random streams and sampling helpers
    ray: Ray data structure
    colour: Radiance to 8-bit colour conversion
    integrator: Path tracing loop and the PathTracer renderer
"""

from .colour import MAX_CHANNEL, quantise, rgb8, to_colour
from .ray import Ray, make_ray, ray_at
from .sampler import (
    RandomStreams,
    next_state,
    random_in_unit_sphere,
    random_normal,
    random_on_hemisphere,
    random_range,
    random_unit,
    uniform,
)
from .vector import (
    BACKWARD,
    DOWN,
    FORWARD,
    LEFT,
    ONES,
    RIGHT,
    UP,
    ZERO,
    cross,
    dot,
    hadamard,
    length,
    length_squared,
    normalize,
    real,
    vec3,
)

# Note: integrator is NOT imported here to avoid circular imports with scene.
# Import directly from pathtracer.core.integrator when needed.

__all__ = [
    "real",
    "vec3",
    "ZERO",
    "ONES",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "FORWARD",
    "BACKWARD",
    "dot",
    "cross",
    "hadamard",
    "length",
    "length_squared",
    "normalize",
    "Ray",
    "ray_at",
    "make_ray",
    "RandomStreams",
    "next_state",
    "uniform",
    "random_range",
    "random_unit",
    "random_normal",
    "random_in_unit_sphere",
    "random_on_hemisphere",
    "MAX_CHANNEL",
    "quantise",
    "rgb8",
    "to_colour",
]
