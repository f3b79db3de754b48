"""Three-component vector type and geometric utilities.

Vectors are used interchangeably as points, directions and RGB colours.
All functions are Taichi functions and must be called from within kernels.
Arithmetic (add, subtract, scalar multiply and divide, and their in-place
forms) is provided natively by the Taichi vector type.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.vector import vec3, dot, UP
    >>> @ti.kernel
    ... def height(p: vec3) -> ti.f64:
    ...     return dot(p, UP)
"""

import taichi as ti

# Real number type used for all geometry and radiance
real = ti.f64

# 3D vector type
vec3 = ti.types.vector(3, real)

# =============================================================================
# Named Constants
# =============================================================================

ZERO = vec3(0.0, 0.0, 0.0)
ONES = vec3(1.0, 1.0, 1.0)
UP = vec3(0.0, 1.0, 0.0)
DOWN = vec3(0.0, -1.0, 0.0)
LEFT = vec3(-1.0, 0.0, 0.0)
RIGHT = vec3(1.0, 0.0, 0.0)
FORWARD = vec3(0.0, 0.0, 1.0)
BACKWARD = vec3(0.0, 0.0, -1.0)


# =============================================================================
# Vector Operations
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def hadamard(a: vec3, b: vec3) -> vec3:
    """Componentwise product, used to filter colours by reflectance."""
    return vec3(a.x * b.x, a.y * b.y, a.z * b.z)


@ti.func
def length_squared(v: vec3) -> real:
    """Compute the squared length of a vector."""
    return dot(v, v)


@ti.func
def length(v: vec3) -> real:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The input must have non-zero length. Callers guarantee this by
    construction (sphere normals, Gaussian samples); a zero vector yields
    NaN components.

    Args:
        v: The input vector.

    Returns:
        v / length(v).
    """
    return v / length(v)
