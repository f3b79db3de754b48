"""Random number streams and Monte Carlo sampling utilities.

Randomness is never drawn from a global generator. Every sampling function
takes the current stream state and returns the sampled value together with
the advanced state:

    value, state = uniform(state)

Each stream is a 32-bit xorshift generator held in an int64 so that all
shifts operate on non-negative values. A stream state must never be zero.

Streams are seeded on the host from an injected ``numpy.random.Generator``
through ``RandomStreams``, one independent stream per pixel. Because no two
pixels share a stream, results do not depend on how Taichi schedules the
parallel pixel loop.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.sampler import RandomStreams
    >>> streams = RandomStreams((45, 80))
    >>> streams.seed(np.random.default_rng(7))
"""

import math

import numpy as np
import taichi as ti

from pathtracer.core.vector import dot, normalize, real, vec3

# Stream state type (low 32 bits are used)
state_t = ti.i64

# 2^-31, maps the low 31 bits of a state onto [0, 1)
_INV_2_31 = 1.0 / 2147483648.0

_TWO_PI = 2.0 * math.pi


# =============================================================================
# Stream Primitives
# =============================================================================


@ti.func
def next_state(state: state_t) -> state_t:
    """Advance a xorshift32 stream by one step.

    Args:
        state: Current state in [1, 2^32).

    Returns:
        The next state, also in [1, 2^32).
    """
    mask = (ti.cast(1, state_t) << 32) - 1
    x = state
    x = (x ^ (x << 13)) & mask
    x = x ^ (x >> 17)
    x = (x ^ (x << 5)) & mask
    return x


@ti.func
def uniform(state: state_t):
    """Draw a uniform real in the open interval (0, 1).

    Never returns exactly 0, so the result is safe to pass to log().

    Args:
        state: Current stream state.

    Returns:
        Tuple of (value, next_state).
    """
    s = next_state(state)
    value = (ti.cast(s & 0x7FFFFFFF, real) + 0.5) * _INV_2_31
    return value, s


@ti.func
def random_range(lo: real, hi: real, state: state_t):
    """Draw a vector with each component independently uniform in [lo, hi).

    Returns:
        Tuple of (vector, next_state).
    """
    s = state
    x, s = uniform(s)
    y, s = uniform(s)
    z, s = uniform(s)
    span = hi - lo
    return vec3(lo + x * span, lo + y * span, lo + z * span), s


@ti.func
def random_unit(state: state_t):
    """Draw a vector uniformly from the unit cube [0, 1)^3."""
    return random_range(0.0, 1.0, state)


@ti.func
def random_normal(state: state_t):
    """Draw a standard normal variate using the Box-Muller transform.

    The radius term uses the natural logarithm, giving unit variance.

    Returns:
        Tuple of (value, next_state).
    """
    s = state
    u_angle, s = uniform(s)
    u_radius, s = uniform(s)
    theta = _TWO_PI * u_angle
    rho = ti.sqrt(-2.0 * ti.log(u_radius))
    return rho * ti.cos(theta), s


@ti.func
def random_in_unit_sphere(state: state_t):
    """Draw a direction uniformly distributed on the unit sphere.

    Normalises a vector of three independent Gaussian variates, which is
    rotationally symmetric and therefore uniform over directions.

    Returns:
        Tuple of (unit_vector, next_state).
    """
    s = state
    x, s = random_normal(s)
    y, s = random_normal(s)
    z, s = random_normal(s)
    return normalize(vec3(x, y, z)), s


@ti.func
def random_on_hemisphere(normal: vec3, state: state_t):
    """Draw a unit direction in the hemisphere around a normal.

    A direction on the sphere is flipped when it points away from the
    normal, so dot(result, normal) >= 0 always holds.

    Args:
        normal: The hemisphere axis (need not be unit length).
        state: Current stream state.

    Returns:
        Tuple of (unit_vector, next_state).
    """
    direction, s = random_in_unit_sphere(state)
    result = direction
    if dot(direction, normal) < 0.0:
        result = -direction
    return result, s


# =============================================================================
# Host-Side Stream Storage
# =============================================================================


@ti.data_oriented
class RandomStreams:
    """A grid of independent random streams, one per work item.

    Attributes:
        shape: Shape of the stream grid, e.g. (height, width).
        state: Taichi field holding the current state of every stream.
    """

    def __init__(self, shape: tuple[int, ...]) -> None:
        """Allocate stream storage.

        Streams start unseeded (all zero) and must be seeded before use.

        Args:
            shape: Shape of the stream grid.
        """
        self.shape = tuple(shape)
        self.state = ti.field(dtype=state_t, shape=self.shape)

    def seed(self, rng: np.random.Generator) -> None:
        """Seed every stream from the injected generator.

        Args:
            rng: Host-side random source. Only its draws are used; it is
                never reseeded.
        """
        seeds = rng.integers(1, 2**32, size=self.shape, dtype=np.int64)
        self.state.from_numpy(seeds)

    def __repr__(self) -> str:
        return f"RandomStreams(shape={self.shape})"
