"""Conversion of accumulated radiance to 8-bit display colour.

The conversion order is fixed: scale by the sample count, apply square-root
gamma, clamp, then quantise. Swapping the clamp and gamma steps changes how
highlights saturate.
"""

import sys

import taichi as ti
import taichi.math as tm

from pathtracer.core.vector import ZERO, real, vec3

# Largest channel value strictly below 1.0, so that 256 * value floors to 255
MAX_CHANNEL = 1.0 - sys.float_info.epsilon

# 8-bit RGB triple
rgb8 = ti.types.vector(3, ti.u8)


@ti.func
def to_colour(radiance_sum: vec3, samples_per_pixel: ti.i32) -> rgb8:
    """Convert an accumulated radiance sum into an 8-bit RGB triple.

    Args:
        radiance_sum: Sum of radiance over all samples of a pixel.
        samples_per_pixel: Number of samples in the sum (at least 1).

    Returns:
        The quantised colour, each channel in [0, 255].
    """
    scale = 1.0 / ti.cast(samples_per_pixel, real)
    # Negative radiance maps to black instead of NaN
    linear = tm.max(radiance_sum * scale, ZERO)
    corrected = ti.sqrt(linear)
    clamped = tm.clamp(corrected, 0.0, MAX_CHANNEL)
    return quantise(clamped)


@ti.func
def quantise(channels: vec3) -> rgb8:
    """Map channels in [0, 1] to bytes by flooring 256 * value.

    The result is capped at 255, so a channel of exactly 1.0 (which
    MAX_CHANNEL rounds to under single precision) stays white instead of
    wrapping to 0.
    """
    return ti.cast(ti.min(ti.floor(channels * 256.0), 255.0), ti.u8)
