"""Path tracing integrator for Monte Carlo light transport.

Each primary ray is walked through the scene for at most max_bounces surface
interactions. Two quantities are carried along the path:

- ray_colour: the throughput, starting at all-ones and filtered by the base
  colour of every surface struck.
- incoming_light: the radiance collected so far, starting at zero. Each
  emissive surface struck adds its emitted light weighted by the current
  throughput.

A path that escapes the scene terminates immediately and gains nothing from
the background.

Pixels are rendered in bands of rows. Each pixel owns an independent random
stream, so the image is byte-identical for the same seed no matter how the
parallel pixel loop is scheduled.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.integrator import PathTracer
    >>> from pathtracer.scene.presets import single_sphere_scene
    >>>
    >>> tracer = PathTracer(single_sphere_scene(80, 45))
    >>> pixels = tracer.render(np.random.default_rng(7))
    >>> pixels.shape
    (45, 80, 3)
"""

import logging
from collections.abc import Callable

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from pathtracer.camera.pinhole import get_ray
from pathtracer.core.colour import to_colour
from pathtracer.core.ray import Ray, make_ray
from pathtracer.core.sampler import RandomStreams, random_on_hemisphere, state_t, uniform
from pathtracer.core.vector import hadamard, real, vec3
from pathtracer.geometry.material import emitted_light
from pathtracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Progress callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Cancellation check, polled between row bands
CancelCheck = Callable[[], bool]

# =============================================================================
# Rendering Constants
# =============================================================================

# Interval scanned for every bounce
T_MIN = 0.0
T_MAX = tm.inf


class RenderCancelled(RuntimeError):
    """Raised when a render is cancelled between row bands.

    Attributes:
        rows_done: Number of rows finished before cancellation.
        total_rows: Number of rows in the image.
    """

    def __init__(self, rows_done: int, total_rows: int) -> None:
        super().__init__(f"Render cancelled after {rows_done}/{total_rows} rows")
        self.rows_done = rows_done
        self.total_rows = total_rows


# =============================================================================
# Path Tracing Core
# =============================================================================


@ti.func
def trace_path(scene: ti.template(), ray: Ray, max_bounces: ti.i32, state: state_t):
    """Trace one path and return the light it collects.

    Args:
        scene: The Scene to trace against.
        ray: The primary ray.
        max_bounces: Maximum number of surface interactions.
        state: Random stream state.

    Returns:
        Tuple of (incoming_light, next_state).
    """
    incoming_light = vec3(0.0, 0.0, 0.0)
    ray_colour = vec3(1.0, 1.0, 1.0)
    current = ray
    s = state

    # Active flag for path continuation (no break inside ti.func loops)
    active = 1

    for _ in range(max_bounces):
        if active == 1:
            rec = scene.nearest_hit(current, T_MIN, T_MAX)

            if rec.hit == 0:
                active = 0
            else:
                bounce, s = random_on_hemisphere(rec.normal, s)
                current = make_ray(rec.point, rec.normal + bounce)

                material = scene.material(rec.material_id)
                incoming_light += hadamard(emitted_light(material), ray_colour)
                ray_colour = hadamard(ray_colour, material.base_colour)

    return incoming_light, s


@ti.func
def _drop_non_finite(sample: vec3) -> vec3:
    """Replace NaN or infinite channels with zero."""
    result = sample
    for c in ti.static(range(3)):
        if tm.isnan(result[c]) or tm.isinf(result[c]):
            result[c] = 0.0
    return result


# =============================================================================
# Renderer
# =============================================================================


@ti.data_oriented
class PathTracer:
    """Renders a Scene into an 8-bit RGB image.

    The color buffer holds the per-pixel sum of sample radiance. It is
    converted to display colour once, after all samples are taken.

    Attributes:
        scene: The scene being rendered.
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Samples averaged per pixel.
        max_bounces: Maximum bounces per path.
    """

    def __init__(self, scene: Scene) -> None:
        """Allocate the render target for a scene.

        Args:
            scene: The scene to render. Its camera fixes the resolution and
                sampling settings.
        """
        self.scene = scene
        camera = scene.camera
        self.width = camera.width
        self.height = camera.height
        self.samples_per_pixel = camera.samples_per_pixel
        self.max_bounces = camera.max_bounces

        self._accumulator = ti.Vector.field(3, dtype=real, shape=(self.height, self.width))
        self._pixels = ti.Vector.field(3, dtype=ti.u8, shape=(self.height, self.width))
        self._streams = RandomStreams((self.height, self.width))
        self._probe = RandomStreams((1,))
        self._probe_light = ti.Vector.field(3, dtype=real, shape=())
        self._rendered = False

    # =========================================================================
    # Kernels
    # =========================================================================

    @ti.kernel
    def _render_rows(self, y0: ti.i32, y1: ti.i32, samples_per_pixel: ti.i32, max_bounces: ti.i32):
        """Accumulate all samples for the rows in [y0, y1)."""
        for y, x in ti.ndrange((y0, y1), self.width):
            camera = self.scene.camera_state()
            s = self._streams.state[y, x]
            total = vec3(0.0, 0.0, 0.0)

            for _ in range(samples_per_pixel):
                jitter_u, s = uniform(s)
                jitter_v, s = uniform(s)

                # Image rows run top to bottom, the viewport's v axis bottom to top
                u = (ti.cast(x, real) + jitter_u) / ti.cast(self.width, real)
                v = (ti.cast(self.height - y, real) + jitter_v) / ti.cast(self.height, real)

                sample, s = trace_path(self.scene, get_ray(camera, u, v), max_bounces, s)
                total += _drop_non_finite(sample)

            self._accumulator[y, x] += total
            self._streams.state[y, x] = s

    @ti.kernel
    def _finalize(self, samples_per_pixel: ti.i32):
        """Convert accumulated radiance into 8-bit colour."""
        for y, x in self._pixels:
            self._pixels[y, x] = to_colour(self._accumulator[y, x], samples_per_pixel)

    @ti.kernel
    def _cast_single(self, origin: vec3, direction: vec3, max_bounces: ti.i32):
        """Trace one ray using the probe stream."""
        # Single-iteration outer loop keeps the bounce loop serial
        for i in range(1):
            light, s = trace_path(
                self.scene, make_ray(origin, direction), max_bounces, self._probe.state[i]
            )
            self._probe.state[i] = s
            self._probe_light[None] = light

    # =========================================================================
    # Public API
    # =========================================================================

    def render(
        self,
        rng: np.random.Generator | None = None,
        *,
        rows_per_batch: int = 1,
        callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the scene.

        Args:
            rng: Random source used to seed the per-pixel streams. A fresh
                unseeded generator is used when omitted.
            rows_per_batch: Number of rows rendered between progress updates
                and cancellation checks.
            callback: Optional callback called after each band with
                (rows_done, total_rows).
            should_cancel: Optional callable polled before each band. When it
                returns True the render stops.

        Returns:
            Array of shape (height, width, 3) with dtype uint8, row-major with
            the origin at the top-left.

        Raises:
            ValueError: If rows_per_batch is less than 1.
            RenderCancelled: If should_cancel() returned True.
        """
        if rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be >= 1, got {rows_per_batch}")
        if rng is None:
            rng = np.random.default_rng()

        self._rendered = False
        self._accumulator.fill(0.0)
        self._streams.seed(rng)

        logger.info(
            "Rendering %dx%d, %d spp, %d bounces",
            self.width,
            self.height,
            self.samples_per_pixel,
            self.max_bounces,
        )

        for y0 in range(0, self.height, rows_per_batch):
            if should_cancel is not None and should_cancel():
                logger.info("Render cancelled at row %d of %d", y0, self.height)
                raise RenderCancelled(y0, self.height)

            y1 = min(y0 + rows_per_batch, self.height)
            self._render_rows(y0, y1, self.samples_per_pixel, self.max_bounces)
            logger.debug("Rendered rows %d-%d", y0, y1 - 1)

            if callback is not None:
                callback(y1, self.height)

        self._finalize(self.samples_per_pixel)
        self._rendered = True
        return self._pixels.to_numpy()

    def radiance_image(self) -> npt.NDArray[np.float64]:
        """Get the linear per-pixel mean radiance of the last render.

        Returns:
            Array of shape (height, width, 3) with dtype float64.

        Raises:
            RuntimeError: If render() has not completed.
        """
        if not self._rendered:
            raise RuntimeError("No completed render. Call render() first.")
        return self._accumulator.to_numpy() / self.samples_per_pixel

    def cast_ray(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
        rng: np.random.Generator | None = None,
        max_bounces: int | None = None,
    ) -> tuple[float, float, float]:
        """Trace a single ray from Python.

        Useful for testing and debugging individual paths.

        Args:
            origin: Ray origin.
            direction: Ray direction (need not be unit length).
            rng: Random source for the bounce directions.
            max_bounces: Bounce limit. Defaults to the camera's.

        Returns:
            The incoming light (R, G, B) collected by the path.
        """
        if rng is None:
            rng = np.random.default_rng()
        if max_bounces is None:
            max_bounces = self.max_bounces

        self._probe.seed(rng)
        self._cast_single(vec3(*origin), vec3(*direction), max_bounces)
        light = self._probe_light[None]
        return (float(light[0]), float(light[1]), float(light[2]))

    def __repr__(self) -> str:
        return (
            f"PathTracer(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self.samples_per_pixel}, max_bounces={self.max_bounces})"
        )
