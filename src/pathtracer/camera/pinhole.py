"""Pinhole camera model for perspective projection ray generation.

The camera sits at a position and looks down the -z axis (BACKWARD). The
image plane lies focal_length in front of it and spans viewport_width by
viewport_height world units.

The viewport vectors are kept position-relative, exactly as the camera was
first formulated:

    horizontal = position + RIGHT * viewport_width
    vertical = position + UP * viewport_height
    lower_left = position - horizontal / 2 - vertical / 2 - FORWARD * focal_length
    direction = lower_left + horizontal * u + vertical * v - position

For a camera away from the origin the position terms do not cancel, so these
must not be rewritten as pure direction vectors.

Two representations are provided:
- Camera: immutable host-side configuration (also owns sampling settings).
- CameraState: the Taichi dataclass mirror used to generate rays in kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.camera.pinhole import Camera, CameraState, get_ray
    >>> camera = Camera.with_aspect(80)  # 80x45, 16:9
    >>> camera.height
    45
"""

import math
from dataclasses import dataclass
from typing import Any

import taichi as ti

from pathtracer.core.ray import Ray, make_ray
from pathtracer.core.vector import FORWARD, RIGHT, UP, real, vec3

Point = tuple[float, float, float]

DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_WIDTH = 800


# =============================================================================
# Camera Configuration (Python-side)
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration for a pinhole camera and its sampling settings.

    Attributes:
        position: Camera position in world space (x, y, z).
        focal_length: Distance from the camera to the image plane.
        viewport: Image plane size in world units as (width, height).
        resolution: Output image size in pixels as (width, height).
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_bounces: Maximum number of surface interactions per path.

    Raises:
        ValueError: If any value is out of range.
    """

    position: Point = (0.0, 0.0, 0.0)
    focal_length: float = 1.0
    viewport: tuple[float, float] = (DEFAULT_ASPECT_RATIO, 1.0)
    resolution: tuple[int, int] = (DEFAULT_WIDTH, int(DEFAULT_WIDTH / DEFAULT_ASPECT_RATIO))
    samples_per_pixel: int = 4
    max_bounces: int = 4

    def __post_init__(self) -> None:
        try:
            position = tuple(float(c) for c in self.position)
            viewport = tuple(float(c) for c in self.viewport)
            resolution = tuple(int(c) for c in self.resolution)
            focal_length = float(self.focal_length)
            samples_per_pixel = int(self.samples_per_pixel)
            max_bounces = int(self.max_bounces)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid camera settings: {e}") from e

        if len(position) != 3 or not all(math.isfinite(c) for c in position):
            raise ValueError(f"position must be three finite numbers, got {self.position!r}")
        if len(viewport) != 2 or not all(math.isfinite(c) and c > 0.0 for c in viewport):
            raise ValueError(f"viewport must be two positive numbers, got {self.viewport!r}")
        if len(resolution) != 2 or not all(c > 0 for c in resolution):
            raise ValueError(f"resolution must be two positive integers, got {self.resolution!r}")

        if not math.isfinite(focal_length) or focal_length <= 0.0:
            raise ValueError(f"focal_length must be positive, got {self.focal_length}")
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be >= 1, got {self.samples_per_pixel}")
        if max_bounces < 0:
            raise ValueError(f"max_bounces must be >= 0, got {self.max_bounces}")

        object.__setattr__(self, "position", position)
        object.__setattr__(self, "viewport", viewport)
        object.__setattr__(self, "resolution", resolution)
        object.__setattr__(self, "focal_length", focal_length)
        object.__setattr__(self, "samples_per_pixel", samples_per_pixel)
        object.__setattr__(self, "max_bounces", max_bounces)

    @classmethod
    def with_aspect(
        cls,
        image_width: int = DEFAULT_WIDTH,
        aspect_ratio: float = DEFAULT_ASPECT_RATIO,
        viewport_height: float = 1.0,
        *,
        position: Point = (0.0, 0.0, 0.0),
        focal_length: float = 1.0,
        samples_per_pixel: int = 4,
        max_bounces: int = 4,
    ) -> "Camera":
        """Create a camera from an image width and aspect ratio.

        The image height is the width divided by the aspect ratio, truncated
        to an integer. The viewport width follows from the same ratio.

        Args:
            image_width: Output width in pixels.
            aspect_ratio: Width divided by height.
            viewport_height: Image plane height in world units.
            position: Camera position.
            focal_length: Distance to the image plane.
            samples_per_pixel: Samples per pixel.
            max_bounces: Maximum bounces per path.

        Returns:
            A validated Camera.

        Raises:
            ValueError: If aspect_ratio is not positive or the derived
                height is zero.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        image_height = int(image_width / aspect_ratio)
        return cls(
            position=position,
            focal_length=focal_length,
            viewport=(aspect_ratio * viewport_height, viewport_height),
            resolution=(image_width, image_height),
            samples_per_pixel=samples_per_pixel,
            max_bounces=max_bounces,
        )

    @property
    def width(self) -> int:
        """Image width in pixels."""
        return self.resolution[0]

    @property
    def height(self) -> int:
        """Image height in pixels."""
        return self.resolution[1]

    @property
    def aspect_ratio(self) -> float:
        """Image width divided by height."""
        return self.width / self.height

    def to_dict(self) -> dict[str, Any]:
        """Export the camera to a JSON-compatible dictionary."""
        return {
            "position": list(self.position),
            "focal_length": self.focal_length,
            "viewport": list(self.viewport),
            "resolution": list(self.resolution),
            "samples_per_pixel": self.samples_per_pixel,
            "max_bounces": self.max_bounces,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Camera":
        """Load a camera from a dictionary produced by to_dict().

        Missing keys fall back to the defaults.

        Raises:
            ValueError: If data is not a dictionary or a value is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f"camera must be an object, got {type(data).__name__}")
        defaults = cls()
        return cls(
            position=data.get("position", defaults.position),
            focal_length=data.get("focal_length", defaults.focal_length),
            viewport=data.get("viewport", defaults.viewport),
            resolution=data.get("resolution", defaults.resolution),
            samples_per_pixel=data.get("samples_per_pixel", defaults.samples_per_pixel),
            max_bounces=data.get("max_bounces", defaults.max_bounces),
        )


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.dataclass
class CameraState:
    """Device-side camera geometry.

    Derived viewport vectors are not stored; they are recomputed from these
    fields on every ray request.

    Attributes:
        position: Camera position.
        focal_length: Distance to the image plane.
        viewport_width: Image plane width in world units.
        viewport_height: Image plane height in world units.
    """

    position: vec3
    focal_length: real
    viewport_width: real
    viewport_height: real


@ti.func
def horizontal(camera: CameraState) -> vec3:
    """Position-relative horizontal viewport vector."""
    return camera.position + RIGHT * camera.viewport_width


@ti.func
def vertical(camera: CameraState) -> vec3:
    """Position-relative vertical viewport vector."""
    return camera.position + UP * camera.viewport_height


@ti.func
def lower_left_corner(camera: CameraState) -> vec3:
    """Lower-left corner of the viewport."""
    return (
        camera.position
        - horizontal(camera) / 2.0
        - vertical(camera) / 2.0
        - FORWARD * camera.focal_length
    )


@ti.func
def get_ray(camera: CameraState, u: real, v: real) -> Ray:
    """Generate a ray through normalized image-plane coordinates (u, v).

    Coordinates are normalized so that u = 0 is the left edge, u = 1 the
    right edge, v = 0 the bottom edge and v = 1 the top edge.

    Args:
        camera: The camera geometry.
        u: Horizontal coordinate.
        v: Vertical coordinate.

    Returns:
        A Ray from the camera position. The direction is not normalized.
    """
    direction = (
        lower_left_corner(camera) + horizontal(camera) * u + vertical(camera) * v - camera.position
    )
    return make_ray(camera.position, direction)
