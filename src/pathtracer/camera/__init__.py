"""Camera module for view and ray generation.

Components:
    pinhole: Pinhole camera configuration and ray generation

Ray generation uses normalized image-plane coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import (
    Camera,
    CameraState,
    get_ray,
    horizontal,
    lower_left_corner,
    vertical,
)

__all__ = [
    "Camera",
    "CameraState",
    "get_ray",
    "horizontal",
    "vertical",
    "lower_left_corner",
]
