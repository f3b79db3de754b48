"""Unit tests for the pinhole camera.

Tests cover:
- Camera defaults and validation
- Deriving resolution from an aspect ratio
- Ray generation through the viewport corners and center
- The position-relative viewport vectors for a camera away from the origin
"""

import numpy as np
import pytest
import taichi as ti


def _ray_kernel():
    """Build a kernel generating one camera ray."""
    from pathtracer.camera.pinhole import CameraState, get_ray
    from pathtracer.core.vector import real, vec3

    origin = ti.Vector.field(3, dtype=real, shape=())
    direction = ti.Vector.field(3, dtype=real, shape=())

    @ti.kernel
    def test_kernel(position: vec3, focal: real, vw: real, vh: real, u: real, v: real):
        camera = CameraState(
            position=position, focal_length=focal, viewport_width=vw, viewport_height=vh
        )
        ray = get_ray(camera, u, v)
        origin[None] = ray.origin
        direction[None] = ray.direction

    def run(u, v, position=(0.0, 0.0, 0.0), focal=1.0, viewport=(16.0 / 9.0, 1.0)):
        test_kernel(vec3(*position), focal, viewport[0], viewport[1], u, v)
        return origin[None].to_numpy(), direction[None].to_numpy()

    return run


class TestCameraConfig:
    """Tests for the host-side Camera."""

    def test_defaults(self):
        from pathtracer.camera import Camera

        camera = Camera()
        assert camera.resolution == (800, 450)
        assert camera.viewport == pytest.approx((16.0 / 9.0, 1.0))
        assert camera.focal_length == 1.0
        assert camera.samples_per_pixel == 4
        assert camera.max_bounces == 4
        assert camera.position == (0.0, 0.0, 0.0)

    def test_with_aspect(self):
        """Test height is truncated from width / aspect."""
        from pathtracer.camera import Camera

        camera = Camera.with_aspect(80)
        assert (camera.width, camera.height) == (80, 45)
        assert camera.viewport == pytest.approx((16.0 / 9.0, 1.0))

        camera = Camera.with_aspect(100, aspect_ratio=3.0, viewport_height=2.0)
        assert (camera.width, camera.height) == (100, 33)
        assert camera.viewport == pytest.approx((6.0, 2.0))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"samples_per_pixel": 0},
            {"max_bounces": -1},
            {"focal_length": 0.0},
            {"viewport": (0.0, 1.0)},
            {"resolution": (0, 45)},
            {"position": (0.0, 0.0)},
        ],
    )
    def test_invalid_values(self, kwargs):
        from pathtracer.camera import Camera

        with pytest.raises(ValueError):
            Camera(**kwargs)

    def test_zero_bounces_allowed(self):
        from pathtracer.camera import Camera

        assert Camera(max_bounces=0).max_bounces == 0

    def test_dict_round_trip(self):
        from pathtracer.camera import Camera

        camera = Camera.with_aspect(64, samples_per_pixel=2, max_bounces=3, position=(1, 2, 3))
        assert Camera.from_dict(camera.to_dict()) == camera

    def test_from_empty_dict_uses_defaults(self):
        from pathtracer.camera import Camera

        assert Camera.from_dict({}) == Camera()


class TestGetRay:
    """Tests for ray generation."""

    def test_center_ray_looks_down_negative_z(self):
        run = _ray_kernel()

        origin, direction = run(0.5, 0.5)

        assert np.allclose(origin, 0.0)
        assert np.allclose(direction, [0.0, 0.0, -1.0])

    def test_corner_rays(self):
        """Test (0, 0) and (1, 1) reach the viewport corners."""
        run = _ray_kernel()
        half_w = 8.0 / 9.0

        _, lower_left = run(0.0, 0.0)
        _, upper_right = run(1.0, 1.0)

        assert np.allclose(lower_left, [-half_w, -0.5, -1.0])
        assert np.allclose(upper_right, [half_w, 0.5, -1.0])

    def test_focal_length_scales_depth(self):
        run = _ray_kernel()

        _, direction = run(0.5, 0.5, focal=2.5)

        assert np.allclose(direction, [0.0, 0.0, -2.5])

    def test_direction_not_normalized(self):
        run = _ray_kernel()

        _, direction = run(0.0, 1.0)

        assert np.linalg.norm(direction) > 1.0

    def test_offset_camera_keeps_position_relative_form(self):
        """Test the viewport vectors include the camera position.

        With position p, horizontal = p + RIGHT * w and vertical = p + UP * h,
        so lower_left = p - (p + RIGHT * w) / 2 - (p + UP * h) / 2 - FORWARD * f
        and the direction is lower_left + horizontal * u + vertical * v - p.
        """
        run = _ray_kernel()
        p = np.array([1.0, 2.0, 3.0])
        w, h, f = 2.0, 1.0, 1.0
        u, v = 0.25, 0.75

        origin, direction = run(u, v, position=tuple(p), focal=f, viewport=(w, h))

        horizontal = p + np.array([1.0, 0.0, 0.0]) * w
        vertical = p + np.array([0.0, 1.0, 0.0]) * h
        lower_left = p - horizontal / 2 - vertical / 2 - np.array([0.0, 0.0, 1.0]) * f
        expected = lower_left + horizontal * u + vertical * v - p

        assert np.allclose(origin, p)
        assert np.allclose(direction, expected)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
