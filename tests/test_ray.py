"""Unit tests for the Ray dataclass."""

import pytest
import taichi as ti


class TestRay:
    """Tests for ray construction and point evaluation."""

    def test_make_ray(self):
        """Test make_ray stores origin and direction unchanged."""
        from pathtracer.core.ray import make_ray
        from pathtracer.core.vector import real, vec3

        origin = ti.Vector.field(3, dtype=real, shape=())
        direction = ti.Vector.field(3, dtype=real, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -5.0))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        assert origin[None].to_numpy().tolist() == [1.0, 2.0, 3.0]
        # Direction is not normalized
        assert direction[None].to_numpy().tolist() == [0.0, 0.0, -5.0]

    def test_ray_at(self):
        """Test ray_at(t) == origin + direction * t."""
        from pathtracer.core.ray import Ray, ray_at
        from pathtracer.core.vector import real, vec3

        @ti.kernel
        def point_at(t: real) -> vec3:
            ray = Ray(origin=vec3(1.0, 0.0, 0.0), direction=vec3(0.0, 2.0, -2.0))
            return ray_at(ray, t)

        p = point_at(1.5)
        assert [p[0], p[1], p[2]] == pytest.approx([1.0, 3.0, -3.0])

        p = point_at(0.0)
        assert [p[0], p[1], p[2]] == pytest.approx([1.0, 0.0, 0.0])

    def test_ray_at_negative_t(self):
        """Test that negative t is evaluated without validation."""
        from pathtracer.core.ray import Ray, ray_at
        from pathtracer.core.vector import real, vec3

        @ti.kernel
        def point_at(t: real) -> vec3:
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 1.0))
            return ray_at(ray, t)

        p = point_at(-2.0)
        assert p[2] == pytest.approx(-2.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
