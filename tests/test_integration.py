"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene description through final
image output, including the example render script.

Tests are designed to be fast (low resolution, few samples) while still
exercising the full pipeline.
"""

import importlib.util
from pathlib import Path

import numpy as np
import pytest

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


def _load_render_script():
    spec = importlib.util.spec_from_file_location(
        "render_scene", EXAMPLES_DIR / "render_scene.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSingleSphereScene:
    """End-to-end checks on the one-sphere, one-lamp scene."""

    def test_fixed_seed_reproduces_image(self, tmp_path):
        """Test an 80x45 render is byte-identical across runs and survives PNG."""
        from pathtracer.core.integrator import PathTracer
        from pathtracer.preview import load_png, save_png
        from pathtracer.scene import single_sphere_scene

        first = PathTracer(single_sphere_scene(80, 45)).render(np.random.default_rng(42))
        second = PathTracer(single_sphere_scene(80, 45)).render(np.random.default_rng(42))

        assert np.array_equal(first, second)

        path = save_png(first, tmp_path / "single.png")
        assert np.array_equal(load_png(path), first)

    def test_image_has_light_and_shadow(self):
        from pathtracer.core.integrator import PathTracer
        from pathtracer.scene import single_sphere_scene

        pixels = PathTracer(single_sphere_scene(80, 45)).render(np.random.default_rng(0))

        assert pixels.max() == 255
        assert pixels.min() == 0


class TestDemoScene:
    """End-to-end checks on the demo scene."""

    def test_demo_scene_renders(self):
        from pathtracer.camera import Camera
        from pathtracer.core.integrator import PathTracer
        from pathtracer.scene import demo_scene

        scene = demo_scene(Camera.with_aspect(48, samples_per_pixel=2))
        tracer = PathTracer(scene)
        pixels = tracer.render(np.random.default_rng(0), rows_per_batch=5)

        assert pixels.shape == (27, 48, 3)
        radiance = tracer.radiance_image()
        assert np.all(np.isfinite(radiance))
        assert np.all(radiance >= 0.0)
        assert radiance.max() > 0.0


class TestRenderScript:
    """Tests for examples/render_scene.py."""

    def test_parse_args_defaults(self):
        script = _load_render_script()

        args = script.parse_args([])

        assert args.scene is None
        assert args.seed == 0
        assert args.output == "render.png"
        assert not args.preview

    def test_apply_overrides(self):
        from pathtracer.scene import demo_config

        script = _load_render_script()

        config = script.apply_overrides(demo_config(), width=160, samples=2, bounces=1)

        assert config.camera.resolution == (160, 90)
        assert config.camera.samples_per_pixel == 2
        assert config.camera.max_bounces == 1
        assert config.objects == demo_config().objects

    def test_render_scene_from_json(self, tmp_path):
        from pathtracer.camera import Camera
        from pathtracer.preview import load_png
        from pathtracer.scene import demo_config, save_scene

        script = _load_render_script()
        scene_path = tmp_path / "scene.json"
        save_scene(demo_config(Camera.with_aspect(32, samples_per_pixel=1)), scene_path)

        output = script.render_scene(
            scene_path=str(scene_path),
            seed=7,
            output_path=str(tmp_path / "render.png"),
            quiet=True,
        )

        assert output.exists()
        assert load_png(output).shape == (18, 32, 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
