#!/usr/bin/env python3
"""Render a sphere scene to a PNG file.

By default the built-in demo scene is rendered: a sky-blue sphere above an
orange ground sphere, lit by a distant white lamp. A JSON scene file (see
pathtracer.scene.config) can be given instead.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene PATH        JSON scene file (default: built-in demo scene)
    --width WIDTH       Override image width; height follows the aspect ratio
    --samples SAMPLES   Override samples per pixel
    --bounces BOUNCES   Override maximum bounces per path
    --seed SEED         Random seed (default: 0)
    --output OUTPUT     Output file path (default: render.png)
    --arch ARCH         Taichi backend: cpu, cuda or gpu
    --preview           Show the result in a Matplotlib window
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene --width 400 --samples 16 --output demo.png
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

import numpy as np


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a sphere scene with the Monte Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Override image width in pixels; height follows the aspect ratio",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Override samples per pixel",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=None,
        help="Override maximum bounces per path",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--arch",
        type=str,
        default=None,
        help="Taichi backend: cpu, cuda or gpu (default: $PATHTRACER_ARCH or cpu)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def apply_overrides(config, width=None, samples=None, bounces=None):
    """Return a copy of a SceneConfig with camera settings overridden."""
    camera = config.camera
    if width is not None:
        height = width * camera.height // camera.width
        camera = dataclasses.replace(camera, resolution=(width, height))
    if samples is not None:
        camera = dataclasses.replace(camera, samples_per_pixel=samples)
    if bounces is not None:
        camera = dataclasses.replace(camera, max_bounces=bounces)
    return dataclasses.replace(config, camera=camera)


def render_scene(
    scene_path: str | None = None,
    width: int | None = None,
    samples: int | None = None,
    bounces: int | None = None,
    seed: int = 0,
    output_path: str = "render.png",
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        scene_path: JSON scene file, or None for the demo scene.
        width: Image width override.
        samples: Samples per pixel override.
        bounces: Maximum bounces override.
        seed: Seed for the random source.
        output_path: Output file path (PNG).
        preview: If True, show the image after saving.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from pathtracer.core.integrator import PathTracer
    from pathtracer.preview import save_png, show_image
    from pathtracer.scene import Scene, demo_config, load_scene

    config = load_scene(scene_path) if scene_path is not None else demo_config()
    config = apply_overrides(config, width=width, samples=samples, bounces=bounces)
    camera = config.camera

    if not quiet:
        print(
            f"Scene: {len(config.objects)} objects, {camera.width}x{camera.height}, "
            f"{camera.samples_per_pixel} spp, {camera.max_bounces} bounces"
        )

    tracer = PathTracer(Scene.from_config(config))

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    pixels = tracer.render(
        np.random.default_rng(seed),
        rows_per_batch=max(1, camera.height // 50),
        callback=progress_callback,
    )

    if not quiet:
        print()  # Newline after progress

    output_file = save_png(pixels, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        show_image(pixels, title=output_file.name)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    from pathtracer.config import init_runtime

    try:
        arch = init_runtime(args.arch)
        if not args.quiet:
            print(f"Using {arch} backend")

        render_scene(
            scene_path=args.scene,
            width=args.width,
            samples=args.samples,
            bounces=args.bounces,
            seed=args.seed,
            output_path=args.output,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
