"""Taichi-based Monte Carlo path tracer for sphere scenes.

This package synthesizes images by simulating light transport through a
scene of spheres with diffuse and emissive materials:
- Pinhole camera with jittered sub-pixel sampling
- Iterative path tracing with a bounded bounce count
- Deterministic per-pixel random streams seeded from a NumPy generator
- Square-root gamma tone mapping to 8-bit RGB

Subpackages:
    core: Vector algebra, random sampling, rays, colour conversion, integrator
    geometry: Materials, sphere primitive and hit records
    camera: Pinhole camera and ray generation
    scene: Scene container, presets and JSON configuration
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
