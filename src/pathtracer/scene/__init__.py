"""Scene module for scene description and management.

Components:
    scene: Taichi-side scene storage and nearest-hit queries
    config: JSON scene description (load_scene / save_scene)
    presets: Ready-made demo and test scenes
"""

from .config import SceneConfig, load_scene, save_scene
from .presets import default_camera, demo_config, demo_scene, single_sphere_scene
from .scene import Scene

__all__ = [
    "Scene",
    "SceneConfig",
    "load_scene",
    "save_scene",
    "default_camera",
    "demo_config",
    "demo_scene",
    "single_sphere_scene",
]
