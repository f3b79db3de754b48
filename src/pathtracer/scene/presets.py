"""Ready-made scenes.

demo_scene() is the default render: a sky-blue sphere resting above a large
orange ground sphere, lit by a distant white lamp. single_sphere_scene() is
the same sphere and lamp without the ground, at a small resolution suited to
tests.
"""

from pathtracer.camera.pinhole import Camera
from pathtracer.geometry.material import MaterialInfo
from pathtracer.geometry.sphere import SphereInfo
from pathtracer.scene.config import SceneConfig
from pathtracer.scene.scene import Scene

SKY_BLUE = (0.3, 0.7, 0.9)
GROUND_ORANGE = (1.0, 0.7, 0.2)


def default_camera() -> Camera:
    """800x450 camera at the origin, 4 samples per pixel, 4 bounces."""
    return Camera.with_aspect(800, 16.0 / 9.0, samples_per_pixel=4, max_bounces=4)


def demo_config(camera: Camera | None = None) -> SceneConfig:
    """Describe the demo scene without uploading it.

    Args:
        camera: Camera to use. Defaults to default_camera().
    """
    if camera is None:
        camera = default_camera()
    objects = (
        SphereInfo((0.0, 0.0, -3.0), 1.0, MaterialInfo.with_colour(SKY_BLUE)),
        SphereInfo((0.0, -30.0, 0.0), 29.0, MaterialInfo.with_colour(GROUND_ORANGE)),
        SphereInfo((-10.0, 0.0, -30.0), 15.0, MaterialInfo.white_lamp()),
    )
    return SceneConfig(camera=camera, objects=objects)


def demo_scene(camera: Camera | None = None) -> Scene:
    """Build the demo scene."""
    return Scene.from_config(demo_config(camera))


def single_sphere_scene(
    width: int = 80,
    height: int = 45,
    samples_per_pixel: int = 4,
    max_bounces: int = 4,
) -> Scene:
    """Build a scene with one diffuse sphere and one white lamp.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Samples per pixel.
        max_bounces: Maximum bounces per path.
    """
    camera = Camera(
        viewport=(width / height, 1.0),
        resolution=(width, height),
        samples_per_pixel=samples_per_pixel,
        max_bounces=max_bounces,
    )
    objects = [
        SphereInfo((0.0, 0.0, -3.0), 1.0, MaterialInfo.with_colour(SKY_BLUE)),
        SphereInfo((-10.0, 0.0, -30.0), 15.0, MaterialInfo.white_lamp()),
    ]
    return Scene(camera, objects)
