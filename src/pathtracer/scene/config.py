"""Scene serialization to and from JSON.

A scene file is a JSON object with a camera and an ordered list of
primitives, each tagged with its type:

    {
        "camera": {"resolution": [80, 45], "samples_per_pixel": 4, ...},
        "objects": [
            {"type": "sphere", "center": [0, 0, -3], "radius": 1,
             "material": {"base_colour": [0.3, 0.7, 0.9]}}
        ]
    }

Example:
    >>> from pathtracer.scene.config import load_scene
    >>> config = load_scene("scenes/demo.json")
    >>> config.camera.width
    800
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pathtracer.camera.pinhole import Camera
from pathtracer.geometry.sphere import SphereInfo

logger = logging.getLogger(__name__)

# Loaders keyed by the "type" tag of a serialized primitive
PRIMITIVE_TYPES = {
    "sphere": SphereInfo,
}


@dataclass(frozen=True)
class SceneConfig:
    """Host-side scene description.

    Attributes:
        camera: Camera and sampling configuration.
        objects: Ordered primitives in the scene.
    """

    camera: Camera = field(default_factory=Camera)
    objects: tuple[SphereInfo, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.camera, Camera):
            raise ValueError(f"camera must be a Camera, got {type(self.camera).__name__}")
        objects = tuple(self.objects)
        for obj in objects:
            if not isinstance(obj, SphereInfo):
                raise ValueError(f"Unsupported scene object: {obj!r}")
        object.__setattr__(self, "objects", objects)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a JSON-compatible dictionary."""
        return {
            "camera": self.camera.to_dict(),
            "objects": [obj.to_dict() for obj in self.objects],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SceneConfig":
        """Load a scene from a dictionary produced by to_dict().

        Raises:
            ValueError: If a primitive has an unknown or missing type, or any
                value fails validation.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Scene data must be an object, got {type(data).__name__}")

        camera = Camera.from_dict(data.get("camera", {}))

        items = data.get("objects", [])
        if not isinstance(items, list):
            raise ValueError(f"objects must be a list, got {type(items).__name__}")

        objects = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValueError(f"Object {index} must be an object, got {type(item).__name__}")
            kind = item.get("type")
            loader = PRIMITIVE_TYPES.get(kind)
            if loader is None:
                raise ValueError(f"Object {index} has unknown type {kind!r}")
            objects.append(loader.from_dict(item))

        return cls(camera=camera, objects=tuple(objects))


def load_scene(path: str | Path) -> SceneConfig:
    """Read a scene description from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed SceneConfig.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or describes an invalid
            scene.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    config = SceneConfig.from_dict(data)
    logger.info("Loaded scene %s with %d objects", path, len(config.objects))
    return config


def save_scene(config: SceneConfig, path: str | Path) -> None:
    """Write a scene description to a JSON file.

    Args:
        config: The scene to save.
        path: Destination path.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info("Saved scene with %d objects to %s", len(config.objects), path)
