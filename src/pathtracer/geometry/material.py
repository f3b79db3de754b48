"""Diffuse/emissive surface material.

A material is purely diffuse: bounced light leaves in a randomised direction
around the surface normal. Surfaces with a positive emission strength add
light to every path that strikes them.

Two representations are provided:
- MaterialInfo: immutable host-side description used to build scenes.
- Material: the Taichi dataclass mirror used inside kernels.

Example:
    >>> from pathtracer.geometry.material import MaterialInfo
    >>> sky_blue = MaterialInfo.with_colour((0.3, 0.7, 0.9))
    >>> lamp = MaterialInfo.white_lamp()
"""

import math
from dataclasses import dataclass
from typing import Any

import taichi as ti

from pathtracer.core.vector import real, vec3

Colour = tuple[float, float, float]


@ti.dataclass
class Material:
    """Device-side material record.

    Attributes:
        base_colour: Diffuse reflectance (albedo) per RGB channel.
        emission_colour: Colour of emitted light.
        emission_strength: Scalar multiplier for the emitted light (>= 0).
    """

    base_colour: vec3
    emission_colour: vec3
    emission_strength: real


@ti.func
def emitted_light(material: Material) -> vec3:
    """Light emitted by a surface: emission_colour * emission_strength."""
    return material.emission_colour * material.emission_strength


def _as_colour(value: Any, name: str) -> Colour:
    """Validate and convert a colour-like sequence to a float triple."""
    try:
        r, g, b = (float(c) for c in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of three numbers, got {value!r}") from e
    if not all(math.isfinite(c) for c in (r, g, b)):
        raise ValueError(f"{name} components must be finite, got {value!r}")
    return (r, g, b)


@dataclass(frozen=True)
class MaterialInfo:
    """Host-side material description.

    Attributes:
        base_colour: Diffuse reflectance as (R, G, B). Values in [0, 1]
            conserve energy; larger values are accepted.
        emission_colour: Emitted light colour as (R, G, B).
        emission_strength: Emission multiplier. Must be non-negative.

    Raises:
        ValueError: If a colour is malformed or emission_strength is negative.
    """

    base_colour: Colour = (0.0, 0.0, 0.0)
    emission_colour: Colour = (0.0, 0.0, 0.0)
    emission_strength: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_colour", _as_colour(self.base_colour, "base_colour"))
        object.__setattr__(
            self, "emission_colour", _as_colour(self.emission_colour, "emission_colour")
        )
        try:
            strength = float(self.emission_strength)
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"emission_strength must be a number, got {self.emission_strength!r}"
            ) from e
        if not math.isfinite(strength) or strength < 0.0:
            raise ValueError(f"emission_strength must be >= 0, got {self.emission_strength}")
        object.__setattr__(self, "emission_strength", strength)

    @classmethod
    def with_colour(cls, base: Colour) -> "MaterialInfo":
        """Create a non-emissive diffuse material with the given albedo."""
        return cls(base_colour=base)

    @classmethod
    def white_lamp(cls, strength: float = 1.0) -> "MaterialInfo":
        """Create a black, white-emitting light source material."""
        return cls(
            base_colour=(0.0, 0.0, 0.0),
            emission_colour=(1.0, 1.0, 1.0),
            emission_strength=strength,
        )

    @property
    def is_emissive(self) -> bool:
        """Whether the material contributes light."""
        return self.emission_strength > 0.0 and any(c != 0.0 for c in self.emission_colour)

    def to_dict(self) -> dict[str, Any]:
        """Export the material to a JSON-compatible dictionary."""
        return {
            "base_colour": list(self.base_colour),
            "emission_colour": list(self.emission_colour),
            "emission_strength": self.emission_strength,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MaterialInfo":
        """Load a material from a dictionary produced by to_dict().

        Missing keys take the defaults of a black, non-emissive material.

        Raises:
            ValueError: If data is not a dictionary or a value is invalid.
        """
        if not isinstance(data, dict):
            raise ValueError(f"material must be an object, got {type(data).__name__}")
        return cls(
            base_colour=data.get("base_colour", (0.0, 0.0, 0.0)),
            emission_colour=data.get("emission_colour", (0.0, 0.0, 0.0)),
            emission_strength=data.get("emission_strength", 0.0),
        )
