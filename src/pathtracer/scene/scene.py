"""Scene storage and nearest-hit queries.

The Scene owns one camera and an ordered collection of primitives. On
construction it uploads everything into Taichi fields using a Structure of
Arrays layout; after that it is read-only.

Materials shared by several primitives are stored once. Each primitive keeps
a material_id into the material table, which is what hit records carry.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.camera import Camera
    >>> from pathtracer.geometry import MaterialInfo, SphereInfo
    >>> from pathtracer.scene.scene import Scene
    >>> scene = Scene(
    ...     Camera.with_aspect(80),
    ...     [SphereInfo((0.0, 0.0, -3.0), 1.0, MaterialInfo.with_colour((0.3, 0.7, 0.9)))],
    ... )
    >>> len(scene)
    1
"""

import logging
from collections.abc import Sequence

import taichi as ti

from pathtracer.camera.pinhole import Camera, CameraState
from pathtracer.core.ray import Ray
from pathtracer.core.vector import real
from pathtracer.geometry.material import Material, MaterialInfo
from pathtracer.geometry.renderable import PrimitiveKind, hit_renderable
from pathtracer.geometry.sphere import HitRecord, Sphere, SphereInfo, make_sphere, miss_record
from pathtracer.scene.config import SceneConfig

logger = logging.getLogger(__name__)


@ti.data_oriented
class Scene:
    """Read-only scene of primitives viewed by one camera.

    Attributes:
        camera: The camera configuration.
        objects: The primitives, in scan order.
        materials: Distinct materials, indexed by material_id.
    """

    def __init__(self, camera: Camera, objects: Sequence[SphereInfo]) -> None:
        """Validate the scene and upload it to Taichi fields.

        Args:
            camera: Camera and sampling configuration.
            objects: Primitives to render. May be empty.

        Raises:
            ValueError: If camera is not a Camera or an object is not a
                supported primitive.
        """
        if not isinstance(camera, Camera):
            raise ValueError(f"camera must be a Camera, got {type(camera).__name__}")

        self.camera = camera
        self.objects = tuple(objects)

        materials: list[MaterialInfo] = []
        material_ids: dict[MaterialInfo, int] = {}
        object_material_ids = []
        for obj in self.objects:
            if not isinstance(obj, SphereInfo):
                raise ValueError(f"Unsupported scene object: {obj!r}")
            if obj.material not in material_ids:
                material_ids[obj.material] = len(materials)
                materials.append(obj.material)
            object_material_ids.append(material_ids[obj.material])
        self.materials = tuple(materials)

        # Fields need at least one slot; the counters bound every scan
        object_capacity = max(len(self.objects), 1)
        material_capacity = max(len(self.materials), 1)

        self._num_objects = ti.field(dtype=ti.i32, shape=())
        self._kinds = ti.field(dtype=ti.i32, shape=object_capacity)
        self._centers = ti.Vector.field(3, dtype=real, shape=object_capacity)
        self._radii = ti.field(dtype=real, shape=object_capacity)
        self._material_ids = ti.field(dtype=ti.i32, shape=object_capacity)

        self._base_colours = ti.Vector.field(3, dtype=real, shape=material_capacity)
        self._emission_colours = ti.Vector.field(3, dtype=real, shape=material_capacity)
        self._emission_strengths = ti.field(dtype=real, shape=material_capacity)

        self._camera_position = ti.Vector.field(3, dtype=real, shape=())
        self._focal_length = ti.field(dtype=real, shape=())
        self._viewport_width = ti.field(dtype=real, shape=())
        self._viewport_height = ti.field(dtype=real, shape=())

        for i, obj in enumerate(self.objects):
            self._kinds[i] = int(PrimitiveKind.SPHERE)
            self._centers[i] = list(obj.center)
            self._radii[i] = obj.radius
            self._material_ids[i] = object_material_ids[i]
        self._num_objects[None] = len(self.objects)

        for i, material in enumerate(self.materials):
            self._base_colours[i] = list(material.base_colour)
            self._emission_colours[i] = list(material.emission_colour)
            self._emission_strengths[i] = material.emission_strength

        self._camera_position[None] = list(camera.position)
        self._focal_length[None] = camera.focal_length
        self._viewport_width[None] = camera.viewport[0]
        self._viewport_height[None] = camera.viewport[1]

        if not any(m.is_emissive for m in self.materials):
            logger.warning("Scene has no emissive materials; the render will be black")
        logger.debug(
            "Uploaded scene: %d objects, %d materials, %dx%d camera",
            len(self.objects),
            len(self.materials),
            camera.width,
            camera.height,
        )

    @classmethod
    def from_config(cls, config: SceneConfig) -> "Scene":
        """Build a scene from a host-side SceneConfig."""
        return cls(config.camera, config.objects)

    def to_config(self) -> SceneConfig:
        """Export the scene as a SceneConfig for serialization."""
        return SceneConfig(camera=self.camera, objects=self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return (
            f"Scene(objects={len(self.objects)}, materials={len(self.materials)}, "
            f"resolution={self.camera.width}x{self.camera.height})"
        )

    # =========================================================================
    # Taichi-side accessors
    # =========================================================================

    @ti.func
    def sphere(self, index: ti.i32) -> Sphere:
        """Get the sphere stored at an object index."""
        return make_sphere(self._centers[index], self._radii[index], self._material_ids[index])

    @ti.func
    def material(self, material_id: ti.i32) -> Material:
        """Get a material by its id."""
        return Material(
            base_colour=self._base_colours[material_id],
            emission_colour=self._emission_colours[material_id],
            emission_strength=self._emission_strengths[material_id],
        )

    @ti.func
    def camera_state(self) -> CameraState:
        """Get the camera geometry for ray generation."""
        return CameraState(
            position=self._camera_position[None],
            focal_length=self._focal_length[None],
            viewport_width=self._viewport_width[None],
            viewport_height=self._viewport_height[None],
        )

    @ti.func
    def nearest_hit(self, ray: Ray, t_min: real, t_max: real) -> HitRecord:
        """Find the closest intersection along a ray.

        Every primitive is tested against the full interval and the hit with
        the smallest t is kept. Under equal distance the first primitive in
        scan order wins.

        Args:
            ray: The ray to test.
            t_min: Minimum accepted parametric distance.
            t_max: Maximum accepted parametric distance.

        Returns:
            The nearest HitRecord, or a miss if nothing was struck.
        """
        result = miss_record()
        for i in range(self._num_objects[None]):
            rec = hit_renderable(self._kinds[i], self.sphere(i), ray, t_min, t_max)
            if rec.hit == 1 and (result.hit == 0 or rec.t < result.t):
                result = rec
        return result
