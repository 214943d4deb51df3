"""Materials, meshes and models built from meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from climbkit.aabb import AABB

DIFFUSE_TEXTURE = "texture_diffuse"
SPECULAR_TEXTURE = "texture_specular"
NORMAL_MAP = "normal_map"


def _vec(value: Sequence[float], size: int) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (size,):
        raise ValueError(f"expected a {size}-component vector, got shape {arr.shape}")
    return arr.copy()


@dataclass(frozen=True)
class TextureInfo:
    """A texture known by its kind (such as ``texture_diffuse``) and file path."""

    type: str
    path: str = ""


@dataclass(eq=False)
class Material:
    """Surface colours, shininess and the textures applied to a mesh."""

    name: str = ""
    ambient: np.ndarray = field(default_factory=lambda: np.ones(3))
    diffuse: np.ndarray = field(default_factory=lambda: np.ones(3))
    specular: np.ndarray = field(default_factory=lambda: np.ones(3))
    emissive: np.ndarray = field(default_factory=lambda: np.zeros(3))
    shininess: float = 32.0
    textures: list[TextureInfo] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ambient = _vec(self.ambient, 3)
        self.diffuse = _vec(self.diffuse, 3)
        self.specular = _vec(self.specular, 3)
        self.emissive = _vec(self.emissive, 3)

    def add_texture(self, texture: TextureInfo | None) -> None:
        """Append a texture; ``None`` is ignored."""
        if texture is not None:
            self.textures.append(texture)


@dataclass(eq=False)
class Vertex:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tangent: np.ndarray = field(default_factory=lambda: np.zeros(3))
    bitangent: np.ndarray = field(default_factory=lambda: np.zeros(3))
    uv: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.position = _vec(self.position, 3)
        self.normal = _vec(self.normal, 3)
        self.tangent = _vec(self.tangent, 3)
        self.bitangent = _vec(self.bitangent, 3)
        self.uv = _vec(self.uv, 2)


@dataclass(eq=False)
class Mesh:
    """Indexed triangle list with a material and a bounding box."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    material: Material | None = None
    bounding_box: AABB = field(default_factory=AABB)

    def add_texture(self, texture: TextureInfo) -> None:
        if self.material is None:
            raise ValueError("mesh has no material to add a texture to")
        self.material.textures.append(texture)

    def vertex_position(self, index: int) -> np.ndarray:
        return self.vertices[index].position

    def update_global_bounding_box(self, model_matrix) -> None:
        self.bounding_box.update(model_matrix)

    def sampler_bindings(self) -> dict[str, Any]:
        """Uniform values set before drawing: material values and texture units.

        Textures are numbered per kind from 1 (``texture_diffuse1``,
        ``texture_diffuse2``, ...) and bound to units in list order.
        """
        if self.material is None:
            raise ValueError("mesh has no material")
        material = self.material
        values: dict[str, Any] = {
            "material.ambient": material.ambient,
            "material.diffuse": material.diffuse,
            "material.specular": material.specular,
            "material.emissive": material.emissive,
            "material.shininess": material.shininess,
        }
        counters = {DIFFUSE_TEXTURE: 0, SPECULAR_TEXTURE: 0, NORMAL_MAP: 0}
        for unit, texture in enumerate(material.textures):
            number = ""
            if texture.type in counters:
                counters[texture.type] += 1
                number = str(counters[texture.type])
            values[texture.type + number] = unit
        values["hasDiffuse"] = counters[DIFFUSE_TEXTURE] > 0
        values["hasSpecular"] = counters[SPECULAR_TEXTURE] > 0
        values["hasNormalMap"] = counters[NORMAL_MAP] > 0
        return values


@dataclass(eq=False)
class MeshEntry:
    """A mesh and the transform of the node it was found under."""

    mesh: Mesh
    transform: np.ndarray = field(default_factory=lambda: np.identity(4))

    def __post_init__(self) -> None:
        matrix = np.asarray(self.transform, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        self.transform = matrix.copy()


@dataclass(eq=False)
class Model:
    """A set of mesh entries with a bounding box enclosing all of them."""

    entries: list[MeshEntry] = field(default_factory=list)
    directory: str = ""
    bounding_box: AABB = field(default_factory=AABB)

    def __post_init__(self) -> None:
        self.compute_bounding_box()

    def bind_texture_to_meshes(self, texture: TextureInfo) -> None:
        for entry in self.entries:
            entry.mesh.add_texture(texture)

    def compute_bounding_box(self) -> None:
        """Enclose the bounding boxes of every mesh; no-op without entries."""
        if not self.entries:
            return
        boxes = [entry.mesh.bounding_box for entry in self.entries]
        low = np.min([box.min for box in boxes], axis=0)
        high = np.max([box.max for box in boxes], axis=0)
        self.bounding_box = AABB(low, high)

    def update_global_bounding_box(self, model_matrix) -> None:
        self.bounding_box.update(model_matrix)