"""Scene graph nodes holding a mesh or model, a transform and a rigid body."""

from __future__ import annotations

import weakref

import numpy as np

from climbkit.mesh import Mesh, Model
from climbkit.physics import RigidBody
from climbkit.transform import Transform


class SceneNode:
    """A node of the scene graph; parents are held weakly, children strongly."""

    def __init__(self, mesh: Mesh | None = None, model: Model | None = None) -> None:
        self.mesh = mesh
        self.model = model
        self.transform = Transform()
        self.rigid_body = RigidBody(self)
        self._parent: weakref.ref[SceneNode] | None = None
        self._children: list[SceneNode] = []

    @property
    def parent(self) -> SceneNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def children(self) -> tuple[SceneNode, ...]:
        return tuple(self._children)

    def set_parent(self, parent: SceneNode | None) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    def add_child(self, child: SceneNode) -> None:
        self._children.append(child)
        child.set_parent(self)

    def enable_physics(self, use_gravity: bool) -> None:
        self.rigid_body.use_gravity = use_gravity

    def set_transform(self, matrix) -> None:
        """Take translation, rotation and scale from an affine matrix."""
        self.transform.set_from_matrix(matrix)

    def update_aabb(self, model_matrix) -> None:
        """Move the bounding box by ``model_matrix`` if the transform changed."""
        matrix = np.asarray(model_matrix, dtype=float)
        if self.transform.transform_updated and self.mesh is not None:
            self.mesh.update_global_bounding_box(matrix)
            self.transform.transform_updated = False
        if self.transform.transform_updated and self.model is not None:
            self.model.update_global_bounding_box(matrix)
            self.transform.transform_updated = False


def nodes_from_model(model: Model) -> list[SceneNode]:
    """One node per mesh entry, placed with that entry's transform."""
    nodes = []
    for entry in model.entries:
        node = SceneNode(mesh=entry.mesh)
        node.set_transform(entry.transform)
        nodes.append(node)
    return nodes