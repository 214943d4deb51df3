"""Rigid bodies and the physics step that moves the player through the level."""

from __future__ import annotations

import enum
import weakref
from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from climbkit.aabb import AABB, Collision, check_collision

if TYPE_CHECKING:
    from climbkit.scene_node import SceneNode

GRAVITY = np.array([0.0, -100.0, 0.0])
AIR_RESISTANCE = 0.09
SAFETY_OFFSET = 0.0001
GROUND_NORMAL_THRESHOLD = 0.1
DEFAULT_FRICTION = 0.02


class ContactKind(enum.IntEnum):
    """What a resolved collision touched."""

    NONE = -1
    LADDER = 0
    MOVING = 1


def _collider_box(node: SceneNode) -> AABB | None:
    if node.model is not None:
        return node.model.bounding_box
    if node.mesh is not None:
        return node.mesh.bounding_box
    return None


class RigidBody:
    """Velocity and contact state of a scene node.

    The body refers to its node weakly; operating on a body whose node is
    gone raises ReferenceError.
    """

    def __init__(self, node: SceneNode | None = None) -> None:
        self._node = weakref.ref(node) if node is not None else None
        self.velocity = np.zeros(3)
        self.mass = 1.0
        self.friction_coefficient = DEFAULT_FRICTION
        self.restitution_coefficient = 0.0
        self.use_gravity = False
        self.is_on_ground = False
        self.is_ladder = False
        self.is_on_ladder = False
        self.is_trampoline = False
        self.is_in_motion = False
        self.is_child = False

    @property
    def node(self) -> SceneNode | None:
        return self._node() if self._node is not None else None

    def _live_node(self) -> SceneNode:
        node = self.node
        if node is None:
            raise ReferenceError("the scene node of this rigid body no longer exists")
        return node

    def update_physics(self, delta_time: float) -> None:
        """Apply gravity and air resistance, then move the node."""
        self.use_gravity = not self.is_on_ladder
        if self.use_gravity:
            self.velocity = self.velocity + GRAVITY * delta_time
        self.apply_air_resistance()
        self.is_on_ground = False

        node = self._live_node()
        node.transform.adjust_translation(self.velocity * delta_time)
        node.transform.transform_updated = True

    def check_collision(self, other: RigidBody) -> Collision | None:
        """Overlap of the two nodes' bounding boxes, or None."""
        own = self._live_node()
        theirs = other._live_node()
        box_a = _collider_box(own)
        box_b = _collider_box(theirs)
        if box_a is None or box_b is None:
            return None
        return check_collision(box_a, box_b)

    def solve_collision(self, other: RigidBody, collision: Collision) -> ContactKind:
        """Push the node out of ``other`` and update velocity and contact flags."""
        node = self._live_node()
        normal = np.asarray(collision.normal, dtype=float)
        correction = (collision.depth + SAFETY_OFFSET) * normal
        kind = ContactKind.NONE

        if normal[1] > GROUND_NORMAL_THRESHOLD:
            if not other.is_trampoline:
                self.is_on_ground = True
            if other.restitution_coefficient == 0.0:
                self.velocity[1] = 0.0
            else:
                normal_speed = float(np.dot(self.velocity, normal))
                if normal_speed < 0:
                    perpendicular = normal_speed * normal
                    tangential = self.velocity - perpendicular
                    self.velocity = tangential - other.restitution_coefficient * perpendicular

        node.transform.adjust_translation(correction)
        node.transform.transform_updated = True

        if other.is_ladder:
            self.use_gravity = False
            self.is_on_ladder = True
            kind = ContactKind.LADDER
        else:
            self.use_gravity = True
            self.is_on_ladder = False

        if other.is_in_motion:
            other.is_child = True
            kind = ContactKind.MOVING

        self.apply_ground_friction(other)
        return kind

    def apply_air_resistance(self) -> None:
        self.velocity[0] *= 1.0 - AIR_RESISTANCE
        self.velocity[2] *= 1.0 - AIR_RESISTANCE

    def apply_ground_friction(self, other: RigidBody) -> None:
        """Slow horizontal motion by the friction of the surface stood on."""
        if self.is_on_ground:
            factor = 1.0 - other.friction_coefficient
            self.velocity[0] *= factor
            self.velocity[2] *= factor


class PhysicsEngine:
    """Steps the player (the first entity) against every other entity."""

    def __init__(self) -> None:
        self.id_block = -1
        self.ladder_collision = False
        self.entities: list[RigidBody] = []

    def update(self, delta_time: float) -> None:
        if not self.entities:
            raise ValueError("the physics engine has no player")
        self.ladder_collision = False
        player = self.entities[0]
        player.update_physics(delta_time)

        for index, other in enumerate(self.entities[1:], start=1):
            collision = player.check_collision(other)
            if collision is not None:
                kind = player.solve_collision(other, collision)
                if kind is ContactKind.MOVING:
                    self.id_block = index
                elif kind is ContactKind.LADDER:
                    self.ladder_collision = True
            elif self.id_block == index:
                self.id_block = -1
                other.is_child = False

        player.use_gravity = not self.ladder_collision
        player.is_on_ladder = self.ladder_collision

    def add_player(self, player: Any) -> None:
        """Register a player's body; it should be added before other entities."""
        self.entities.append(player.player_node.rigid_body)

    def add_entity(self, node: SceneNode) -> None:
        self.entities.append(node.rigid_body)