"""The player: a physics-driven scene node with a first-person camera."""

from __future__ import annotations

import math
from collections.abc import Collection
from typing import Sequence

import numpy as np

from climbkit.camera import Camera, Cursor, Key
from climbkit.geometry import quat_from_euler, rotate
from climbkit.scene_node import SceneNode

CAMERA_HEIGHT = 1.8
SPAWN_POSITION = (-8.23, 10.0, 21.89)
SPAWN_ROTATION = (0.0, 0.0, 90.0)

LADDER_CLIMB_SPEED = 20.0
MAX_SPEED = 12.0
SPRINT_SPEED_MULTIPLIER = 1.5
ACCELERATION = 6.0
JUMP_HEIGHT = 3.0
PLAYER_GRAVITY = 100.0
FOV_STEP = 1.0


def _local_matrix(node: SceneNode) -> np.ndarray:
    transform = node.transform
    quat = quat_from_euler(np.radians(transform.rotation))
    rotation = np.column_stack(
        [rotate(quat, axis) for axis in ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))]
    )
    matrix = np.identity(4)
    matrix[:3, :3] = rotation * transform.scale
    matrix[:3, 3] = transform.translation
    return matrix


def _world_matrix(node: SceneNode) -> np.ndarray:
    matrix = _local_matrix(node)
    parent = node.parent
    while parent is not None:
        matrix = _local_matrix(parent) @ matrix
        parent = parent.parent
    return matrix


def _spawn_node() -> SceneNode:
    node = SceneNode()
    node.transform.set_scale((1.0, 1.0, 1.0))
    node.transform.set_translation(SPAWN_POSITION)
    node.transform.set_rotation(SPAWN_ROTATION)
    return node


class Player:
    """Moves its node from keyboard input and keeps the camera at eye height.

    Without a node, one is spawned at the level start; without a camera,
    a fresh one is created and initialised.
    """

    def __init__(self, player_node: SceneNode | None = None, camera: Camera | None = None) -> None:
        self.player_node = player_node if player_node is not None else _spawn_node()
        self.player_node.enable_physics(True)
        if camera is None:
            camera = Camera()
            camera.init()
        self.camera = camera
        self.is_jumping = False
        self.sprint_speed_multiplier = SPRINT_SPEED_MULTIPLIER
        self.fov_min = 90.0
        self.fov_gap = 10.0
        self.vitesse = 2.0
        self.hauteur = 1.0

    @property
    def view_matrix(self) -> np.ndarray:
        return self.camera.view_matrix

    @property
    def projection_matrix(self) -> np.ndarray:
        return self.camera.projection_matrix

    @property
    def position(self) -> np.ndarray:
        return self.player_node.transform.translation.copy()

    def front(self) -> np.ndarray:
        return self.camera.front()

    def right(self) -> np.ndarray:
        return self.camera.right()

    def update(
        self,
        delta_time: float,
        cursor: Cursor | None = None,
        keys: Collection[Key] = (),
    ) -> None:
        """Handle input, follow with the camera and refresh the bounding box."""
        self.handle_input(delta_time, keys)
        self.sync_camera()
        self.player_node.update_aabb(_world_matrix(self.player_node))
        self.camera.update(delta_time, cursor, keys)

    def handle_input(self, delta_time: float, keys: Collection[Key] = ()) -> None:
        """Turn pressed keys into velocity changes, sprint FOV and jumps."""
        body = self.player_node.rigid_body
        mode = self.camera.mode_cam
        looks_with_mouse = mode in (0, 1)
        forward_key = Key.Z if mode == 0 else Key.W
        backward_key = Key.S
        left_key = Key.Q if mode == 0 else Key.A
        right_key = Key.D

        if body.is_on_ladder:
            body.velocity[0] = 0.0
            body.velocity[2] = 0.0
            if looks_with_mouse:
                if forward_key in keys:
                    body.velocity[1] = LADDER_CLIMB_SPEED
                elif backward_key in keys:
                    body.velocity[1] = -LADDER_CLIMB_SPEED
                else:
                    body.velocity[1] = 0.0
        else:
            direction = np.zeros(3)
            if looks_with_mouse:
                sensitivity = self.camera.sensitivity
                if forward_key in keys:
                    direction += self.camera.front() * sensitivity
                if backward_key in keys:
                    direction -= self.camera.front() * sensitivity
                if left_key in keys:
                    direction += self.camera.right() * sensitivity
                if right_key in keys:
                    direction -= self.camera.right() * sensitivity
            length = float(np.linalg.norm(direction))
            if length > 0.0:
                direction = direction / length

            max_speed = MAX_SPEED
            self.fov_min = self.camera.fov_set
            fov = self.camera.fov_degree
            if Key.LEFT_SHIFT in keys:
                max_speed *= self.sprint_speed_multiplier
                if fov < self.fov_min + self.fov_gap:
                    self.camera.fov_degree = fov + FOV_STEP
            elif fov > self.fov_min:
                self.camera.fov_degree = fov - FOV_STEP

            body.velocity[0] += direction[0] * ACCELERATION
            body.velocity[2] += direction[2] * ACCELERATION
            horizontal = np.array([body.velocity[0], 0.0, body.velocity[2]])
            speed = float(np.linalg.norm(horizontal))
            if speed > max_speed:
                horizontal = horizontal / speed * max_speed
                body.velocity[0] = horizontal[0]
                body.velocity[2] = horizontal[2]

        if Key.SPACE in keys and body.is_on_ground:
            body.velocity[1] = math.sqrt(2.0 * PLAYER_GRAVITY * JUMP_HEIGHT)
            self.is_jumping = True
        if Key.SPACE not in keys:
            self.is_jumping = False

    def sync_camera(self) -> None:
        """Place the camera at eye height above the node."""
        translation = self.player_node.transform.translation
        self.camera.position = translation + np.array([0.0, CAMERA_HEIGHT, 0.0])

    def move_to(self, position: Sequence[float]) -> None:
        """Teleport the node, marking its transform as changed."""
        self.player_node.transform.set_translation(position)
        self.player_node.transform.transform_updated = True