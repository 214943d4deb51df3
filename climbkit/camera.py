"""First-person camera with mouse look, keyboard flight and eased transitions."""

from __future__ import annotations

import enum
import math
from collections.abc import Collection
from typing import Sequence

import numpy as np

from climbkit.geometry import (
    VEC_FRONT,
    VEC_RIGHT,
    VEC_UP,
    clamp_angle_to_value,
    clip_angle_to_bounds,
    quat_from_euler,
    rotate,
)
from climbkit.geometry import compute_final_view as _compute_final_view

TRANSITION_DISTANCE = 30.0
YAW_BOUND = 180.0
PITCH_BOUND = 90.0

Cursor = tuple[float, float]


class CameraMode(enum.IntEnum):
    FIRST_MODE = 1
    SECOND_MODE = 2
    MODE_COUNT = 3


class InterpolationMode(enum.IntEnum):
    LINEAR = 0
    SMOOTHSTEP = 1
    SMOOTHSTEP2 = 2
    SMOOTHSTEP3 = 3
    SMOOTHERSTEP = 4
    SQUARED = 5
    INV_SQUARED = 6
    CUBED = 7
    INV_CUBED = 8
    SIN = 9


class Key(enum.Enum):
    """Keyboard keys the camera and player react to."""

    W = enum.auto()
    A = enum.auto()
    S = enum.auto()
    D = enum.auto()
    Q = enum.auto()
    E = enum.auto()
    Z = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    SPACE = enum.auto()
    LEFT_SHIFT = enum.auto()


def _smoothstep(v: float) -> float:
    return v * v * (3 - 2 * v)


def interpolate(mode: InterpolationMode, v: float) -> float:
    """Map linear progress ``v`` through the easing curve of ``mode``."""
    mode = InterpolationMode(mode)
    if mode is InterpolationMode.LINEAR:
        return v
    if mode is InterpolationMode.SMOOTHSTEP:
        return _smoothstep(v)
    if mode is InterpolationMode.SMOOTHSTEP2:
        return _smoothstep(_smoothstep(v))
    if mode is InterpolationMode.SMOOTHSTEP3:
        return _smoothstep(_smoothstep(_smoothstep(v)))
    if mode is InterpolationMode.SMOOTHERSTEP:
        return v * v * v * (v * (v * 6 - 15) + 10)
    if mode is InterpolationMode.SQUARED:
        return v * v
    if mode is InterpolationMode.INV_SQUARED:
        return 1 - (1 - v) * (1 - v)
    if mode is InterpolationMode.CUBED:
        return v * v * v
    if mode is InterpolationMode.INV_CUBED:
        return 1 - (1 - v) * (1 - v) * (1 - v)
    return math.sin(v * math.pi / 2)


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr.copy()


class Camera:
    """Camera state: position, Euler angles in degrees and derived matrices.

    ``mode_cam`` 0 or 1 rotates with the mouse; 2 flies with the keyboard.
    """

    def __init__(self) -> None:
        self.mode_cam = 1
        self.pos_player = np.zeros(3)

        self.fov_set = 90.0
        self.fov_degree = 90.0
        self.position = np.array([10.0, 40.0, 10.0])
        self.euler_angle = np.zeros(3)
        self.rotation_degrees = np.zeros(3)
        self.rotation = np.array([1.0, 0.0, 0.0, 0.0])
        self.translation_speed = 1.0
        self.rotation_speed = 0.01
        self.x_axis_reversed = False
        self.y_axis_reversed = False

        self.interpolation_mode = InterpolationMode.SMOOTHSTEP
        self.is_transitioning = False
        self.transition_duration = 3
        self.transition_progress = 0.0
        self.transition_start_position = self.position.copy()
        self.transition_stop_position = self.position + self.front() * TRANSITION_DISTANCE

        self.show_help = False
        self.camera_mode = CameraMode.FIRST_MODE
        self.show_mouse = False

        self._last_cursor: Cursor = (0.0, 0.0)
        self._first_pass = True
        self._last_show_mouse = self.show_mouse

        self.view_matrix = np.identity(4)
        self.projection_matrix = np.identity(4)

    @property
    def sensitivity(self) -> float:
        """Rotation speed, used as look and movement sensitivity."""
        return self.rotation_speed

    @sensitivity.setter
    def sensitivity(self, value: float) -> None:
        self.rotation_speed = float(value)

    def _restore_defaults(self, position: np.ndarray) -> None:
        self.fov_degree = 90.0
        self.position = position
        self.translation_speed = 5.0
        self.euler_angle = np.zeros(3)
        self.rotation_degrees = np.zeros(3)
        self.rotation = np.array([1.0, 0.0, 0.0, 0.0])
        self.rotation_speed = 5.0
        self.show_help = False
        self.transition_duration = 1
        self.interpolation_mode = InterpolationMode.LINEAR

    def init(self) -> None:
        """Put the camera back to its starting values."""
        self._restore_defaults(np.array([0.0, 2.0, 0.0]))

    def reset(self) -> None:
        """Like init, but place the camera behind the player."""
        self._restore_defaults(_vec3(self.pos_player) + np.array([0.0, 1.0, -10.0]))

    def next_mode(self) -> CameraMode:
        """Cycle to the next camera mode and restore default values."""
        following = self.camera_mode + 1
        self.camera_mode = (
            CameraMode.FIRST_MODE if following >= CameraMode.MODE_COUNT else CameraMode(following)
        )
        self.init()
        return self.camera_mode

    def start_transition(self) -> None:
        """Begin moving forward along the view direction."""
        self.transition_progress = 0.0
        self.transition_start_position = self.position.copy()
        front = self.front()
        self.transition_stop_position = (
            self.position + front / np.linalg.norm(front) * TRANSITION_DISTANCE
        )
        self.is_transitioning = True

    def transition(self, delta_time: float) -> None:
        """Advance a running transition by ``delta_time`` seconds."""
        if self.transition_progress < self.transition_duration:
            self.transition_progress += delta_time
            v = interpolate(
                self.interpolation_mode, self.transition_progress / self.transition_duration
            )
            start = self.transition_start_position
            stop = self.transition_stop_position
            self.position = start * (1.0 - v) + stop * v
        else:
            self.is_transitioning = False

    def update_free_input(
        self,
        delta_time: float,
        cursor: Cursor | None,
        keys: Collection[Key] = (),
    ) -> None:
        """Apply mouse look or keyboard flight, unless a transition runs."""
        if self.is_transitioning:
            return

        if self.show_mouse and not self._last_show_mouse:
            if cursor is not None:
                self._last_cursor = (float(cursor[0]), float(cursor[1]))
            self._first_pass = True
        self._last_show_mouse = self.show_mouse

        step = self.rotation_speed * delta_time

        if self.mode_cam in (0, 1) and not self.show_mouse and cursor is not None:
            x, y = float(cursor[0]), float(cursor[1])
            if self._first_pass:
                self._first_pass = False
                self._last_cursor = (x, y)
            x_diff = x - self._last_cursor[0]
            y_diff = y - self._last_cursor[1]
            self._last_cursor = (x, y)

            yaw_sign = 1.0 if self.x_axis_reversed else -1.0
            pitch_sign = -1.0 if self.y_axis_reversed else 1.0
            self.rotation_degrees[1] += yaw_sign * x_diff * step
            self.rotation_degrees[0] += pitch_sign * y_diff * step

        if self.mode_cam == 2:
            front = self.front()
            right = self.right()
            front[1] = 0.0
            right[1] = 0.0
            move = self.translation_speed * delta_time
            pitch_sign = -1.0 if self.y_axis_reversed else 1.0
            yaw_sign = -1.0 if self.x_axis_reversed else 1.0

            if Key.W in keys:
                self.position = self.position + front * move
            if Key.S in keys:
                self.position = self.position - front * move
            if Key.A in keys:
                self.position = self.position + right * move
            if Key.D in keys:
                self.position = self.position - right * move
            if Key.UP in keys:
                self.rotation_degrees[0] -= pitch_sign * step
            if Key.DOWN in keys:
                self.rotation_degrees[0] += pitch_sign * step
            if Key.LEFT in keys:
                self.rotation_degrees[1] += yaw_sign * step
            if Key.RIGHT in keys:
                self.rotation_degrees[1] -= yaw_sign * step
            if Key.Q in keys:
                self.position[1] += move
            if Key.E in keys:
                self.position[1] -= move

    def update(
        self,
        delta_time: float,
        cursor: Cursor | None,
        keys: Collection[Key] = (),
    ) -> None:
        """Process input, advance transitions and rebuild the matrices."""
        self.update_free_input(delta_time, cursor, keys)
        if self.is_transitioning:
            self.transition(delta_time)
        self.rotation_degrees[1] = clip_angle_to_bounds(self.rotation_degrees[1], YAW_BOUND)
        self.rotation_degrees[0] = clamp_angle_to_value(self.rotation_degrees[0], PITCH_BOUND)
        self.euler_angle = np.radians(self.rotation_degrees)
        self.rotation = quat_from_euler(self.euler_angle)
        self.compute_final_view()

    def compute_final_view(self) -> None:
        """Rebuild the projection and view matrices from the current state."""
        self.projection_matrix, self.view_matrix = _compute_final_view(
            self.position, self.rotation, self.fov_degree
        )

    def front(self) -> np.ndarray:
        return rotate(self.rotation, VEC_FRONT)

    def up(self) -> np.ndarray:
        return rotate(self.rotation, VEC_UP)

    def right(self) -> np.ndarray:
        return rotate(self.rotation, VEC_RIGHT)