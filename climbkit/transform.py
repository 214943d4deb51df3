"""Translation, rotation (degrees) and scale of a scene object."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

_EPSILON = 1e-12


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr.copy()


def _quat_from_rotation_matrix(r: np.ndarray) -> np.ndarray:
    trace = r[0, 0] + r[1, 1] + r[2, 2]
    if trace > 0.0:
        s = 0.5 / math.sqrt(trace + 1.0)
        return np.array(
            [0.25 / s, (r[2, 1] - r[1, 2]) * s, (r[0, 2] - r[2, 0]) * s, (r[1, 0] - r[0, 1]) * s]
        )
    if r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = 2.0 * math.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2])
        return np.array(
            [(r[2, 1] - r[1, 2]) / s, 0.25 * s, (r[0, 1] + r[1, 0]) / s, (r[0, 2] + r[2, 0]) / s]
        )
    if r[1, 1] > r[2, 2]:
        s = 2.0 * math.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2])
        return np.array(
            [(r[0, 2] - r[2, 0]) / s, (r[0, 1] + r[1, 0]) / s, 0.25 * s, (r[1, 2] + r[2, 1]) / s]
        )
    s = 2.0 * math.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1])
    return np.array(
        [(r[1, 0] - r[0, 1]) / s, (r[0, 2] + r[2, 0]) / s, (r[1, 2] + r[2, 1]) / s, 0.25 * s]
    )


def _euler_angles(quat: np.ndarray) -> np.ndarray:
    """(pitch, yaw, roll) in radians of a (w, x, y, z) quaternion."""
    w, x, y, z = quat
    py = 2.0 * (y * z + w * x)
    px = w * w - x * x - y * y + z * z
    pitch = 2.0 * math.atan2(x, w) if abs(py) < _EPSILON and abs(px) < _EPSILON else math.atan2(py, px)
    yaw = math.asin(max(-1.0, min(1.0, -2.0 * (x * z - w * y))))
    ry = 2.0 * (x * y + w * z)
    rx = w * w + x * x - y * y - z * z
    roll = 0.0 if abs(ry) < _EPSILON and abs(rx) < _EPSILON else math.atan2(ry, rx)
    return np.array([pitch, yaw, roll])


def decompose_matrix(matrix) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split an affine matrix into (translation, (w, x, y, z) rotation, scale).

    Skew is removed; a mirrored matrix yields negative scale.
    """
    m = np.asarray(matrix, dtype=float)
    if m.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
    if m[3, 3] == 0.0:
        raise ValueError("matrix cannot be decomposed: homogeneous scale is zero")
    m = m / m[3, 3]
    if np.any(np.abs(m[3, :3]) > _EPSILON):
        raise ValueError("matrix has a perspective part and cannot be decomposed")

    translation = m[:3, 3].copy()
    c0, c1, c2 = (m[:3, i].copy() for i in range(3))

    sx = float(np.linalg.norm(c0))
    if sx == 0.0:
        raise ValueError("matrix has zero scale")
    c0 /= sx
    c1 -= np.dot(c0, c1) * c0
    sy = float(np.linalg.norm(c1))
    if sy == 0.0:
        raise ValueError("matrix has zero scale")
    c1 /= sy
    c2 -= np.dot(c0, c2) * c0
    c2 -= np.dot(c1, c2) * c1
    sz = float(np.linalg.norm(c2))
    if sz == 0.0:
        raise ValueError("matrix has zero scale")
    c2 /= sz

    scale = np.array([sx, sy, sz])
    if np.dot(c0, np.cross(c1, c2)) < 0.0:
        scale = -scale
        c0, c1, c2 = -c0, -c1, -c2

    rotation = _quat_from_rotation_matrix(np.column_stack((c0, c1, c2)))
    return translation, rotation, scale


@dataclass(eq=False)
class Transform:
    """Translation, Euler rotation in degrees and per-axis scale."""

    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    transform_updated: bool = False

    def __post_init__(self) -> None:
        self.translation = _vec3(self.translation)
        self.rotation = _vec3(self.rotation)
        self.scale = _vec3(self.scale)

    def set_translation(self, translation: Sequence[float]) -> None:
        self.translation = _vec3(translation)

    def set_rotation(self, rotation: Sequence[float]) -> None:
        self.rotation = _vec3(rotation)

    def set_scale(self, scale: Sequence[float]) -> None:
        self.scale = _vec3(scale)

    def adjust_translation(self, delta: Sequence[float]) -> None:
        self.translation = self.translation + _vec3(delta)

    def adjust_rotation(self, delta: Sequence[float]) -> None:
        self.rotation = self.rotation + _vec3(delta)

    def adjust_scale(self, delta: Sequence[float]) -> None:
        self.scale = self.scale + _vec3(delta)

    def set_from_matrix(self, matrix) -> None:
        """Take translation, rotation (as degrees) and scale from a matrix."""
        translation, quat, scale = decompose_matrix(matrix)
        self.set_translation(translation)
        self.set_rotation(np.degrees(_euler_angles(quat)))
        self.set_scale(scale)