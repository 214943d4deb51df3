"""Vector, quaternion and camera-matrix helpers.

Quaternions are numpy arrays laid out as ``(w, x, y, z)``.  Matrices are
4x4 numpy arrays that act on column vectors (``matrix @ point``).
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

VEC_ZERO = (0.0, 0.0, 0.0)
VEC_UP = (0.0, 1.0, 0.0)
VEC_FRONT = (0.0, 0.0, 1.0)
VEC_RIGHT = (1.0, 0.0, 0.0)

ASPECT_RATIO = 16.0 / 9.0
NEAR_PLANE = 0.1
FAR_PLANE = 10000.0

_POLE_THRESHOLD = 0.499


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _quat(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (4,):
        raise ValueError(f"expected a (w, x, y, z) quaternion, got shape {arr.shape}")
    return arr


def _normalize(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return vector / length


def quat_from_euler(angles: Sequence[float]) -> np.ndarray:
    """Build a quaternion from (pitch, yaw, roll) angles in radians."""
    half = _vec3(angles) * 0.5
    cx, cy, cz = np.cos(half)
    sx, sy, sz = np.sin(half)
    return np.array(
        [
            cx * cy * cz + sx * sy * sz,
            sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
        ]
    )


def rotate(quat: Sequence[float], vector: Sequence[float]) -> np.ndarray:
    """Rotate a vector by a quaternion."""
    q = _quat(quat)
    v = _vec3(vector)
    axis = q[1:]
    uv = np.cross(axis, v)
    uuv = np.cross(axis, uv)
    return v + (uv * q[0] + uuv) * 2.0


def quat_to_euler(quat: Sequence[float]) -> np.ndarray:
    """Convert a quaternion to (bank, heading, attitude) angles in radians.

    Heading (y) covers the full circle; attitude (z) stays within
    [-pi/2, pi/2].
    """
    w, x, y, z = _quat(quat)
    test = x * y + z * w
    if test > _POLE_THRESHOLD:
        return np.array([0.0, 2.0 * math.atan2(x, w), math.pi / 2.0])
    if test < -_POLE_THRESHOLD:
        return np.array([0.0, -2.0 * math.atan2(x, w), -math.pi / 2.0])
    sqx, sqy, sqz = x * x, y * y, z * z
    heading = math.atan2(2.0 * y * w - 2.0 * x * z, 1.0 - 2.0 * sqy - 2.0 * sqz)
    attitude = math.asin(2.0 * test)
    bank = math.atan2(2.0 * x * w - 2.0 * y * z, 1.0 - 2.0 * sqx - 2.0 * sqz)
    return np.array([bank, heading, attitude])


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with a [-1, 1] depth range."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    tan_half = math.tan(fov_y / 2.0)
    if tan_half == 0.0:
        raise ValueError("field of view must not be zero")
    result = np.zeros((4, 4))
    result[0, 0] = 1.0 / (aspect * tan_half)
    result[1, 1] = 1.0 / tan_half
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` toward ``center``."""
    eye_v = _vec3(eye)
    f = _normalize(_vec3(center) - eye_v)
    s = _normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    result = np.identity(4)
    result[0, :3] = s
    result[1, :3] = u
    result[2, :3] = -f
    result[0, 3] = -np.dot(s, eye_v)
    result[1, 3] = -np.dot(u, eye_v)
    result[2, 3] = np.dot(f, eye_v)
    return result


def compute_final_view(
    position: Sequence[float], rotation: Sequence[float], fov_degree: float
) -> tuple[np.ndarray, np.ndarray]:
    """Return the (projection, view) matrices for a camera."""
    projection = perspective(math.radians(fov_degree), ASPECT_RATIO, NEAR_PLANE, FAR_PLANE)
    pos = _vec3(position)
    front = _normalize(rotate(rotation, VEC_FRONT))
    up = _normalize(rotate(rotation, VEC_UP))
    view = look_at(pos, pos + front, up)
    return projection, view


def project_vector_on_plane(vector: Sequence[float], plane_normal: Sequence[float]) -> np.ndarray:
    """Project a vector onto the plane with the given (unit) normal."""
    normal = _vec3(plane_normal)
    return np.cross(normal, np.cross(_vec3(vector), normal))


def clamp_angle_to_value(angle: float, value: float) -> float:
    """Clamp an angle into [-value, value]."""
    if angle > value:
        angle = value
    if angle < -value:
        angle = -value
    return float(angle)


def clip_angle_to_bounds(angle: float, value: float) -> float:
    """Wrap an angle by a full turn once it leaves [-value, value]."""
    if angle > value:
        angle -= 360.0
    if angle < -value:
        angle += 360.0
    return float(angle)