"""Axis-aligned bounding boxes and the collision test between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr.copy()


class AABB:
    """Box in world space plus the local-space box it was built from."""

    def __init__(
        self,
        vmin: Sequence[float] = (0.0, 0.0, 0.0),
        vmax: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> None:
        self.process(vmin, vmax)

    def __repr__(self) -> str:
        return f"AABB(min={self.min.tolist()}, max={self.max.tolist()})"

    def process(self, vmin: Sequence[float], vmax: Sequence[float]) -> None:
        """Reset both the current and the original box."""
        self.min = _vec3(vmin)
        self.max = _vec3(vmax)
        self.original_min = self.min.copy()
        self.original_max = self.max.copy()

    def update(self, model_matrix) -> None:
        """Recompute the world box from the original box and a model matrix."""
        matrix = np.asarray(model_matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        min_world = (matrix @ np.append(self.original_min, 1.0))[:3]
        max_world = (matrix @ np.append(self.original_max, 1.0))[:3]
        self.min = np.minimum(min_world, max_world)
        self.max = np.maximum(min_world, max_world)

    def center(self) -> np.ndarray:
        return (self.min + self.max) / 2.0

    def half_widths(self) -> np.ndarray:
        return (self.max - self.min) / 2.0

    def line_vertices(self) -> np.ndarray:
        """The 12 box edges as 24 endpoints, two per line segment."""
        (x0, y0, z0), (x1, y1, z1) = self.min, self.max
        return np.array(
            [
                # bottom face
                (x0, y0, z0), (x1, y0, z0),
                (x1, y0, z0), (x1, y1, z0),
                (x1, y1, z0), (x0, y1, z0),
                (x0, y1, z0), (x0, y0, z0),
                # top face
                (x0, y0, z1), (x1, y0, z1),
                (x1, y0, z1), (x1, y1, z1),
                (x1, y1, z1), (x0, y1, z1),
                (x0, y1, z1), (x0, y0, z1),
                # sides
                (x0, y0, z0), (x0, y0, z1),
                (x1, y0, z0), (x1, y0, z1),
                (x0, y1, z0), (x0, y1, z1),
                (x1, y1, z0), (x1, y1, z1),
            ],
            dtype=float,
        )


@dataclass(frozen=True)
class Collision:
    """Penetration depth and the axis along which to push the first box out."""

    depth: float
    normal: tuple[float, float, float]


def check_collision(a: AABB, b: AABB) -> Collision | None:
    """Return the shallowest separating axis if the boxes overlap, else None."""
    overlapping = bool(np.all(a.max >= b.min) and np.all(a.min <= b.max))
    if not overlapping:
        return None
    a_center = (a.max + a.min) * 0.5
    b_center = (b.max + b.min) * 0.5
    best: Collision | None = None
    for axis in range(3):
        depth = max(0.0, float(min(a.max[axis] - b.min[axis], b.max[axis] - a.min[axis])))
        sign = 1.0 if a_center[axis] > b_center[axis] else -1.0
        if depth > 0.0 and (best is None or depth < best.depth):
            normal = [0.0, 0.0, 0.0]
            normal[axis] = sign
            best = Collision(depth, (normal[0], normal[1], normal[2]))
    return best