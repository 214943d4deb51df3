"""Flat grid mesh with random vertex heights."""

from __future__ import annotations

import math
import random

import numpy as np

from climbkit.mesh import Mesh, Vertex


class Plane(Mesh):
    """A grid of ``grid_x`` by ``grid_z`` squares spanning ``size`` units.

    Vertex spacing uses whole-unit steps (``size // grid``), as does the
    grid layout; each vertex gets a random height in steps of
    ``height_scale / 100``.
    """

    def __init__(
        self,
        grid_x: int = 10,
        grid_z: int = 10,
        size: int = 10,
        height_scale: int = 1,
        seed: int | None = None,
    ) -> None:
        if grid_x <= 0 or grid_z <= 0:
            raise ValueError("grid dimensions must be positive")
        super().__init__()
        self.grid_x = int(grid_x)
        self.grid_z = int(grid_z)
        self.size = int(size)
        self.height_scale = int(height_scale)
        self._x = 0.0
        self._z = 0.0
        self._setup_plane(random.Random(seed))

    def _setup_plane(self, rng: random.Random) -> None:
        step_x = self.size // self.grid_x
        step_z = self.size // self.grid_z
        for gz in range(self.grid_z + 1):
            for gx in range(self.grid_x + 1):
                height = rng.randrange(100) / 100.0 * self.height_scale
                self.vertices.append(
                    Vertex(
                        position=(self._x + gx * step_x, height, self._z + gz * step_z),
                        normal=(0.0, 1.0, 0.0),
                        uv=(gx / self.grid_x, gz / self.grid_z),
                    )
                )
        row = self.grid_x + 1
        for gz in range(self.grid_z):
            for gx in range(self.grid_x):
                top = gz * row + gx
                bottom = (gz + 1) * row + gx
                self.indices.extend([top, bottom, bottom + 1, top, bottom + 1, top + 1])

    def height_at(self, x: float, z: float) -> float:
        """Bilinearly interpolated height; 0 outside the grid."""
        terrain_x = x - self._x
        terrain_z = z - self._z
        square_x = self.size / self.grid_x
        square_z = self.size / self.grid_z
        cell_x = int(terrain_x / square_x)
        cell_z = int(terrain_z / square_z)
        if not (0 <= cell_x <= self.grid_x - 1 and 0 <= cell_z <= self.grid_z - 1):
            return 0.0
        fx = math.fmod(terrain_x, square_x) / square_x
        fz = math.fmod(terrain_z, square_z) / square_z

        row = self.grid_x + 1
        h00 = self.vertices[cell_z * row + cell_x].position[1]
        h10 = self.vertices[cell_z * row + cell_x + 1].position[1]
        h01 = self.vertices[(cell_z + 1) * row + cell_x].position[1]
        h11 = self.vertices[(cell_z + 1) * row + cell_x + 1].position[1]
        return float(
            h00 * (1 - fx) * (1 - fz)
            + h10 * fx * (1 - fz)
            + h01 * (1 - fx) * fz
            + h11 * fx * fz
        )

    def heights(self) -> np.ndarray:
        """Vertex heights as a (grid_z + 1, grid_x + 1) array."""
        return np.array([v.position[1] for v in self.vertices]).reshape(
            self.grid_z + 1, self.grid_x + 1
        )