"""Light sources and the shader uniforms that describe them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

SHADOW_MAP_FIRST_UNIT = 5


def _vec3(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr.copy()


@dataclass(eq=False)
class Light:
    """Ambient, diffuse and specular colours shared by every light."""

    ambient: np.ndarray = field(default_factory=lambda: np.ones(3))
    diffuse: np.ndarray = field(default_factory=lambda: np.ones(3))
    specular: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.ambient = _vec3(self.ambient)
        self.diffuse = _vec3(self.diffuse)
        self.specular = _vec3(self.specular)


@dataclass(eq=False)
class DirectionalLight(Light):
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.direction = _vec3(self.direction)

    def uniforms(self, index: int = 0) -> dict[str, Any]:
        """Uniform values; there is a single directional light, so index is unused."""
        return {
            "directionalLight.direction": self.direction,
            "directionalLight.ambient": self.ambient,
            "directionalLight.diffuse": self.diffuse,
            "directionalLight.specular": self.specular,
        }


@dataclass(eq=False)
class PointLight(Light):
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0

    def __post_init__(self) -> None:
        super().__post_init__()
        self.position = _vec3(self.position)

    def uniforms(self, index: int) -> dict[str, Any]:
        prefix = f"pointLights[{index}]"
        return {
            f"{prefix}.position": self.position,
            f"{prefix}.ambient": self.ambient,
            f"{prefix}.diffuse": self.diffuse,
            f"{prefix}.specular": self.specular,
            f"{prefix}.constant": self.constant,
            f"{prefix}.linear": self.linear,
            f"{prefix}.quadratic": self.quadratic,
        }


@dataclass(eq=False)
class TorchLight(Light):
    """Spot light that casts shadows into its own shadow map."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    constant: float = 1.0
    linear: float = 0.0
    quadratic: float = 0.0
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cut_off: float = 0.0
    outer_cut_off: float = 0.0
    near_plane: float = 0.5
    far_plane: float = 25.0
    power: bool = True
    mode: bool = True
    fbo_index: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        self.position = _vec3(self.position)
        self.direction = _vec3(self.direction)

    def set_position(self, position: Sequence[float]) -> None:
        self.position = _vec3(position)


@dataclass(eq=False)
class LightManager:
    directional_light: DirectionalLight | None = None
    point_lights: list[PointLight] = field(default_factory=list)
    torch_lights: list[TorchLight] = field(default_factory=list)

    def add_directional_light(self, light: DirectionalLight) -> None:
        """Set the scene's only directional light, replacing any earlier one."""
        self.directional_light = light

    def add_point_light(self, light: PointLight) -> None:
        self.point_lights.append(light)

    def add_torch_light(self, light: TorchLight) -> None:
        self.torch_lights.append(light)

    def uniforms(self) -> dict[str, Any]:
        """All light uniforms, including the shadow-map texture units."""
        values: dict[str, Any] = {}
        for index, light in enumerate(self.point_lights):
            values.update(light.uniforms(index))
        for index, _light in enumerate(self.torch_lights):
            values[f"shadow_map[{index}]"] = SHADOW_MAP_FIRST_UNIT + index
            values[f"shadow_map_indices[{index}]"] = index
        if self.directional_light is not None:
            values.update(self.directional_light.uniforms(0))
        values["nb_point_lights"] = len(self.point_lights)
        values["nb_torch_lights"] = len(self.torch_lights)
        return values