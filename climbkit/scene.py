"""The level: scene nodes built from a map model, its lights and the player torch."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from climbkit.lights import DirectionalLight, LightManager, PointLight, TorchLight
from climbkit.mesh import Model
from climbkit.physics import PhysicsEngine
from climbkit.player import Player
from climbkit.scene_node import SceneNode, nodes_from_model

LEVEL_SCALE = (2.0, 2.0, 2.0)

LADDER_MATERIAL = "Echelle"
TRAMPOLINE_MATERIAL = "Trampoline"
ICE_MATERIAL = "Glace"
ICE_FRICTION = -0.1
TRAMPOLINE_RESTITUTION = 1.0
NON_COLLIDING_MATERIALS = frozenset({"Plante", "Clou", "UnderTrampoline"})

_SUN = {
    "ambient": (0.001, 0.001, 0.001),
    "diffuse": (0.5, 0.5, 0.5),
    "specular": (0.1, 0.1, 0.1),
    "direction": (-0.2, -1.0, -0.3),
}

_WHITE_AMBIENT = (0.1, 0.1, 0.1)
_WHITE = (1.0, 1.0, 1.0)
_RED = (1.0, 0.0, 0.0)
_GREEN = (0.0, 1.0, 0.0)
_YELLOW = (0.5, 0.45, 0.0)
_DIM = (0.1, 0.1, 0.1)
_ATTENUATION = (0.5, 0.001, 0.352)

# (ambient, diffuse, specular, position) of every point light, in shader order.
_POINT_LIGHTS: tuple[tuple[Sequence[float], Sequence[float], Sequence[float], Sequence[float]], ...] = (
    # neons
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-10.5, 6.5, 0.1)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-10.5, 6.5, -4.0)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-28.7, 49.5, -0.13)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (16.7, 67.0, 29.0)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-5.0, 64.0, 29.0)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (29.0, 55.0, -10.9)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (13.2, 43.0, -28.6)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (28.55, 90.0, -5.0)),
    # lamps
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-23.6, 6.5, 12.5)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (31.0, 23.3, 16.0)),
    (_RED, _WHITE, _WHITE, (0.1, 9.3, 28.3)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (8.9, 8.0, 8.5)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-28.0, 25.0, -13.5)),
    (_GREEN, _WHITE, _WHITE, (-28.0, 90.0, -17.0)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (28.8, 79.5, 27.0)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-13.0, 79.5, 27.86)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (-13.0, 79.5, -28.86)),
    (_WHITE_AMBIENT, _WHITE, _WHITE, (29.0, 79.5, -29.0)),
    (_YELLOW, _DIM, _DIM, (1.65, 79.5, 3.3)),
)

_SPOT_AMBIENT = (0.3, 0.3, 0.3)
_SPOT_DIFFUSE = (1.0, 1.0, 1.0)
_SPOT_SPECULAR = (0.2, 0.2, 0.2)

_PLAYER_TORCH = {"constant": 1.0, "linear": 0.3, "quadratic": 0.002, "cut_off": 40.0, "outer_cut_off": 50.0}

# (position, constant, linear, quadratic, direction, cut_off, outer_cut_off)
_SPOTS = (
    ((-29.0, 0.5, 24.5), 1.0, 0.3, 0.002, (0.8, 0.23, -0.55), 40.0, 120.0),
    ((-12.3, 0.5, 0.7), 1.5, 0.5, 0.012, (-0.4, 0.2, 0.9), 40.0, 50.0),
    ((-4.3, 30.0, -27.5), 1.5, 0.2, 0.012, (-0.6, -0.6, 0.55), 40.0, 50.0),
    ((29.0, 83.0, -29.0), 1.5, 0.2, 0.012, (-0.6, -0.8, 0.55), 40.0, 50.0),
    ((28.8, 88.0, 27.0), 1.5, 0.2, 0.012, (-0.43, -0.6, -0.7), 40.0, 50.0),
)


def _material_name(node: SceneNode) -> str:
    if node.mesh is not None and node.mesh.material is not None:
        return node.mesh.material.name
    return ""


class Scene:
    """Scene nodes of the level, its lights and the player they follow.

    ``level`` is the map model whose meshes become the scene's nodes when
    :meth:`setup_scene` runs.
    """

    def __init__(self, player: Player | None = None, level: Model | None = None) -> None:
        self.scene_nodes: list[SceneNode] = []
        self.lights = LightManager()
        self.player = player
        self.level = level

    def _require_player(self) -> Player:
        if self.player is None:
            raise ValueError("the scene has no player")
        return self.player

    def _player_torch(self) -> TorchLight:
        if not self.lights.torch_lights:
            raise ValueError("the scene has no player torch; call setup_scene first")
        return self.lights.torch_lights[0]

    def setup_scene(self) -> None:
        """Add the level meshes, the sun, the lamps and the spot lights."""
        player = self._require_player()
        if self.level is not None:
            self.add_meshes_from_model(self.level)

        self.lights.add_directional_light(DirectionalLight(**_SUN))

        constant, linear, quadratic = _ATTENUATION
        for ambient, diffuse, specular, position in _POINT_LIGHTS:
            self.lights.add_point_light(
                PointLight(
                    ambient=ambient,
                    diffuse=diffuse,
                    specular=specular,
                    position=position,
                    constant=constant,
                    linear=linear,
                    quadratic=quadratic,
                )
            )

        self.lights.add_torch_light(
            TorchLight(
                ambient=_SPOT_AMBIENT,
                diffuse=_SPOT_DIFFUSE,
                specular=_SPOT_SPECULAR,
                position=player.player_node.transform.translation,
                direction=player.camera.front(),
                **_PLAYER_TORCH,
            )
        )
        for position, const, lin, quad, direction, cut_off, outer in _SPOTS:
            self.lights.add_torch_light(
                TorchLight(
                    ambient=_SPOT_AMBIENT,
                    diffuse=_SPOT_DIFFUSE,
                    specular=_SPOT_SPECULAR,
                    position=position,
                    constant=const,
                    linear=lin,
                    quadratic=quad,
                    direction=direction,
                    cut_off=cut_off,
                    outer_cut_off=outer,
                )
            )

    def add_node(self, node: SceneNode) -> None:
        self.scene_nodes.append(node)

    def add_meshes_from_model(self, model: Model) -> None:
        """Add one scaled node per mesh, flagging ladders, trampolines and ice."""
        for node in nodes_from_model(model):
            node.transform.set_scale(LEVEL_SCALE)
            name = _material_name(node)
            body = node.rigid_body
            if name == LADDER_MATERIAL:
                body.is_ladder = True
            if name == TRAMPOLINE_MATERIAL:
                body.is_trampoline = True
                body.restitution_coefficient = TRAMPOLINE_RESTITUTION
            if name == ICE_MATERIAL:
                body.friction_coefficient = ICE_FRICTION
            self.scene_nodes.append(node)

    def add_entities_into_physics_engine(self, engine: PhysicsEngine) -> None:
        """Register every node except plants, nails and trampoline undersides."""
        for node in self.scene_nodes:
            if _material_name(node) not in NON_COLLIDING_MATERIALS:
                engine.add_entity(node)

    def update_light_player(self) -> None:
        """Keep the player torch at the player, pointing where the camera looks."""
        torch = self._player_torch()
        if not torch.power:
            return
        player = self._require_player()
        front = player.camera.front()
        length = float(np.linalg.norm(front))
        if length == 0.0:
            raise ValueError("camera front vector has zero length")
        torch.set_position(player.player_node.transform.translation)
        torch.direction = front / length

    def on_off_torch_light_player(self) -> None:
        torch = self._player_torch()
        torch.power = not torch.power

    def mode_torch_light_player(self) -> None:
        torch = self._player_torch()
        torch.mode = not torch.mode