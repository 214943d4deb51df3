import math

import numpy as np
import pytest

from climbkit.aabb import AABB
from climbkit.camera import Camera, Key
from climbkit.mesh import Material, Mesh
from climbkit.player import Player
from climbkit.scene_node import SceneNode


@pytest.fixture
def player():
    return Player()


def test_default_spawn_and_physics(player):
    assert np.allclose(player.player_node.transform.translation, (-8.23, 10.0, 21.89))
    assert np.allclose(player.player_node.transform.rotation, (0.0, 0.0, 90.0))
    assert player.player_node.rigid_body.use_gravity is True


def test_given_node_gets_physics_enabled():
    node = SceneNode()
    camera = Camera()
    p = Player(node, camera)
    assert p.player_node is node
    assert p.camera is camera
    assert node.rigid_body.use_gravity is True


def test_sync_camera_places_eye_above_node(player):
    player.sync_camera()
    expected = player.player_node.transform.translation + np.array([0.0, 1.8, 0.0])
    assert np.allclose(player.camera.position, expected)


def test_forward_accelerates_along_front(player):
    player.handle_input(0.016, {Key.W})
    velocity = player.player_node.rigid_body.velocity
    assert velocity[2] == pytest.approx(6.0)
    assert velocity[0] == pytest.approx(0.0)


def test_backward_is_opposite_of_forward():
    a, b = Player(), Player()
    a.handle_input(0.016, {Key.W})
    b.handle_input(0.016, {Key.S})
    assert np.allclose(a.player_node.rigid_body.velocity, -b.player_node.rigid_body.velocity)


def test_diagonal_is_normalized(player):
    player.handle_input(0.016, {Key.W, Key.A})
    v = player.player_node.rigid_body.velocity
    assert math.hypot(v[0], v[2]) == pytest.approx(6.0)


def test_speed_is_clamped(player):
    for _ in range(5):
        player.handle_input(0.016, {Key.W})
    v = player.player_node.rigid_body.velocity
    assert math.hypot(v[0], v[2]) == pytest.approx(12.0)


def test_sprint_raises_speed_limit_and_fov(player):
    for _ in range(5):
        player.handle_input(0.016, {Key.W, Key.LEFT_SHIFT})
    v = player.player_node.rigid_body.velocity
    assert math.hypot(v[0], v[2]) == pytest.approx(18.0)
    assert player.camera.fov_degree == pytest.approx(player.camera.fov_set + 5.0)


def test_sprint_fov_stops_at_gap(player):
    for _ in range(30):
        player.handle_input(0.016, {Key.LEFT_SHIFT})
    assert player.camera.fov_degree == pytest.approx(player.camera.fov_set + player.fov_gap)


def test_fov_falls_back_without_sprint(player):
    for _ in range(4):
        player.handle_input(0.016, {Key.LEFT_SHIFT})
    for _ in range(10):
        player.handle_input(0.016, set())
    assert player.camera.fov_degree == pytest.approx(player.camera.fov_set)


@pytest.mark.parametrize(
    "keys, expected", [({Key.W}, 20.0), ({Key.S}, -20.0), (set(), 0.0)]
)
def test_ladder_climbing(player, keys, expected):
    body = player.player_node.rigid_body
    body.is_on_ladder = True
    body.velocity[:] = (3.0, 7.0, 4.0)
    player.handle_input(0.016, keys)
    assert body.velocity[1] == pytest.approx(expected)
    assert body.velocity[0] == 0.0
    assert body.velocity[2] == 0.0


def test_jump_only_from_ground(player):
    body = player.player_node.rigid_body
    player.handle_input(0.016, {Key.SPACE})
    assert body.velocity[1] == 0.0
    assert player.is_jumping is False
    body.is_on_ground = True
    player.handle_input(0.016, {Key.SPACE})
    assert body.velocity[1] == pytest.approx(math.sqrt(600.0))
    assert player.is_jumping is True
    player.handle_input(0.016, set())
    assert player.is_jumping is False


def test_mode_zero_uses_z_for_forward(player):
    player.camera.mode_cam = 0
    player.handle_input(0.016, {Key.W})
    assert np.allclose(player.player_node.rigid_body.velocity, 0.0)
    player.handle_input(0.016, {Key.Z})
    assert player.player_node.rigid_body.velocity[2] > 0.0


def test_flight_mode_ignores_walking(player):
    player.camera.mode_cam = 2
    player.handle_input(0.016, {Key.W, Key.A})
    assert np.allclose(player.player_node.rigid_body.velocity, 0.0)


def test_update_follows_with_camera_and_view(player):
    player.update(0.016, None, {Key.W})
    eye = player.player_node.transform.translation + np.array([0.0, 1.8, 0.0])
    assert np.allclose(player.camera.position, eye)
    in_view = player.view_matrix @ np.append(eye, 1.0)
    assert np.allclose(in_view, (0.0, 0.0, 0.0, 1.0))
    assert player.projection_matrix is player.camera.projection_matrix


def test_update_moves_bounding_box():
    mesh = Mesh(material=Material(), bounding_box=AABB((-0.5, -0.5, -0.5), (0.5, 0.5, 0.5)))
    node = SceneNode(mesh=mesh)
    p = Player(node, Camera())
    p.move_to((3.0, 4.0, 5.0))
    p.update(0.016, None, set())
    assert np.allclose(mesh.bounding_box.center(), (3.0, 4.0, 5.0))
    assert np.allclose(mesh.bounding_box.half_widths(), (0.5, 0.5, 0.5))
    assert node.transform.transform_updated is False


def test_position_is_translation(player):
    player.move_to((1.0, 2.0, 3.0))
    assert np.allclose(player.position, (1.0, 2.0, 3.0))
    assert np.allclose(player.front(), player.camera.front())
    assert np.allclose(player.right(), player.camera.right())