import numpy as np
import pytest

from climbkit.camera import (
    Camera,
    CameraMode,
    InterpolationMode,
    Key,
    interpolate,
)


def _ready_camera() -> Camera:
    cam = Camera()
    cam.init()
    return cam


@pytest.mark.parametrize("mode", list(InterpolationMode))
def test_interpolate_endpoints(mode):
    assert interpolate(mode, 0.0) == pytest.approx(0.0)
    assert interpolate(mode, 1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("mode", list(InterpolationMode))
def test_interpolate_is_monotonic(mode):
    samples = [interpolate(mode, i / 20) for i in range(21)]
    assert all(b >= a - 1e-12 for a, b in zip(samples, samples[1:]))


def test_interpolate_linear_is_identity():
    assert interpolate(InterpolationMode.LINEAR, 0.37) == pytest.approx(0.37)


def test_interpolate_smoothstep_is_symmetric():
    lo = interpolate(InterpolationMode.SMOOTHSTEP, 0.2)
    hi = interpolate(InterpolationMode.SMOOTHSTEP, 0.8)
    assert lo + hi == pytest.approx(1.0)
    assert interpolate(InterpolationMode.SMOOTHSTEP, 0.5) == pytest.approx(0.5)


def test_interpolate_rejects_unknown_mode():
    with pytest.raises(ValueError):
        interpolate(42, 0.5)


def test_default_camera_transition_target_is_thirty_ahead():
    cam = Camera()
    assert np.allclose(cam.position, [10.0, 40.0, 10.0])
    offset = cam.transition_stop_position - cam.transition_start_position
    assert np.linalg.norm(offset) == pytest.approx(30.0)
    assert cam.interpolation_mode is InterpolationMode.SMOOTHSTEP


def test_init_restores_values():
    cam = Camera()
    cam.fov_degree = 120.0
    cam.rotation_degrees[1] = 45.0
    cam.init()
    assert np.allclose(cam.position, [0.0, 2.0, 0.0])
    assert cam.fov_degree == 90.0
    assert cam.translation_speed == 5.0
    assert cam.rotation_speed == 5.0
    assert cam.transition_duration == 1
    assert cam.interpolation_mode is InterpolationMode.LINEAR
    assert np.allclose(cam.rotation_degrees, 0.0)


def test_reset_places_camera_behind_player():
    cam = Camera()
    cam.pos_player = np.array([1.0, 2.0, 3.0])
    cam.reset()
    assert np.allclose(cam.position, cam.pos_player + np.array([0.0, 1.0, -10.0]))


def test_next_mode_cycles():
    cam = Camera()
    assert cam.next_mode() is CameraMode.SECOND_MODE
    assert cam.next_mode() is CameraMode.FIRST_MODE
    assert np.allclose(cam.position, [0.0, 2.0, 0.0])


def test_sensitivity_maps_to_rotation_speed():
    cam = Camera()
    cam.sensitivity = 7.5
    assert cam.rotation_speed == 7.5
    assert cam.sensitivity == 7.5


def test_transition_reaches_target_then_stops():
    cam = _ready_camera()
    cam.start_transition()
    assert cam.is_transitioning
    cam.transition(float(cam.transition_duration))
    assert np.allclose(cam.position, cam.transition_stop_position)
    assert np.linalg.norm(cam.position - cam.transition_start_position) == pytest.approx(30.0)
    cam.transition(0.1)
    assert not cam.is_transitioning


def test_transition_halfway_linear():
    cam = _ready_camera()
    cam.start_transition()
    cam.transition(cam.transition_duration / 2)
    midpoint = (cam.transition_start_position + cam.transition_stop_position) / 2
    assert np.allclose(cam.position, midpoint)


def test_transition_blocks_input():
    cam = _ready_camera()
    cam.mode_cam = 2
    cam.start_transition()
    before = cam.position.copy()
    cam.update_free_input(0.5, None, {Key.W, Key.Q})
    assert np.allclose(cam.position, before)


def test_mouse_look_first_pass_does_not_rotate():
    cam = _ready_camera()
    cam.update_free_input(0.1, (100.0, 100.0))
    assert np.allclose(cam.rotation_degrees, 0.0)


def test_mouse_look_directions_and_reversal():
    normal = _ready_camera()
    normal.update_free_input(0.1, (0.0, 0.0))
    normal.update_free_input(0.1, (10.0, 10.0))

    reversed_cam = _ready_camera()
    reversed_cam.x_axis_reversed = True
    reversed_cam.y_axis_reversed = True
    reversed_cam.update_free_input(0.1, (0.0, 0.0))
    reversed_cam.update_free_input(0.1, (10.0, 10.0))

    assert normal.rotation_degrees[1] < 0.0
    assert normal.rotation_degrees[0] > 0.0
    assert np.allclose(reversed_cam.rotation_degrees, -normal.rotation_degrees)


def test_shown_mouse_disables_look():
    cam = _ready_camera()
    cam.show_mouse = True
    cam.update_free_input(0.1, (0.0, 0.0))
    cam.update_free_input(0.1, (50.0, 50.0))
    assert np.allclose(cam.rotation_degrees, 0.0)


def test_keyboard_flight_moves_and_returns():
    cam = _ready_camera()
    cam.mode_cam = 2
    start = cam.position.copy()
    cam.update_free_input(0.5, None, {Key.W})
    assert cam.position[2] > start[2]
    cam.update_free_input(0.5, None, {Key.S})
    assert np.allclose(cam.position, start)
    cam.update_free_input(0.5, None, {Key.Q})
    assert cam.position[1] > start[1]
    cam.update_free_input(0.5, None, {Key.E})
    assert np.allclose(cam.position, start)


def test_keyboard_rotation_keys_cancel():
    cam = _ready_camera()
    cam.mode_cam = 2
    cam.update_free_input(0.2, None, {Key.UP})
    assert cam.rotation_degrees[0] < 0.0
    cam.update_free_input(0.2, None, {Key.DOWN})
    cam.update_free_input(0.2, None, {Key.LEFT})
    assert cam.rotation_degrees[1] > 0.0
    cam.update_free_input(0.2, None, {Key.RIGHT})
    assert np.allclose(cam.rotation_degrees, 0.0)


def test_update_clamps_pitch_and_wraps_yaw():
    cam = _ready_camera()
    cam.rotation_degrees = np.array([120.0, 190.0, 0.0])
    cam.update(0.0, None)
    assert cam.rotation_degrees[0] == pytest.approx(90.0)
    assert cam.rotation_degrees[1] == pytest.approx(-170.0)


def test_update_builds_matrices():
    cam = _ready_camera()
    cam.rotation_degrees = np.array([20.0, 35.0, 0.0])
    cam.update(0.0, None)
    assert cam.projection_matrix[3, 2] == pytest.approx(-1.0)
    eye = cam.view_matrix @ np.append(cam.position, 1.0)
    assert np.allclose(eye[:3], 0.0)
    ahead = cam.view_matrix @ np.append(cam.position + cam.front(), 1.0)
    assert ahead[2] < 0.0


def test_basis_is_orthonormal_after_update():
    cam = _ready_camera()
    cam.rotation_degrees = np.array([-30.0, 80.0, 10.0])
    cam.update(0.0, None)
    f, u, r = cam.front(), cam.up(), cam.right()
    for v in (f, u, r):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    assert np.dot(f, u) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(f, r) == pytest.approx(0.0, abs=1e-9)
    assert np.dot(u, r) == pytest.approx(0.0, abs=1e-9)


def test_identity_rotation_front_matches_axis():
    cam = _ready_camera()
    cam.update(0.0, None)
    assert np.allclose(cam.front(), [0.0, 0.0, 1.0])
    assert np.allclose(cam.up(), [0.0, 1.0, 0.0])
    assert np.allclose(cam.right(), [1.0, 0.0, 0.0])