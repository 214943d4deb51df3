import math

import numpy as np
import pytest

from climbkit import geometry as g


def test_identity_rotation_leaves_vector_unchanged():
    q = g.quat_from_euler((0.0, 0.0, 0.0))
    assert np.allclose(q, [1.0, 0.0, 0.0, 0.0])
    assert np.allclose(g.rotate(q, (1.5, -2.0, 3.0)), (1.5, -2.0, 3.0))


@pytest.mark.parametrize("angles", [(0.3, -1.1, 0.7), (1.2, 0.4, -2.5), (0.0, 3.0, 0.0)])
def test_quat_from_euler_is_unit(angles):
    q = g.quat_from_euler(angles)
    assert np.linalg.norm(q) == pytest.approx(1.0)


@pytest.mark.parametrize("angles", [(0.3, -1.1, 0.7), (1.2, 0.4, -2.5)])
def test_rotation_preserves_length(angles):
    v = np.array([2.0, -1.0, 4.0])
    rotated = g.rotate(g.quat_from_euler(angles), v)
    assert np.linalg.norm(rotated) == pytest.approx(np.linalg.norm(v))


@pytest.mark.parametrize(
    "angles", [(0.0, 0.8, 0.0), (0.6, 0.0, 0.0), (0.0, 0.0, -0.4), (0.0, -2.9, 0.0)]
)
def test_quat_to_euler_single_axis_round_trip(angles):
    result = g.quat_to_euler(g.quat_from_euler(angles))
    assert np.allclose(result, angles, atol=1e-9)


def test_quat_to_euler_north_pole():
    angles = (0.0, 0.0, math.pi / 2)
    result = g.quat_to_euler(g.quat_from_euler(angles))
    assert np.allclose(result, angles, atol=1e-9)


def test_quat_to_euler_rejects_bad_shape():
    with pytest.raises(ValueError):
        g.quat_to_euler((1.0, 0.0, 0.0))


def test_perspective_maps_near_and_far_to_clip_bounds():
    p = g.perspective(math.radians(60.0), 1.5, 0.5, 50.0)
    near_clip = p @ np.array([0.0, 0.0, -0.5, 1.0])
    far_clip = p @ np.array([0.0, 0.0, -50.0, 1.0])
    assert near_clip[2] / near_clip[3] == pytest.approx(-1.0)
    assert far_clip[2] / far_clip[3] == pytest.approx(1.0)


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        g.perspective(1.0, 0.0, 0.1, 10.0)


def test_look_at_moves_eye_to_origin_and_center_onto_negative_z():
    eye = np.array([3.0, 2.0, -1.0])
    center = np.array([7.0, 5.0, 4.0])
    view = g.look_at(eye, center, g.VEC_UP)
    assert np.allclose(view @ np.append(eye, 1.0), [0.0, 0.0, 0.0, 1.0])
    c = view @ np.append(center, 1.0)
    assert np.allclose(c[:2], 0.0, atol=1e-9)
    assert c[2] == pytest.approx(-np.linalg.norm(center - eye))
    rot = view[:3, :3]
    assert np.allclose(rot @ rot.T, np.identity(3))


def test_look_at_rejects_coincident_points():
    with pytest.raises(ValueError):
        g.look_at((1.0, 1.0, 1.0), (1.0, 1.0, 1.0), g.VEC_UP)


def test_compute_final_view():
    position = np.array([1.0, 2.0, 3.0])
    rotation = g.quat_from_euler((0.2, 0.5, 0.0))
    projection, view = g.compute_final_view(position, rotation, 90.0)
    assert projection[1, 1] / projection[0, 0] == pytest.approx(g.ASPECT_RATIO)
    assert projection[1, 1] == pytest.approx(1.0 / math.tan(math.radians(45.0)))
    assert np.allclose(view @ np.append(position, 1.0), [0.0, 0.0, 0.0, 1.0], atol=1e-9)
    ahead = view @ np.append(position + g.rotate(rotation, g.VEC_FRONT), 1.0)
    assert np.allclose(ahead[:2], 0.0, atol=1e-9)
    assert ahead[2] < 0.0


def test_project_vector_on_plane():
    normal = np.array([0.0, 0.6, 0.8])
    v = np.array([3.0, 4.0, 5.0])
    projected = g.project_vector_on_plane(v, normal)
    assert np.dot(projected, normal) == pytest.approx(0.0, abs=1e-12)
    assert np.allclose(np.cross(v - projected, normal), 0.0, atol=1e-12)


@pytest.mark.parametrize("angle,expected", [(100.0, 90.0), (-100.0, -90.0), (45.0, 45.0)])
def test_clamp_angle_to_value(angle, expected):
    assert g.clamp_angle_to_value(angle, 90.0) == expected


def test_clip_angle_to_bounds():
    assert g.clip_angle_to_bounds(190.0, 180.0) == -170.0
    assert g.clip_angle_to_bounds(45.0, 180.0) == 45.0
    assert -180.0 <= g.clip_angle_to_bounds(-185.0, 180.0) <= 180.0