import math

import pytest

from fdfview.keys import KeyState
from fdfview.mapfile import FdfMap
from fdfview.transform import (
    Scene,
    apply,
    average_height,
    grid_points,
    identity,
    multiply,
    orthographic_projection,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling_matrix,
    translation_matrix,
)

IDENTITY_VALUES = [
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
]


def _flat(matrix):
    return [value for row in matrix for value in row]


def test_identity_is_neutral_for_multiply():
    m = rotation_z(0.7)
    expected = pytest.approx(_flat(m), abs=1e-9)
    assert _flat(multiply(identity(), m)) == expected
    assert _flat(multiply(m, identity())) == expected


@pytest.mark.parametrize("rot", [rotation_x, rotation_y, rotation_z])
def test_rotation_zero_is_identity(rot):
    assert _flat(rot(0.0)) == pytest.approx(IDENTITY_VALUES, abs=1e-9)


@pytest.mark.parametrize("rot", [rotation_x, rotation_y, rotation_z])
def test_rotation_inverse_cancels(rot):
    product = multiply(rot(0.9), rot(-0.9))
    assert _flat(product) == pytest.approx(IDENTITY_VALUES, abs=1e-9)


def test_rotation_z_quarter_turn_maps_x_to_y():
    x, y, z, w = apply(rotation_z(math.pi / 2), (1.0, 0.0, 0.0, 1.0))
    assert (x, y, z, w) == pytest.approx((0.0, 1.0, 0.0, 1.0), abs=1e-12)


def test_translation_round_trip():
    vec = (0.3, -0.2, 0.5, 1.0)
    moved = apply(translation_matrix(1.0, 2.0, 3.0), vec)
    back = apply(translation_matrix(-1.0, -2.0, -3.0), moved)
    assert back == pytest.approx(vec)


def test_scaling_keeps_w():
    x, y, z, w = apply(scaling_matrix(2.0), (1.0, 1.0, 1.0, 1.0))
    assert (x, y, z, w) == pytest.approx((2.0, 2.0, 2.0, 1.0))


def test_orthographic_maps_near_and_far_planes():
    proj = orthographic_projection(0.1, 100.0)
    assert proj[0][0] == 1.0
    assert proj[1][1] == 1.0
    assert proj[3][3] == 1.0
    assert apply(proj, (0.0, 0.0, -0.1, 1.0))[2] == pytest.approx(-1.0)
    assert apply(proj, (0.0, 0.0, -100.0, 1.0))[2] == pytest.approx(1.0)


def test_grid_points_spacing():
    points = grid_points([[0, 0], [0, 5]])
    assert len(points) == 2 and len(points[0]) == 2
    assert tuple(points[0][0]) == (0.0, 0.0, 0.0)
    assert tuple(points[1][1]) == pytest.approx((0.1, 0.1, 0.5))


def test_average_height_positive():
    assert average_height([[-4, 10]]) == 3


def test_average_height_truncates_toward_zero():
    assert average_height([[-5, 0]]) == -2


def test_average_height_includes_zero():
    assert average_height([[4, 4], [4, 4]]) == 2


def _scene():
    return Scene.from_map(FdfMap(heights=[[0, 0, 0], [0, 10, 0], [0, 0, 0]]))


def test_from_map_center():
    scene = _scene()
    assert tuple(scene.center) == pytest.approx((0.1, 0.1, 0.5))


def test_center_is_fixed_under_rotation_and_scaling():
    scene = _scene()
    before = scene.project(scene.center)
    scene.x_angle, scene.y_angle, scene.z_angle = 0.4, 1.1, -0.3
    scene.scale = 2.5
    scene.rebuild()
    assert scene.project(scene.center) == pytest.approx(before)


def test_apply_keys_movement_and_rotation():
    scene = _scene()
    keys = KeyState(w=True, a=True, i=True, o=True, l=True)
    scene.apply_keys(keys)
    assert scene.pos.y == pytest.approx(0.0005)
    assert scene.pos.x == pytest.approx(-0.0005)
    assert scene.x_angle == pytest.approx(0.0005)
    assert scene.y_angle == pytest.approx(-0.0005)
    assert scene.z_angle == pytest.approx(0.0005)


def test_opposite_keys_cancel():
    scene = _scene()
    scene.apply_keys(KeyState(w=True, s=True, a=True, d=True, q=True, e=True))
    assert scene.pos.x == pytest.approx(0.0)
    assert scene.pos.y == pytest.approx(0.0)
    assert scene.scale == pytest.approx(1.0)


def test_scale_never_shrinks_below_limit():
    scene = _scene()
    scene.scale = 0.001
    scene.apply_keys(KeyState(e=True))
    assert scene.scale == 0.001


def test_screen_coords_shape_and_pan():
    scene = _scene()
    coords = scene.screen_coords(800, 600)
    assert len(coords) == 3 and all(len(row) == 3 for row in coords)
    scene.pos = scene.pos._replace(x=scene.pos.x + 0.5)
    scene.rebuild()
    moved = scene.screen_coords(800, 600)
    for row, moved_row in zip(coords, moved):
        for (x, y), (mx, my) in zip(row, moved_row):
            assert abs((mx - x) - 200) <= 1
            assert my == y