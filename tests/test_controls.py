import math

import pytest

from cubecaster.controls import MOVE_SPEED, Key, Keys, Player
from cubecaster.vectors import Vector

ROOM = [
    "1111111",
    "1000001",
    "1000001",
    "1000001",
    "1000001",
    "1000001",
    "1111111",
]
CENTRE = Vector(3.5, 3.5)


@pytest.mark.parametrize(
    "key, flag",
    [
        (Key.LEFT, "left"),
        (Key.RIGHT, "right"),
        (Key.W, "w"),
        (Key.S, "s"),
        (Key.A, "a"),
        (Key.D, "d"),
        (Key.LEFT_SHIFT, "shift"),
    ],
)
def test_press_and_release(key, flag):
    keys = Keys()
    keys.press(key)
    assert getattr(keys, flag) is True
    keys.release(key)
    assert keys == Keys()


def test_escape_does_not_change_movement_keys():
    keys = Keys()
    keys.press(Key.ESCAPE)
    assert keys == Keys()


@pytest.mark.parametrize(
    "pov, direction, plane",
    [
        ("N", Vector(0, -1), Vector(0.66, 0)),
        ("S", Vector(0, 1), Vector(-0.66, 0)),
        ("W", Vector(-1, 0), Vector(0, -0.66)),
        ("E", Vector(1, 0), Vector(0, 0.66)),
    ],
)
def test_facing(pov, direction, plane):
    player = Player.facing(pov, CENTRE)
    assert player.direction == direction
    assert player.plane == plane
    assert player.pos == CENTRE


def test_facing_rejects_unknown_letter():
    with pytest.raises(ValueError):
        Player.facing("X", CENTRE)


def test_try_move_in_open_space():
    player = Player.facing("E", CENTRE)
    player.try_move(ROOM, Vector(1, 0), 0.5)
    assert player.pos == Vector(CENTRE.x + 0.5, CENTRE.y)


def test_try_move_blocked_by_wall():
    grid = ["111", "101", "111"]
    start = Vector(1.5, 1.5)
    player = Player.facing("E", start)
    player.try_move(grid, Vector(1, 0), 1.0)
    assert player.pos == start


def test_try_move_slides_along_wall():
    grid = ["1111", "1001", "1001", "1111"]
    player = Player.facing("E", Vector(2.5, 1.5))
    player.try_move(grid, Vector(1, 1), 0.8)
    assert player.pos.x == 2.5
    assert math.isclose(player.pos.y, 1.5 + 0.8)


def test_update_forward_uses_default_speed():
    player = Player.facing("E", CENTRE)
    keys = Keys()
    keys.press(Key.W)
    player.update(ROOM, keys)
    assert math.isclose(player.pos.x, CENTRE.x + MOVE_SPEED)
    assert player.pos.y == CENTRE.y


def test_sprint_multiplies_distance():
    walker = Player.facing("E", CENTRE)
    runner = Player.facing("E", CENTRE)
    walk, run = Keys(), Keys()
    walk.press(Key.W)
    run.press(Key.W)
    run.press(Key.LEFT_SHIFT)
    walker.update(ROOM, walk, 0.1, 2.0, 3.0)
    runner.update(ROOM, run, 0.1, 2.0, 3.0)
    assert math.isclose(runner.pos.x - CENTRE.x, 3.0 * (walker.pos.x - CENTRE.x))


def test_forward_and_back_cancel():
    player = Player.facing("N", CENTRE)
    keys = Keys()
    keys.press(Key.W)
    keys.press(Key.S)
    player.update(ROOM, keys)
    assert math.isclose(player.pos.x, CENTRE.x)
    assert math.isclose(player.pos.y, CENTRE.y)


def test_strafe_moves_along_plane():
    player = Player.facing("E", CENTRE)
    keys = Keys()
    keys.press(Key.D)
    player.update(ROOM, keys, 0.1)
    assert player.pos.x == CENTRE.x
    assert player.pos.y > CENTRE.y


def test_rotation_keeps_camera_perpendicular_and_reverses():
    player = Player.facing("N", CENTRE)
    keys = Keys()
    keys.press(Key.LEFT)
    player.update(ROOM, keys, rotate_speed=30.0)
    dot = player.direction.x * player.plane.x + player.direction.y * player.plane.y
    assert abs(dot) < 1e-9
    assert math.isclose(math.hypot(player.direction.x, player.direction.y), 1.0)
    assert player.direction != Vector(0, -1)
    keys.release(Key.LEFT)
    keys.press(Key.RIGHT)
    player.update(ROOM, keys, rotate_speed=30.0)
    assert math.isclose(player.direction.x, 0.0, abs_tol=1e-9)
    assert math.isclose(player.direction.y, -1.0)
    assert player.pos == CENTRE