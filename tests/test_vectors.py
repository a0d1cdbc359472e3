import math

import pytest

from cubecaster.vectors import Vector


def test_add_components():
    assert Vector(1, 2) + Vector(3, 4) == Vector(4, 6)


def test_add_is_commutative():
    a = Vector(0.5, -1.25)
    b = Vector(2.0, 3.5)
    assert a + b == b + a


def test_multiply_by_zero_gives_zero_vector():
    assert Vector(3.0, -7.0) * 0 == Vector(0.0, 0.0)


def test_multiply_by_one_is_identity():
    v = Vector(0.66, -0.25)
    assert v * 1 == v


def test_multiply_both_sides():
    v = Vector(1.5, -2.0)
    assert 2 * v == v * 2
    assert (v * 2).x == pytest.approx(v.x + v.x)


def test_multiply_then_add_is_distributive():
    a = Vector(0.3, 0.7)
    b = Vector(-1.1, 2.2)
    left = (a + b) * 3
    right = a * 3 + b * 3
    assert left.x == pytest.approx(right.x)
    assert left.y == pytest.approx(right.y)


@pytest.mark.parametrize("angle", [0, 3, 45, 90, 180, 270, -33.5])
def test_rotation_preserves_length(angle):
    v = Vector(0.0, -1.0)
    r = v.rotated(angle)
    assert math.hypot(r.x, r.y) == pytest.approx(math.hypot(v.x, v.y))


@pytest.mark.parametrize("angle", [3, 17.5, 90, -120])
def test_rotation_round_trip(angle):
    v = Vector(0.66, 0.0)
    back = v.rotated(angle).rotated(-angle)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_rotation_by_zero_is_identity():
    v = Vector(1.0, 0.0)
    r = v.rotated(0)
    assert r.x == pytest.approx(1.0)
    assert r.y == pytest.approx(0.0)


def test_rotation_full_turn_is_identity():
    v = Vector(-1.0, 0.0)
    r = v.rotated(360)
    assert r.x == pytest.approx(v.x)
    assert r.y == pytest.approx(v.y, abs=1e-12)


def test_rotation_keeps_perpendicularity():
    direction = Vector(0.0, -1.0)
    plane = Vector(0.66, 0.0)
    d = direction.rotated(25)
    p = plane.rotated(25)
    assert d.x * p.x + d.y * p.y == pytest.approx(0.0, abs=1e-12)


def test_vectors_are_immutable():
    v = Vector(1.0, 2.0)
    with pytest.raises(AttributeError):
        v.x = 5.0  # type: ignore[misc]
    assert v.x == 1.0
    assert v == Vector(1.0, 2.0)


def test_rotation_leaves_original_unchanged():
    v = Vector(1.0, 0.0)
    v.rotated(90)
    assert v == Vector(1.0, 0.0)