"""Circular space and range arithmetic."""

import numpy as np
import pytest

from mod_arith import Range, Space


def test_modulo_maps_into_space():
    space = Space(10)

    assert space.modulo(2) == 2
    assert space.modulo(12) == 2
    assert space.modulo(-2) == 8
    assert space.modulo(0) == 0
    assert space.modulo(10) == 0


def test_modulo_tiny_negative_stays_below_modulus():
    assert Space(360).modulo(-1e-20) == 0.0


def test_modulo_arrays():
    space = Space(360)
    np.testing.assert_allclose(space.modulo(np.array([-90.0, 0.0, 370.0, 720.0])), [270.0, 0.0, 10.0, 0.0])


def test_positive_distance():
    space = Space(10)

    assert space.positive_distance(1, 2) == 1
    assert space.positive_distance(2, 1) == 9
    assert space.positive_distance(9, 1) == 2
    assert space.positive_distance(1, 9) == 8
    assert space.positive_distance(1, 1) == 0
    assert space.positive_distance(10, 0) == 0
    assert space.positive_distance(20, 0) == 0
    assert space.positive_distance(1, -9) == 0
    assert space.positive_distance(22, 1) == 9


def test_positive_distance_is_not_symmetric():
    space = Space(360)
    assert space.positive_distance(350, 10) == 20
    assert space.positive_distance(10, 350) == 340


def test_range_stores_normalized_start_and_length():
    r = Space(360).range(-15, 15)
    assert r.start == 345
    assert r.length == 30
    assert r.end == 15


def test_range_contains():
    r = Range.between(Space(360), 90, 270)

    assert r.contains(180)
    assert r.contains(90)
    assert r.contains(270)
    assert r.contains(480)
    assert r.contains(-480)
    assert r.contains(-90)

    assert not r.contains(0)
    assert not r.contains(45)
    assert not r.contains(-45)
    assert not r.contains(405)
    assert not r.contains(-405)


def test_range_reversed_bounds_sweep_forward():
    r = Range.between(Space(360), 270, 90)
    assert not r.contains(180)
    assert r.contains(0)
    assert r.contains(300)


@pytest.mark.parametrize('hue', [350, 0, 10, 345, 15, 360, -5])
def test_wrapping_range_contains(hue):
    assert Space(360).range(345, 15).contains(hue)


@pytest.mark.parametrize('hue', [180, 344, 16, 90])
def test_wrapping_range_excludes(hue):
    assert not Space(360).range(345, 15).contains(hue)


def test_zero_length_range_is_full_circle():
    space = Space(360)
    for r in (space.range(0, 360), space.range(120, 120), space.range(0, 0)):
        assert r.full
        for hue in (0, 90, 180, 359.9, -720, 1e6):
            assert r.contains(hue)


def test_range_contains_array():
    r = Space(360).range(345, 15)
    mask = r.contains(np.array([350.0, 0.0, 10.0, 180.0]))
    np.testing.assert_array_equal(mask, [True, True, True, False])

    full = Space(360).range(0, 360).contains(np.array([1.0, 2.0, 3.0]))
    assert full.dtype == bool
    assert full.all()
