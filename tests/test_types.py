import math

import numpy as np
import pytest

from multilat.estimation.types import Measurement, Point


def test_point_stores_float_tuple():
    p = Point([1, 2.5, -3])
    assert p.coordinates == (1.0, 2.5, -3.0)
    assert len(p) == 3
    assert p.dimension == 3
    assert p[1] == 2.5
    assert list(p) == [1.0, 2.5, -3.0]
    np.testing.assert_array_equal(p.as_array(), np.array([1.0, 2.5, -3.0]))


def test_point_is_immutable():
    p = Point((1.0, 2.0))
    with pytest.raises(AttributeError):
        p.coordinates = (0.0, 0.0)


def test_point_rejects_non_finite():
    with pytest.raises(ValueError):
        Point((1.0, math.nan))
    with pytest.raises(ValueError):
        Point((math.inf,))


def test_empty_point_allowed():
    assert Point(()).dimension == 0


def test_measurement_coerces_sequence_anchor():
    m = Measurement([1.0, 2.0], 3)
    assert isinstance(m.anchor, Point)
    assert m.anchor == Point((1.0, 2.0))
    assert m.distance == 3.0


def test_measurement_rejects_bad_distance():
    with pytest.raises(ValueError):
        Measurement(Point((0.0,)), -0.1)
    with pytest.raises(ValueError):
        Measurement(Point((0.0,)), math.nan)


def test_measurement_zero_distance_allowed():
    assert Measurement(Point((0.0,)), 0.0).distance == 0.0
