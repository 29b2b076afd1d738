import numpy as np
import pytest

from multilat.estimation.errors import MultilaterationError, SolveErrorKind
from multilat.estimation.levenberg_marquardt import SolverConfig
from multilat.estimation.multilateration import MultilaterationResult, multilaterate, solve
from multilat.estimation.types import Measurement, Point
from multilat.simulation.measurement import simulate_measurements


def _measurements(pairs):
    return [Measurement(Point(anchor), d) for anchor, d in pairs]


def _assert_near(point, expected, delta):
    assert len(point) == len(expected)
    for value, target in zip(point, expected):
        assert value == pytest.approx(target, abs=delta)


def test_four_anchors_2d():
    ms = _measurements([
        ((5.0, -6.0), 8.06),
        ((13.0, -15.0), 13.97),
        ((21.0, -3.0), 23.32),
        ((12.4, -21.2), 15.31),
    ])
    _assert_near(multilaterate(ms), (-0.6, -11.8), 1.0)


def test_small_circles_without_common_point():
    ms = _measurements([((1.0, 1.0), 0.5), ((3.0, 1.0), 0.5), ((2.0, 2.0), 0.5)])
    _assert_near(multilaterate(ms), (2.0, 1.0), 0.4)


def test_large_circles_without_common_point():
    ms = _measurements([((1.0, 1.0), 2.0), ((3.0, 1.0), 2.0), ((2.0, 2.0), 2.0)])
    _assert_near(multilaterate(ms), (2.0, 1.0), 2.0)


def test_duplicate_anchor():
    ms = _measurements([((1.0, 1.0), 1.0), ((1.0, 1.0), 1.0), ((3.0, 1.0), 1.0)])
    _assert_near(multilaterate(ms), (2.0, 1.0), 0.5)


def test_two_anchors():
    ms = _measurements([((1.0, 1.0), 1.0), ((3.0, 1.0), 1.0)])
    _assert_near(multilaterate(ms), (2.0, 1.0), 0.5)


def test_inconsistent_distances():
    ms = _measurements([((1.0, 1.0), 0.9), ((3.0, 1.0), 1.0), ((2.0, 2.0), 1.0)])
    _assert_near(multilaterate(ms), (2.0, 1.0), 0.1)


def test_three_dimensions():
    ms = _measurements([((1.0, 1.0, 1.0), 1.0), ((3.0, 1.0, 1.0), 1.0), ((2.0, 2.0, 1.0), 1.0)])
    _assert_near(multilaterate(ms), (2.0, 1.0, 1.0), 0.1)


def test_dimension_mismatch():
    ms = _measurements([((1.0, 1.0), 1.0), ((3.0, 1.0, 1.0), 1.0), ((2.0, 1.0), 1.0)])
    res = solve(ms)
    assert not res.ok
    assert res.position is None
    assert res.error.kind is SolveErrorKind.DIMENSION_MISMATCH
    assert res.iterations == 0


def test_zero_dimension():
    ms = _measurements([((), 1.0), ((), 1.0), ((), 1.0)])
    res = solve(ms)
    assert res.error.kind is SolveErrorKind.ZERO_DIMENSION
    with pytest.raises(MultilaterationError) as excinfo:
        res.unwrap()
    assert excinfo.value.kind is SolveErrorKind.ZERO_DIMENSION


def test_multilaterate_raises_on_mismatch():
    ms = _measurements([((1.0,), 1.0), ((1.0, 2.0), 1.0)])
    with pytest.raises(MultilaterationError, match="same dimensions"):
        multilaterate(ms)


def test_empty_measurements():
    assert solve([]).error.kind is SolveErrorKind.ZERO_DIMENSION


def test_failure_returns_no_position():
    ms = _measurements([((0.0, 0.0), 5.0), ((10.0, 0.0), 5.0), ((0.0, 10.0), 9.0)])
    res = solve(ms, SolverConfig(max_iterations=1))
    assert not res.ok
    assert res.position is None
    assert res.error.kind is SolveErrorKind.MAX_ITERATIONS_EXCEEDED


def test_result_reports_diagnostics():
    ms = _measurements([((0.0, 0.0), 5.0), ((10.0, 0.0), 5.0), ((5.0, 10.0), 5.0)])
    res = solve(ms)
    assert res.ok
    assert res.iterations >= 1
    assert res.final_cost >= 0.0


def test_deterministic():
    ms = _measurements([((5.0, -6.0), 8.06), ((13.0, -15.0), 13.97), ((21.0, -3.0), 23.32)])
    a = multilaterate(ms)
    b = multilaterate(ms)
    np.testing.assert_allclose(a.as_array(), b.as_array(), atol=1e-12)


def test_accepts_generator():
    pairs = [((0.0, 0.0), 5.0), ((10.0, 0.0), 5.0), ((5.0, 10.0), 5.0)]
    res = solve(Measurement(Point(a), d) for a, d in pairs)
    assert res.ok


@pytest.mark.parametrize(
    "true_position, anchors",
    [
        ((3.0, 4.0), [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]),
        ((-2.0, 1.0), [[-10.0, -5.0], [5.0, -5.0], [0.0, 12.0]]),
        ((3.0, 4.0, 5.0), [[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [0.0, 10.0, 0.0], [0.0, 0.0, 10.0]]),
        ((1.5,), [[0.0], [4.0]]),
    ],
)
def test_noise_free_recovers_true_position(true_position, anchors):
    ms = simulate_measurements(true_position, np.array(anchors))
    point = multilaterate(ms)
    assert point.dimension == len(true_position)
    np.testing.assert_allclose(point.as_array(), true_position, atol=1e-4)


def test_single_measurement_returns_anchor():
    res = solve(_measurements([((0.0, 0.0), 1.0)]))
    assert res.ok
    assert res.position == Point((0.0, 0.0))
    assert res.final_cost == pytest.approx(1.0)


def test_unwrap_rejects_empty_result():
    with pytest.raises(RuntimeError):
        MultilaterationResult(position=None, error=None).unwrap()
