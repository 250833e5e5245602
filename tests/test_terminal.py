"""Tests for terminal cost and terminal gradient evaluation."""

import numpy as np
import pytest

from trajcost.cost.engine import CostEngine
from trajcost.core.errors import DimensionMismatchError, NonFiniteValueError


class HeldState:
    """Interpolator returning one stored state at every time in [t0, tf]."""

    def __init__(self, x, t0=0.0, tf=1.0):
        self.x = np.asarray(x, dtype=float)
        self.t0 = t0
        self.tf = tf
        self.calls = 0

    def begin(self):
        return self.t0

    def end(self):
        return self.tf

    def __call__(self, t):
        self.calls += 1
        return self.x.copy()

    def nodes(self):
        return np.linspace(self.t0, self.tf, 11)


class ZeroCost:
    """l(x) ≡ 0."""

    def __call__(self, t, J):
        return np.zeros_like(J)

    def begin(self):
        return 0.0

    def end(self):
        return 1.0


class Reference:
    """Constant desired state, counting queries."""

    def __init__(self, x_des):
        self.x_des = np.asarray(x_des, dtype=float)
        self.calls = 0

    def __call__(self, t):
        self.calls += 1
        return self.x_des.copy()


def make_engine(x, x_des, P, **kwargs):
    interp = HeldState(x)
    return CostEngine(interp, ZeroCost(), Reference(x_des), P, **kwargs), interp


def test_concrete_two_state_scenario():
    """N=2, P=I, x(tf)=(3,4), x_des=0: m = 25 and J1 = 25."""
    engine, _ = make_engine([3.0, 4.0], [0.0, 0.0], np.eye(2))

    assert engine.get_term_cost() == pytest.approx(25.0)

    engine.update()
    assert float(engine) == pytest.approx(25.0)
    assert engine.steps() >= 1


def test_zero_cost_and_gradient_on_target():
    """Terminal state equal to desired state (after wrapping) costs nothing."""
    x_des = np.array([0.5, -1.0, 2.0])
    x = x_des.copy()
    x[2] += 4.0 * np.pi  # same angle, unwrapped
    P = np.diag([1.0, 2.0, 3.0])

    engine, _ = make_engine(x, x_des, P, wrap_indices=[2])

    assert engine.get_term_cost() == pytest.approx(0.0, abs=1e-12)
    assert engine.get_dmdx().shape == (1, 3)
    assert np.allclose(engine.get_dmdx(), 0.0, atol=1e-12)


def test_weight_transpose_gives_same_cost():
    """For symmetric P the quadratic form is unchanged by P -> P^T."""
    rng = np.random.default_rng(0)
    M = rng.standard_normal((4, 4))
    P = M @ M.T
    x = rng.standard_normal(4)
    x_des = rng.standard_normal(4)

    engine, _ = make_engine(x, x_des, P)
    engine_t, _ = make_engine(x, x_des, P.T)

    assert engine.get_term_cost() == pytest.approx(engine_t.get_term_cost())
    assert np.allclose(engine.get_dmdx(), engine_t.get_dmdx())


def test_gradient_matches_finite_difference():
    """2 * dmdx · Δx predicts the change in m with an O(h²) remainder."""
    rng = np.random.default_rng(1)
    M = rng.standard_normal((3, 3))
    P = M @ M.T + np.eye(3)
    x = rng.standard_normal(3)
    x_des = rng.standard_normal(3)
    direction = rng.standard_normal(3)
    curvature = direction @ P @ direction

    engine, interp = make_engine(x, x_des, P)
    m0 = engine.get_term_cost()
    dmdx = engine.get_dmdx()

    for h in [1e-1, 1e-2, 1e-3]:
        dx = h * direction
        interp.x = x + dx
        engine.mark_stale()
        m1 = engine.get_term_cost()

        predicted = 2.0 * (dmdx @ dx).item()
        remainder = abs(m1 - m0 - predicted)
        assert remainder <= 1.01 * curvature * h ** 2 + 1e-12


@pytest.mark.parametrize(
    "raw_angle",
    [np.pi, -np.pi, 3.5 * np.pi, -7.25 * np.pi, 1e6, -1e-20, 123.456],
)
def test_wrapped_component_in_canonical_range(raw_angle):
    """Wrapped terminal components land in [-π, π) whatever the raw value."""
    engine, _ = make_engine([1.0, raw_angle], [0.0, 0.0], np.eye(2), wrap_indices=[1])

    engine.get_term_cost()
    theta = engine.terminal_state[1]

    assert -np.pi <= theta < np.pi
    assert np.isclose(np.cos(theta), np.cos(raw_angle))
    assert np.isclose(np.sin(theta), np.sin(raw_angle), atol=1e-9)
    # Unwrapped components are untouched
    assert engine.terminal_state[0] == 1.0


def test_custom_angle_wrap():
    """The angle normalization callable is pluggable."""
    to_unit_interval = lambda a: a % 1.0  # noqa: E731
    engine, _ = make_engine(
        [2.25, 0.0], [0.25, 0.0], np.eye(2), wrap_indices=[0], angle_wrap=to_unit_interval
    )
    assert engine.get_term_cost() == pytest.approx(0.0)


def test_adapter_projects_raw_state():
    """A variable-layout raw state is projected onto the fixed vector."""
    raw = [3.0, 4.0, 99.0, -99.0]  # trailing entries are not part of the cost
    engine, _ = make_engine(raw, [0.0, 0.0], np.eye(2), adapter=lambda r: r[:2])

    assert engine.get_term_cost() == pytest.approx(25.0)


def test_terminal_evaluation_is_cached_until_invalidated():
    """Cost and gradient share one interpolator/reference query per tf."""
    engine, interp = make_engine([3.0, 4.0], [1.0, 1.0], np.eye(2))
    desired = engine.desired

    engine.get_term_cost()
    engine.get_dmdx()
    engine.get_term_cost()
    assert interp.calls == 1
    assert desired.calls == 1

    engine.mark_stale()
    engine.get_dmdx()
    assert interp.calls == 2

    # A new final time is a cache miss
    interp.tf = 2.0
    engine.get_term_cost()
    assert interp.calls == 3
    assert engine.window == (0.0, 2.0)


def test_cached_and_fresh_results_agree():
    """Caching does not change observable values."""
    engine, interp = make_engine([1.0, -2.0], [0.5, 0.5], np.array([[2.0, 0.5], [0.5, 1.0]]))

    cached = (engine.get_term_cost(), engine.get_dmdx())
    engine.mark_stale()
    fresh = (engine.get_term_cost(), engine.get_dmdx())

    assert cached[0] == fresh[0]
    assert np.array_equal(cached[1], fresh[1])


def test_gradient_formula():
    """dmdx = (x - x_des)^T P."""
    P = np.array([[2.0, 1.0], [1.0, 3.0]])
    engine, _ = make_engine([1.0, 2.0], [0.0, 1.0], P)

    assert np.allclose(engine.get_dmdx(), [[3.0, 4.0]])
    assert engine.get_term_cost() == pytest.approx(5.0)


def test_degenerate_window_terminal_cost_still_evaluated():
    """tf == t0 is not an error for the terminal penalty."""
    engine, interp = make_engine([3.0, 4.0], [0.0, 0.0], np.eye(2))
    interp.t0 = interp.tf = 1.0

    assert engine.get_term_cost() == pytest.approx(25.0)


def test_non_finite_state_raises():
    engine, _ = make_engine([np.nan, 0.0], [0.0, 0.0], np.eye(2))

    with pytest.raises(NonFiniteValueError, match="state interpolator"):
        engine.get_term_cost()


def test_non_finite_reference_raises():
    engine, _ = make_engine([0.0, 0.0], [np.inf, 0.0], np.eye(2))

    with pytest.raises(NonFiniteValueError, match="desired trajectory"):
        engine.get_dmdx()


def test_overflowing_terminal_cost_raises():
    """|x(tf)|² beyond float range is reported, not returned as inf."""
    engine, _ = make_engine([1e200, 0.0], [0.0, 0.0], np.eye(2))

    with pytest.raises(NonFiniteValueError, match="terminal cost"):
        engine.get_term_cost()
    with pytest.raises(NonFiniteValueError, match="terminal cost"):
        engine.update()
    assert not engine.is_fresh


def test_overflowing_terminal_gradient_raises():
    engine, _ = make_engine([1e300, 0.0], [0.0, 0.0], np.diag([1e10, 1.0]))

    with pytest.raises(NonFiniteValueError, match="gradient"):
        engine.get_dmdx()


def test_state_dimension_mismatch_raises():
    engine, _ = make_engine([1.0, 2.0, 3.0], [0.0, 0.0], np.eye(2))

    with pytest.raises(DimensionMismatchError):
        engine.get_term_cost()


def test_reference_dimension_mismatch_raises():
    engine, _ = make_engine([1.0, 2.0], [0.0], np.eye(2))

    with pytest.raises(DimensionMismatchError):
        engine.get_term_cost()


@pytest.mark.parametrize(
    "P, wrap, error",
    [
        (np.ones((2, 3)), (), DimensionMismatchError),
        (np.eye(2), (2,), DimensionMismatchError),
        (np.eye(2), (-1,), DimensionMismatchError),
        (np.eye(2), (0, 0), DimensionMismatchError),
        (np.array([[1.0, 2.0], [0.0, 1.0]]), (), ValueError),
        (np.diag([1.0, -1.0]), (), ValueError),
    ],
)
def test_construction_rejects_bad_layout(P, wrap, error):
    """Bad weights or wrap indices fail at construction."""
    with pytest.raises(error):
        CostEngine(HeldState([0.0, 0.0]), ZeroCost(), Reference([0.0, 0.0]), P, wrap)
