"""Trajectory tracking cost J1 = ∫ l(x(t)) dt + m(x(tf))."""

import logging
import warnings
from typing import Optional, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from trajcost.core.angles import wrap_to_pi
from trajcost.core.errors import (
    DegenerateWindowWarning,
    IntegrationError,
    NonFiniteValueError,
    StaleCostError,
)
from trajcost.core.layout import StateLayout
from trajcost.core.options import IntegratorOptions
from trajcost.core.protocols import (
    AngleWrap,
    DesiredTrajectory,
    RunningCost,
    StateAdapter,
    StateInterpolator,
)
from trajcost.cost.terminal import (
    TerminalPoint,
    evaluate_terminal_point,
    terminal_cost,
    terminal_gradient,
)
from trajcost.integrators.adaptive import DormandPrinceStrategy
from trajcost.integrators.base import IntegrationResult, IntegrationStrategy

logger = logging.getLogger(__name__)

STALE_POLICIES = ("raise", "refresh")


class CostEngine:
    """
    Keeps the tracking cost of the trajectory behind a state interpolator.

    The engine holds a borrowed reference to the interpolator; it never
    mutates it and the caller keeps it alive. After changing the trajectory
    the driver calls ``mark_stale()`` and ``update()``; ``float(engine)`` then
    gives J1 and ``get_dmdx()`` the terminal gradient.
    """

    def __init__(
        self,
        interpolator: StateInterpolator,
        running_cost: RunningCost,
        desired: DesiredTrajectory,
        P: ArrayLike,
        wrap_indices: Sequence[int] = (),
        strategy: Optional[IntegrationStrategy] = None,
        options: Optional[IntegratorOptions] = None,
        angle_wrap: AngleWrap = wrap_to_pi,
        adapter: Optional[StateAdapter] = None,
        stale_policy: str = "raise",
        accumulator_size: int = 1,
    ):
        """
        Initialize cost engine.

        Args:
            interpolator: State interpolator (borrowed, must outlive the engine)
            running_cost: Integrand l(x(t)) in fun(t, J) form
            desired: Desired trajectory x_des(t)
            P: Terminal weight matrix (n, n), symmetric PSD
            wrap_indices: Angular state components normalized before differencing
            strategy: Integration strategy (adaptive Dormand-Prince if omitted)
            options: Integrator options for the default strategy
            angle_wrap: Angle normalization applied to wrap_indices
            adapter: Raw state to (n,) vector projection (identity if omitted)
            stale_policy: "raise" or "refresh" on reading a stale cost
            accumulator_size: Slots integrated alongside the cost (slot 0 is J1)
        """
        if strategy is not None and options is not None:
            raise ValueError("pass options to the strategy, not to both")
        if stale_policy not in STALE_POLICIES:
            raise ValueError(
                f"stale_policy must be one of {STALE_POLICIES}, got {stale_policy!r}"
            )
        if accumulator_size < 1:
            raise ValueError("accumulator needs at least one slot")

        self.layout = StateLayout(P=P, wrap_indices=tuple(wrap_indices))
        self.interpolator = interpolator
        self.running_cost = running_cost
        self.desired = desired
        self.strategy = strategy if strategy is not None else DormandPrinceStrategy(options)
        self.angle_wrap = angle_wrap
        self.adapter = adapter
        self.stale_policy = stale_policy

        self._J = np.zeros(accumulator_size)
        self._steps = 0
        self._t0 = 0.0
        self._tf = 0.0
        self._fresh = False
        self._terminal: Optional[TerminalPoint] = None
        self.last_result: Optional[IntegrationResult] = None

    def get_term_cost(self) -> float:
        """m(x(tf)) = (x(tf) - x_des(tf))ᵀ P (x(tf) - x_des(tf))."""
        point = self._terminal_point()
        return terminal_cost(point.delta, self.layout.P, point.tf)

    def get_dmdx(self) -> NDArray:
        """D_x m(x(tf)) = (x(tf) - x_des(tf))ᵀ P, shape (1, n)."""
        point = self._terminal_point()
        return terminal_gradient(point.delta, self.layout.P, point.tf)

    def _terminal_point(self) -> TerminalPoint:
        """Terminal evaluation for the current tf, reused until invalidated."""
        self._read_window()
        if self._terminal is None or self._terminal.tf != self._tf:
            self._terminal = evaluate_terminal_point(
                self.interpolator,
                self.desired,
                self.layout,
                self._tf,
                self.angle_wrap,
                self.adapter,
            )
        return self._terminal

    def compute_cost(self, term_cost: NDArray) -> int:
        """
        Add ∫[t0, tf - eps] l(x(t)) dt to the seeded accumulator in place.

        Args:
            term_cost: Accumulator, slot 0 seeded with the terminal cost

        Returns:
            Number of integration steps

        Raises:
            IntegrationError: step or time budget exhausted; the partial
                integral has already been added to term_cost
            NonFiniteValueError: the integrand returned NaN/Inf or the
                accumulated cost overflowed
        """
        if (
            not isinstance(term_cost, np.ndarray)
            or term_cost.ndim != 1
            or term_cost.size == 0
        ):
            raise ValueError("accumulator must be a non-empty 1-D numpy array")
        if not np.issubdtype(term_cost.dtype, np.floating):
            raise ValueError(
                f"accumulator must have a floating dtype, got {term_cost.dtype}"
            )

        self._read_window()
        t0, t_end = self._t0, self._tf - self.strategy.options.eps

        if t_end <= t0:
            message = (
                f"integration window [{t0:.6g}, {self._tf:.6g}] is empty after "
                f"end-point backoff {self.strategy.options.eps:g}; running cost is 0"
            )
            warnings.warn(message, DegenerateWindowWarning, stacklevel=2)
            logger.warning(message)
            self.last_result = IntegrationResult(
                J=term_cost.copy(), steps=0, converged=True, t_reached=t0,
                message="degenerate window",
            )
            return 0

        result = self.strategy.integrate(
            self.running_cost, self.interpolator, term_cost, t0, t_end
        )
        if not np.all(np.isfinite(result.J)):
            raise NonFiniteValueError("running cost", result.t_reached)
        term_cost[:] = result.J
        self.last_result = result

        if not result.converged:
            logger.warning(
                "%s integration stopped at t=%.6g of %.6g: %s",
                self.strategy.name, result.t_reached, t_end, result.message,
            )
            raise IntegrationError(result)

        return result.steps

    def update(self) -> None:
        """
        Recompute J1 after state / control changes.

        On any failure the engine stays stale and the error propagates.
        """
        self._fresh = False
        self._terminal = None
        self._read_window()

        J = np.zeros_like(self._J)
        J[0] = m_tf = self.get_term_cost()
        steps = self.compute_cost(J)

        self._J = J
        self._steps = steps
        self._fresh = True
        logger.debug(
            "cost updated on [%.6g, %.6g]: terminal=%.6g total=%.6g steps=%d",
            self._t0, self._tf, m_tf, J[0], steps,
        )

    def mark_stale(self) -> None:
        """Declare that the trajectory changed since the last update()."""
        self._fresh = False
        self._terminal = None

    @property
    def is_fresh(self) -> bool:
        """True between a successful update() and the next mark_stale()."""
        return self._fresh

    @property
    def value(self) -> float:
        """J1 from the last update(), subject to the stale policy."""
        if not self._fresh:
            if self.stale_policy == "refresh":
                self.update()
            else:
                raise StaleCostError(
                    "cost read before update(); call update() after changing "
                    "the trajectory"
                )
        return float(self._J[0])

    def __float__(self) -> float:
        return self.value

    def steps(self) -> int:
        """Integration steps used by the last update()."""
        return self._steps

    @property
    def accumulator(self) -> NDArray:
        """Copy of the accumulator from the last update()."""
        return self._J.copy()

    @property
    def window(self) -> tuple[float, float]:
        """[t0, tf] as last read from the interpolator."""
        return self._t0, self._tf

    @property
    def terminal_state(self) -> Optional[NDArray]:
        """Wrapped x(tf) from the last terminal evaluation."""
        return None if self._terminal is None else self._terminal.x.copy()

    @property
    def desired_state(self) -> Optional[NDArray]:
        """x_des(tf) from the last terminal evaluation."""
        return None if self._terminal is None else self._terminal.x_des.copy()

    def _read_window(self) -> None:
        self._t0 = float(self.interpolator.begin())
        self._tf = float(self.interpolator.end())
