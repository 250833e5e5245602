"""Trapezoidal rule over the interpolator's sample times."""

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import trapezoid

from trajcost.core.protocols import RunningCost, StateInterpolator
from trajcost.integrators.base import IntegrationResult, IntegrationStrategy, finite_rhs


class TrapezoidalStrategy(IntegrationStrategy):
    """
    Sample the integrand at the trajectory's own nodes and apply the
    trapezoidal rule.

    No error control, but the number of integrand evaluations is bounded by
    the number of stored samples. The step count reported is the number of
    samples used.
    """

    name = "trapezoid"

    def integrate(
        self,
        integrand: RunningCost,
        interpolator: StateInterpolator,
        J0: NDArray,
        t0: float,
        t_end: float,
    ) -> IntegrationResult:
        """Integrate over interpolator nodes clipped to [t0, t_end]."""
        times = self.sample_times(interpolator, t0, t_end)
        message = ""
        if times.size > self.options.max_steps:
            times = times[: self.options.max_steps]
            message = f"step limit of {self.options.max_steps} reached"

        rhs = finite_rhs(integrand)
        J0 = np.array(J0, dtype=float)
        rates = np.array([rhs(t, J0) for t in times]).reshape(times.size, J0.size)
        J = J0 + trapezoid(rates, times, axis=0)

        return IntegrationResult(
            J=J,
            steps=int(times.size),
            converged=not message,
            t_reached=float(times[-1]),
            message=message,
        )

    @staticmethod
    def sample_times(
        interpolator: StateInterpolator, t0: float, t_end: float
    ) -> NDArray:
        """Interior nodes of the interpolator plus both end points."""
        nodes = getattr(interpolator, "nodes", None)
        if nodes is None:
            raise TypeError(
                f"{type(interpolator).__name__} does not expose nodes(); "
                "the trapezoidal strategy needs sample times"
            )
        t = np.asarray(nodes(), dtype=float).ravel()
        interior = t[(t > t0) & (t < t_end)]
        return np.unique(np.concatenate(([t0], interior, [t_end])))
