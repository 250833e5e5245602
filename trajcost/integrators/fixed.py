"""Constant-step explicit Runge-Kutta integration."""

from typing import Callable, Optional
import numpy as np
from numpy.typing import NDArray

from trajcost.core.options import IntegratorOptions
from trajcost.core.protocols import RunningCost, StateInterpolator
from trajcost.core.tableau import ButcherTableau
from trajcost.integrators.base import (
    Budget,
    IntegrationResult,
    IntegrationStrategy,
    finite_rhs,
)
from trajcost.methods.runge_kutta import rk4


class FixedStepStrategy(IntegrationStrategy):
    """
    Explicit RK with step options.fixed_step.

    The final step is shortened to land on t_end. The step count is
    ceil((t_end - t0) / h), known before integrating.
    """

    name = "fixed"

    def __init__(
        self,
        options: Optional[IntegratorOptions] = None,
        tableau: Optional[ButcherTableau] = None,
    ):
        super().__init__(options)
        self.tableau = tableau if tableau is not None else rk4()
        if not self.tableau.is_explicit:
            raise ValueError("FixedStepStrategy requires an explicit tableau")

    def integrate(
        self,
        integrand: RunningCost,
        interpolator: StateInterpolator,
        J0: NDArray,
        t0: float,
        t_end: float,
    ) -> IntegrationResult:
        """March from t0 to t_end with constant steps."""
        rhs = finite_rhs(integrand)
        h = self.options.fixed_step
        budget = Budget(self.options)

        J = np.array(J0, dtype=float)
        t = t0
        steps = 0
        message = ""
        # Relative slack keeps round-off from adding a sliver step
        while t_end - t > 1e-12 * max(1.0, abs(t_end)):
            reason = budget.exceeded(steps)
            if reason is not None:
                message = reason
                break
            h_step = min(h, t_end - t)
            J = self._step(rhs, t, J, h_step)
            t += h_step
            steps += 1
        else:
            t = t_end

        return IntegrationResult(
            J=J,
            steps=steps,
            converged=not message,
            t_reached=float(t),
            message=message,
        )

    def _step(
        self,
        rhs: Callable[[float, NDArray], NDArray],
        t: float,
        J: NDArray,
        h: float,
    ) -> NDArray:
        """One explicit RK step via forward substitution over the stages."""
        A, b, c = self.tableau.A, self.tableau.b, self.tableau.c
        k = np.zeros((self.tableau.s, J.size))

        for i in range(self.tableau.s):
            # J_i = J + h Σ_{j<i} A[i,j] k_j
            J_i = J + h * (A[i, :i] @ k[:i])
            k[i] = rhs(t + c[i] * h, J_i)

        return J + h * (b @ k)
