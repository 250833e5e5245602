"""Adaptive Dormand-Prince integration."""

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import RK45

from trajcost.core.protocols import RunningCost, StateInterpolator
from trajcost.integrators.base import (
    Budget,
    IntegrationResult,
    IntegrationStrategy,
    finite_rhs,
)


class DormandPrinceStrategy(IntegrationStrategy):
    """
    Embedded RK 5(4) with local error control.

    Drives scipy's RK45 stepper one accepted step at a time so the step count
    and wall-clock time can be bounded.
    """

    name = "dopri5"

    def integrate(
        self,
        integrand: RunningCost,
        interpolator: StateInterpolator,
        J0: NDArray,
        t0: float,
        t_end: float,
    ) -> IntegrationResult:
        """Integrate adaptively, returning the accepted step count."""
        opts = self.options
        stepper = RK45(
            finite_rhs(integrand),
            t0,
            np.array(J0, dtype=float),
            t_end,
            first_step=min(opts.first_step, t_end - t0),
            rtol=opts.rtol,
            atol=opts.atol,
        )

        budget = Budget(opts)
        steps = 0
        message = ""
        while stepper.status == "running":
            reason = budget.exceeded(steps)
            if reason is not None:
                message = reason
                break
            failure = stepper.step()
            if stepper.status == "failed":
                message = failure or "step failed"
                break
            steps += 1

        return IntegrationResult(
            J=np.array(stepper.y, dtype=float),
            steps=steps,
            converged=stepper.status == "finished",
            t_reached=float(stepper.t),
            message=message,
        )
