"""Base integration strategy interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional
import time
import numpy as np
from numpy.typing import NDArray

from trajcost.core.errors import NonFiniteValueError
from trajcost.core.options import IntegratorOptions
from trajcost.core.protocols import RunningCost, StateInterpolator


@dataclass
class IntegrationResult:
    """Outcome of one running cost integration."""

    J: NDArray          # accumulator at t_reached (seed + integral)
    steps: int
    converged: bool
    t_reached: float
    message: str = ""

    def integral(self, J0: NDArray) -> NDArray:
        """Contribution added on top of the seed J0."""
        return self.J - J0


class IntegrationStrategy(ABC):
    """Integrates a running cost integrand over [t0, t_end]."""

    name: str = "base"

    def __init__(self, options: Optional[IntegratorOptions] = None):
        self.options = options if options is not None else IntegratorOptions()

    @abstractmethod
    def integrate(
        self,
        integrand: RunningCost,
        interpolator: StateInterpolator,
        J0: NDArray,        # (k,) seeded accumulator
        t0: float,
        t_end: float,
    ) -> IntegrationResult:
        """
        Integrate dJ/dt = integrand(t, J) from t0 to t_end starting at J0.

        Args:
            integrand: Running cost right-hand side
            interpolator: State interpolator backing the integrand
            J0: Seeded accumulator, not modified
            t0: Start time
            t_end: End time, already backed off from tf (t_end > t0)

        Returns:
            Final accumulator, accepted step count and convergence flag
        """
        ...


def finite_rhs(integrand: RunningCost) -> Callable[[float, NDArray], NDArray]:
    """Wrap an integrand so NaN/Inf rates raise instead of propagating."""

    def rhs(t: float, J: NDArray) -> NDArray:
        dJ = np.asarray(integrand(t, J), dtype=float)
        if not np.all(np.isfinite(dJ)):
            raise NonFiniteValueError("running cost integrand", t)
        return dJ

    return rhs


class Budget:
    """Step and wall-clock bound shared by the strategies."""

    def __init__(self, options: IntegratorOptions):
        self.max_steps = options.max_steps
        self.max_wall_time = options.max_wall_time
        self._start = time.perf_counter()

    def exceeded(self, steps: int) -> Optional[str]:
        """Reason the budget is spent, or None."""
        if steps >= self.max_steps:
            return f"step limit of {self.max_steps} reached"
        if (
            self.max_wall_time is not None
            and time.perf_counter() - self._start > self.max_wall_time
        ):
            return f"wall-clock limit of {self.max_wall_time:g} s reached"
        return None
