"""Error and warning types raised by the cost engine."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from trajcost.integrators.base import IntegrationResult


class CostError(Exception):
    """Base class for cost evaluation failures."""


class DimensionMismatchError(CostError, ValueError):
    """Weights, wrap indices or state vectors disagree with the state dimension."""


class NonFiniteValueError(CostError, ArithmeticError):
    """NaN or Inf produced by the interpolator, reference or integrand."""

    def __init__(self, source: str, t: Optional[float] = None):
        where = f" at t={t:.6g}" if t is not None else ""
        super().__init__(f"non-finite value from {source}{where}")
        self.source = source
        self.t = t


class IntegrationError(CostError, RuntimeError):
    """Running cost integration stopped before reaching the end of the window."""

    def __init__(self, result: "IntegrationResult"):
        super().__init__(
            f"running cost integration did not converge: {result.message} "
            f"(reached t={result.t_reached:.6g} after {result.steps} steps)"
        )
        self.result = result


class StaleCostError(CostError, RuntimeError):
    """Cost was read after the trajectory changed and before update()."""


class DegenerateWindowWarning(UserWarning):
    """Integration window is empty once the end-point backoff is applied."""
