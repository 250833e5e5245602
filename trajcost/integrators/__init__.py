"""Running cost integration strategies."""

from trajcost.integrators.base import IntegrationStrategy, IntegrationResult
from trajcost.integrators.adaptive import DormandPrinceStrategy
from trajcost.integrators.fixed import FixedStepStrategy
from trajcost.integrators.trapezoid import TrapezoidalStrategy
from trajcost.integrators.factory import create_strategy

__all__ = [
    "IntegrationStrategy",
    "IntegrationResult",
    "DormandPrinceStrategy",
    "FixedStepStrategy",
    "TrapezoidalStrategy",
    "create_strategy",
]
