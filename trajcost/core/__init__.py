"""Core abstractions for trajectory cost evaluation."""

from trajcost.core.angles import wrap_to_pi
from trajcost.core.errors import (
    CostError,
    DimensionMismatchError,
    NonFiniteValueError,
    IntegrationError,
    StaleCostError,
    DegenerateWindowWarning,
)
from trajcost.core.layout import StateLayout
from trajcost.core.options import IntegratorOptions
from trajcost.core.tableau import ButcherTableau
from trajcost.core.protocols import (
    StateInterpolator,
    DesiredTrajectory,
    RunningCost,
    AngleWrap,
    StateAdapter,
)

__all__ = [
    "wrap_to_pi",
    "CostError",
    "DimensionMismatchError",
    "NonFiniteValueError",
    "IntegrationError",
    "StaleCostError",
    "DegenerateWindowWarning",
    "StateLayout",
    "IntegratorOptions",
    "ButcherTableau",
    "StateInterpolator",
    "DesiredTrajectory",
    "RunningCost",
    "AngleWrap",
    "StateAdapter",
]
