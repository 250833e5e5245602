"""Integration strategy factory."""

from typing import Optional

from trajcost.core.options import IntegratorOptions
from trajcost.integrators.adaptive import DormandPrinceStrategy
from trajcost.integrators.base import IntegrationStrategy
from trajcost.integrators.fixed import FixedStepStrategy
from trajcost.integrators.trapezoid import TrapezoidalStrategy
from trajcost.methods.runge_kutta import get_tableau


def create_strategy(
    name: str = "dopri5",
    options: Optional[IntegratorOptions] = None,
    tableau: str = "rk4",
) -> IntegrationStrategy:
    """
    Build an integration strategy by name.

    Args:
        name: "dopri5" (alias "adaptive"), "trapezoid" or "fixed"
        options: Tolerances and bounds (defaults if omitted)
        tableau: Tableau name for the fixed-step strategy

    Returns:
        Configured strategy
    """
    if name in ("dopri5", "adaptive"):
        return DormandPrinceStrategy(options)

    if name == "trapezoid":
        return TrapezoidalStrategy(options)

    if name == "fixed":
        return FixedStepStrategy(options, get_tableau(tableau))

    raise ValueError(
        f"Unknown integration strategy {name!r}; "
        "choose 'dopri5', 'trapezoid' or 'fixed'"
    )
