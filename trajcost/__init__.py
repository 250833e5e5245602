"""
Trajcost: trajectory tracking cost evaluation for receding-horizon control.

This library evaluates J1 = ∫ l(x(t)) dt + m(x(tf)) for a state trajectory
exposed through an interpolator, with support for:
- Quadratic terminal penalty with angle-wrapped state differences
- Terminal cost gradient for descent steps
- Adaptive, fixed-step or trapezoidal running cost integration
- Explicit refresh protocol with stale-read detection
"""

__version__ = "0.1.0"

from trajcost.core.layout import StateLayout
from trajcost.core.options import IntegratorOptions
from trajcost.cost.engine import CostEngine
from trajcost.integrators.factory import create_strategy

__all__ = [
    "StateLayout",
    "IntegratorOptions",
    "CostEngine",
    "create_strategy",
]
