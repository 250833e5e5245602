"""Cost evaluation."""

from trajcost.cost.engine import CostEngine
from trajcost.cost.terminal import (
    TerminalPoint,
    evaluate_terminal_point,
    terminal_cost,
    terminal_gradient,
)

__all__ = [
    "CostEngine",
    "TerminalPoint",
    "evaluate_terminal_point",
    "terminal_cost",
    "terminal_gradient",
]
