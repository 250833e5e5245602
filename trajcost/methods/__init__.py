"""Library of Runge-Kutta tableaux."""

from trajcost.methods.runge_kutta import (
    explicit_euler,
    heun,
    rk4,
    get_tableau,
)

__all__ = [
    "explicit_euler",
    "heun",
    "rk4",
    "get_tableau",
]
