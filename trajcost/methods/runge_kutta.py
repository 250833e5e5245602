"""Standard explicit Runge-Kutta tableaux."""

import numpy as np
from trajcost.core.tableau import ButcherTableau


def explicit_euler() -> ButcherTableau:
    """Forward Euler method (1st order)."""
    return ButcherTableau(
        A=np.array([[0.0]]),
        b=np.array([1.0]),
        c=np.array([0.0]),
        order=1,
    )


def heun() -> ButcherTableau:
    """Heun's method (2nd order)."""
    A = np.array([
        [0.0, 0.0],
        [1.0, 0.0],
    ])
    return ButcherTableau(A=A, b=np.array([0.5, 0.5]), c=np.array([0.0, 1.0]), order=2)


def rk4() -> ButcherTableau:
    """Classic 4th-order Runge-Kutta method."""
    A = np.array([
        [0.0, 0.0, 0.0, 0.0],
        [0.5, 0.0, 0.0, 0.0],
        [0.0, 0.5, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
    ])
    b = np.array([1.0/6.0, 1.0/3.0, 1.0/3.0, 1.0/6.0])
    c = np.array([0.0, 0.5, 0.5, 1.0])
    return ButcherTableau(A=A, b=b, c=c, order=4)


TABLEAUX = {
    "euler": explicit_euler,
    "heun": heun,
    "rk4": rk4,
}


def get_tableau(name: str) -> ButcherTableau:
    """Look up a tableau by name."""
    try:
        return TABLEAUX[name]()
    except KeyError:
        raise ValueError(
            f"Unknown tableau {name!r}; choose from {sorted(TABLEAUX)}"
        ) from None
