"""Terminal penalty m(x(tf)) and its state derivative."""

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional
import numpy as np
from numpy.typing import NDArray

from trajcost.core.errors import DimensionMismatchError, NonFiniteValueError
from trajcost.core.layout import StateLayout
from trajcost.core.protocols import (
    AngleWrap,
    DesiredTrajectory,
    StateAdapter,
    StateInterpolator,
)


@dataclass(frozen=True, eq=False)
class TerminalPoint:
    """Wrapped terminal state and desired state at one final time."""

    tf: float
    x: NDArray          # (n,) wrapped x(tf)
    x_des: NDArray      # (n,) x_des(tf)

    @cached_property
    def delta(self) -> NDArray:
        """x(tf) - x_des(tf)."""
        return self.x - self.x_des


def terminal_cost(delta: NDArray, P: NDArray, tf: Optional[float] = None) -> float:
    """
    (x - x_des)ᵀ P (x - x_des).

    Raises:
        NonFiniteValueError: the quadratic form overflows
    """
    with np.errstate(over="ignore", invalid="ignore"):
        m = float(delta @ P @ delta)
    if not np.isfinite(m):
        raise NonFiniteValueError("terminal cost", tf)
    return m


def terminal_gradient(
    delta: NDArray, P: NDArray, tf: Optional[float] = None
) -> NDArray:
    """
    D_x m = (x - x_des)ᵀ P as a (1, n) row vector.

    Half the exact derivative of the quadratic form, 2 (x - x_des)ᵀ P.

    Raises:
        NonFiniteValueError: the product overflows
    """
    with np.errstate(over="ignore", invalid="ignore"):
        dmdx = (delta @ P)[np.newaxis, :]
    if not np.all(np.isfinite(dmdx)):
        raise NonFiniteValueError("terminal cost gradient", tf)
    return dmdx


def evaluate_terminal_point(
    interpolator: StateInterpolator,
    desired: DesiredTrajectory,
    layout: StateLayout,
    tf: float,
    angle_wrap: AngleWrap,
    adapter: Optional[StateAdapter] = None,
) -> TerminalPoint:
    """
    Evaluate x(tf), wrap its angular components, adapt it to the fixed
    vector layout and pair it with x_des(tf).

    Raises:
        NonFiniteValueError: x(tf) or x_des(tf) contains NaN/Inf
        DimensionMismatchError: adapted vectors are not (n,)
    """
    raw = np.array(interpolator(tf), dtype=float).ravel()
    if layout.wrap_indices and raw.size <= layout.wrap_indices[-1]:
        raise DimensionMismatchError(
            f"interpolated state has {raw.size} components, "
            f"wrap index {layout.wrap_indices[-1]} out of range"
        )
    for i in layout.wrap_indices:
        raw[i] = angle_wrap(raw[i])

    adapt: Callable = adapter if adapter is not None else np.asarray
    x = layout.as_vector(adapt(raw), "terminal state")
    if not np.all(np.isfinite(x)):
        raise NonFiniteValueError("state interpolator", tf)

    x_des = layout.as_vector(desired(tf), "desired state")
    if not np.all(np.isfinite(x_des)):
        raise NonFiniteValueError("desired trajectory", tf)

    return TerminalPoint(tf=tf, x=x, x_des=x_des)
