"""Collaborator protocols consumed by the cost engine."""

from typing import Protocol, Any
from numpy.typing import NDArray


class StateInterpolator(Protocol):
    """Continuous-time view of a state trajectory over [begin(), end()]."""

    def begin(self) -> float:
        """Start of the validity window t0."""
        ...

    def end(self) -> float:
        """End of the validity window tf."""
        ...

    def __call__(self, t: float) -> NDArray:
        """State x(t), shape (n,). May be an unwrapped raw state."""
        ...

    def nodes(self) -> NDArray:
        """
        Sample times backing the interpolation.

        Only required by the trapezoidal integration strategy.
        """
        ...


class DesiredTrajectory(Protocol):
    """Reference trajectory x_des(t)."""

    def __call__(self, t: float) -> NDArray:
        """Desired state at time t, shape (n,)."""
        ...


class RunningCost(Protocol):
    """
    Running cost integrand l(x(t)).

    Follows the scipy ``fun(t, y)`` convention so it can be handed straight to
    an ODE stepper: J is the accumulator and the return value is dJ/dt with
    the same shape. Slot 0 carries l(x(t)).
    """

    def __call__(self, t: float, J: NDArray) -> NDArray:
        """Cost rate dJ/dt at time t."""
        ...

    def begin(self) -> float:
        """Start of the integration window (matches the interpolator)."""
        ...

    def end(self) -> float:
        """End of the integration window (matches the interpolator)."""
        ...


class AngleWrap(Protocol):
    """Normalize an angle into its canonical range."""

    def __call__(self, angle: float) -> float:
        ...


class StateAdapter(Protocol):
    """Project a raw state into the fixed (n,) vector of the quadratic form."""

    def __call__(self, raw_state: Any) -> NDArray:
        ...
