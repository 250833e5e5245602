"""Running cost integrands l(x(t))."""

from typing import Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from trajcost.core.angles import wrap_to_pi
from trajcost.core.layout import StateLayout
from trajcost.core.protocols import AngleWrap, DesiredTrajectory, StateInterpolator


class QuadraticTrackingCost:
    """
    l(x(t)) = (x(t) - x_des(t))ᵀ Q (x(t) - x_des(t)).

    Reads the state from the interpolator at each evaluation, so the same
    object stays valid after the trajectory behind the interpolator changes.
    """

    def __init__(
        self,
        interpolator: StateInterpolator,
        desired: DesiredTrajectory,
        Q: ArrayLike,
        wrap_indices: Sequence[int] = (),
        angle_wrap: AngleWrap = wrap_to_pi,
    ):
        self.layout = StateLayout(P=Q, wrap_indices=tuple(wrap_indices))
        self.interpolator = interpolator
        self.desired = desired
        self.angle_wrap = angle_wrap

    def begin(self) -> float:
        return self.interpolator.begin()

    def end(self) -> float:
        return self.interpolator.end()

    def rate(self, t: float) -> float:
        """Instantaneous cost l(x(t))."""
        x = np.array(self.interpolator(t), dtype=float).ravel()
        for i in self.layout.wrap_indices:
            x[i] = self.angle_wrap(x[i])
        d = self.layout.as_vector(x) - self.layout.as_vector(self.desired(t), "desired state")
        return float(d @ self.layout.P @ d)

    def __call__(self, t: float, J: NDArray) -> NDArray:
        dJ = np.zeros_like(J, dtype=float)
        dJ[0] = self.rate(t)
        return dJ


class ConstantRunningCost:
    """l ≡ rate over the interpolator's window."""

    def __init__(self, interpolator: StateInterpolator, rate: float):
        self.interpolator = interpolator
        self.rate = float(rate)

    def begin(self) -> float:
        return self.interpolator.begin()

    def end(self) -> float:
        return self.interpolator.end()

    def __call__(self, t: float, J: NDArray) -> NDArray:
        dJ = np.zeros_like(J, dtype=float)
        dJ[0] = self.rate
        return dJ
