"""Piecewise-linear state interpolation over stored samples."""

import numpy as np
from numpy.typing import ArrayLike, NDArray


class SampledTrajectory:
    """
    State trajectory stored as samples (t_i, x_i) and interpolated linearly.

    Queries outside [begin(), end()] are clamped to the end samples.
    """

    def __init__(self, times: ArrayLike, states: ArrayLike):
        self.replace(times, states)

    def replace(self, times: ArrayLike, states: ArrayLike) -> None:
        """
        Swap in a new set of samples.

        Args:
            times: Sample times (m,), strictly increasing
            states: Samples (m, n)
        """
        t = np.asarray(times, dtype=float).ravel()
        x = np.asarray(states, dtype=float)
        if x.ndim == 1:
            x = x[:, np.newaxis]
        if t.size == 0 or x.shape[0] != t.size:
            raise ValueError(
                f"need one state row per sample time, got {x.shape} for {t.size} times"
            )
        if np.any(np.diff(t) <= 0):
            raise ValueError("sample times must be strictly increasing")

        self._t = t
        self._x = x

    @property
    def state_dim(self) -> int:
        return self._x.shape[1]

    def begin(self) -> float:
        return float(self._t[0])

    def end(self) -> float:
        return float(self._t[-1])

    def nodes(self) -> NDArray:
        return self._t.copy()

    def __call__(self, t: float) -> NDArray:
        t = min(max(float(t), self._t[0]), self._t[-1])
        if self._t.size == 1:
            return self._x[0].copy()
        return np.array([np.interp(t, self._t, column) for column in self._x.T])
