"""Angle normalization."""

import numpy as np
from numpy.typing import ArrayLike, NDArray


def wrap_to_pi(angle: ArrayLike) -> NDArray:
    """
    Map angles into [-π, π).

    Works elementwise on arrays; returns a numpy scalar for scalar input.
    """
    wrapped = np.mod(np.asarray(angle, dtype=float) + np.pi, 2.0 * np.pi) - np.pi
    # np.mod can round up to 2π for tiny negative inputs
    return np.where(wrapped >= np.pi, wrapped - 2.0 * np.pi, wrapped)[()]
