"""Runge-Kutta Butcher tableau."""

from dataclasses import dataclass
from functools import cached_property
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, eq=False)
class ButcherTableau:
    """Runge-Kutta tableau."""

    A: NDArray      # (s, s) - stage coefficients
    b: NDArray      # (s,)   - solution weights
    c: NDArray      # (s,)   - abscissae
    order: int

    @cached_property
    def s(self) -> int:
        """Number of stages."""
        return self.A.shape[0]

    @cached_property
    def is_explicit(self) -> bool:
        """A strictly lower triangular."""
        return bool(np.allclose(self.A, np.tril(self.A, -1)))
