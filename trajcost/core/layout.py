"""Fixed-dimension state layout: terminal weights and angular components."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Sequence
import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray

from trajcost.core.errors import DimensionMismatchError


@dataclass(frozen=True, eq=False)
class StateLayout:
    """
    Terminal weight matrix P and the indices of angular state components.

    The state dimension n is taken from P. P is copied and made read-only,
    so it stays constant for the lifetime of the layout.
    """

    P: NDArray                                   # (n, n) symmetric PSD
    wrap_indices: tuple[int, ...] = field(default=())
    psd_tol: float = 1e-10

    def __post_init__(self) -> None:
        P = np.array(self.P, dtype=float)
        if P.ndim != 2 or P.shape[0] != P.shape[1] or P.shape[0] == 0:
            raise DimensionMismatchError(
                f"terminal weight matrix must be square (n, n), got {P.shape}"
            )
        if not np.all(np.isfinite(P)):
            raise ValueError("terminal weight matrix has non-finite entries")
        if not np.allclose(P, P.T):
            raise ValueError("terminal weight matrix must be symmetric")

        # Smallest eigenvalue relative to the largest entry
        scale = max(1.0, float(np.max(np.abs(P))))
        if scipy.linalg.eigvalsh(P)[0] < -self.psd_tol * scale:
            raise ValueError("terminal weight matrix must be positive semi-definite")

        P.setflags(write=False)
        object.__setattr__(self, "P", P)
        object.__setattr__(
            self, "wrap_indices", _check_wrap_indices(self.wrap_indices, P.shape[0])
        )

    @cached_property
    def n(self) -> int:
        """State dimension."""
        return self.P.shape[0]

    def as_vector(self, x: ArrayLike, name: str = "state") -> NDArray:
        """Coerce x into a float (n,) vector, rejecting any other shape."""
        v = np.asarray(x, dtype=float)
        if v.ndim == 2 and 1 in v.shape:
            v = v.ravel()
        if v.shape != (self.n,):
            raise DimensionMismatchError(
                f"{name} has shape {np.shape(x)}, expected ({self.n},)"
            )
        return v


def _check_wrap_indices(indices: Sequence[int], n: int) -> tuple[int, ...]:
    """Validate angular component indices against the state dimension."""
    checked = []
    for i in indices:
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)):
            raise DimensionMismatchError(f"wrap index {i!r} is not an integer")
        if not 0 <= i < n:
            raise DimensionMismatchError(f"wrap index {i} outside [0, {n})")
        checked.append(int(i))
    if len(set(checked)) != len(checked):
        raise DimensionMismatchError(f"duplicate wrap indices in {tuple(indices)}")
    return tuple(sorted(checked))
