"""Integration settings."""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class IntegratorOptions:
    """Tolerances, step sizes and termination bounds for running cost integration."""

    rtol: float = 1e-5
    atol: float = 1e-5
    first_step: float = 0.01     # initial step guess for the adaptive stepper
    eps: float = 1e-7            # end-point backoff: integrate to tf - eps
    max_steps: int = 100_000
    max_wall_time: Optional[float] = None  # seconds
    fixed_step: float = 0.01     # step size of the constant-step strategy

    def __post_init__(self) -> None:
        if self.rtol <= 0 or self.atol <= 0:
            raise ValueError("rtol and atol must be positive")
        if self.first_step <= 0 or self.fixed_step <= 0:
            raise ValueError("step sizes must be positive")
        if self.eps < 0:
            raise ValueError("eps must be non-negative")
        if self.max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        if self.max_wall_time is not None and self.max_wall_time <= 0:
            raise ValueError("max_wall_time must be positive")

    def with_overrides(self, **changes) -> "IntegratorOptions":
        """Copy with some fields replaced."""
        return replace(self, **changes)
