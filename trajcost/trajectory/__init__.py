"""Reference trajectory collaborators."""

from trajcost.trajectory.sampled import SampledTrajectory
from trajcost.trajectory.running import QuadraticTrackingCost, ConstantRunningCost

__all__ = [
    "SampledTrajectory",
    "QuadraticTrackingCost",
    "ConstantRunningCost",
]
