from .closure import ClosureResult, compute_closure, compute_closures
from .scheduler import BuildPlan, BuildStage, schedule_build

__all__ = [
    "ClosureResult",
    "compute_closure",
    "compute_closures",
    "BuildPlan",
    "BuildStage",
    "schedule_build",
]
