from .events import BuildEvent
from .models import ExecutionReport, ModuleBuildRequest, ModuleOutcome, ModuleRecord
from .runner import StageRunner

__all__ = [
    "BuildEvent",
    "ExecutionReport",
    "ModuleBuildRequest",
    "ModuleOutcome",
    "ModuleRecord",
    "StageRunner",
]
