from .lifecycle import ModuleLifecycle
from .resolver import ResolutionResult, resolve
from .state_machine import ModuleState

__all__ = ["ModuleLifecycle", "ModuleState", "ResolutionResult", "resolve"]
