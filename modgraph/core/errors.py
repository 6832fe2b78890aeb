from __future__ import annotations

from typing import Any, Dict, Sequence, Tuple


class ResolutionError(Exception):
    """
    Base for errors caused by the descriptor data itself.

    Every subclass is a structured value: callers render it via to_dict()
    instead of parsing the message.
    """

    code: str = "resolution_error"

    def fields(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), **self.fields()}


class UnknownModuleError(ResolutionError):
    code = "unknown_module"

    def __init__(self, module: str, referenced_name: str):
        self.module = module
        self.referenced_name = referenced_name
        super().__init__(f"Module '{module}' references unknown module '{referenced_name}'")

    def fields(self) -> Dict[str, Any]:
        return {"module": self.module, "referenced_name": self.referenced_name}


class ConflictingVisibilityError(ResolutionError):
    code = "conflicting_visibility"

    def __init__(self, module: str, dependency: str, visibilities: Sequence[str] = ()):
        self.module = module
        self.dependency = dependency
        self.visibilities: Tuple[str, ...] = tuple(visibilities)
        lists = " and ".join(self.visibilities) if self.visibilities else "more than one list"
        super().__init__(f"Module '{module}' declares '{dependency}' in {lists}")

    def fields(self) -> Dict[str, Any]:
        return {
            "module": self.module,
            "dependency": self.dependency,
            "visibilities": list(self.visibilities),
        }


class CyclicDependencyError(ResolutionError):
    code = "cyclic_dependency"

    def __init__(self, cycle: Sequence[str]):
        self.cycle: Tuple[str, ...] = tuple(cycle)
        super().__init__("Cyclic static dependency: " + " -> ".join(self.cycle))

    def fields(self) -> Dict[str, Any]:
        return {"cycle": list(self.cycle)}


class DuplicateModuleError(ResolutionError):
    code = "duplicate_module"

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"Duplicate module name: {module}")

    def fields(self) -> Dict[str, Any]:
        return {"module": self.module}


class DescriptorLoadError(ResolutionError):
    code = "descriptor_load_failed"

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Cannot load module descriptor from {source}: {detail}")

    def fields(self) -> Dict[str, Any]:
        return {"source": self.source, "detail": self.detail}


# --- internal defects (never user data problems) ---


class InvariantViolation(RuntimeError):
    pass


class SchedulingError(InvariantViolation):
    def __init__(self, remaining: Sequence[str]):
        self.remaining: Tuple[str, ...] = tuple(sorted(remaining))
        super().__init__(
            "Cycle reached the scheduler after validation; unscheduled modules: "
            + ", ".join(self.remaining)
        )


class IllegalTransitionError(InvariantViolation):
    def __init__(self, module: str, src: str, dst: str, reason: str = ""):
        self.module = module
        self.src = src
        self.dst = dst
        msg = f"Illegal transition for '{module}': {src} -> {dst}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
