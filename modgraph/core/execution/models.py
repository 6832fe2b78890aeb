from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from modgraph.core.descriptors.models import PCHMode
from modgraph.core.resolution.closure import ClosureResult

from .events import BuildEvent


class ModuleOutcome(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class ModuleBuildRequest:
    """Everything the compile collaborator needs for one module."""

    module: str
    stage: int
    include_paths: Tuple[str, ...]
    link_dependencies: Tuple[str, ...]
    runtime_loaded: Tuple[str, ...]
    pch_mode: PCHMode

    @staticmethod
    def from_closure(closure: ClosureResult, stage: int) -> "ModuleBuildRequest":
        return ModuleBuildRequest(
            module=closure.module,
            stage=stage,
            include_paths=closure.include_paths,
            link_dependencies=closure.link_dependencies,
            runtime_loaded=closure.runtime_loaded,
            pch_mode=closure.pch_mode,
        )


@dataclass
class ModuleRecord:
    module: str
    stage: int
    outcome: ModuleOutcome = ModuleOutcome.PENDING
    duration_ms: Optional[int] = None
    error: Optional[str] = None
    output: Any = None


@dataclass
class ExecutionReport:
    plan_id: str
    modules: Dict[str, ModuleRecord] = field(default_factory=dict)
    events: List[BuildEvent] = field(default_factory=list)
    failed_stage: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.failed_stage is None and all(
            r.outcome == ModuleOutcome.SUCCEEDED for r in self.modules.values()
        )

    def outcomes(self) -> Dict[str, str]:
        return {name: r.outcome.value for name, r in self.modules.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "succeeded": self.succeeded,
            "failed_stage": self.failed_stage,
            "modules": {
                name: {
                    "stage": r.stage,
                    "outcome": r.outcome.value,
                    "duration_ms": r.duration_ms,
                    "error": r.error,
                }
                for name, r in self.modules.items()
            },
            "events": [vars(e) for e in self.events],
        }
