from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from modgraph.core.errors import SchedulingError
from modgraph.core.graph.models import ModuleGraph

PLAN_VERSION = "v1"


@dataclass(frozen=True)
class BuildStage:
    index: int
    # no static edges among these; sorted by name
    modules: Tuple[str, ...]


@dataclass(frozen=True)
class BuildPlan:
    stages: Tuple[BuildStage, ...] = field(default_factory=tuple)
    plan_version: str = PLAN_VERSION

    def all_modules(self) -> List[str]:
        return [m for s in self.stages for m in s.modules]

    def stage_of(self, name: str) -> Optional[int]:
        for s in self.stages:
            if name in s.modules:
                return s.index
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan_version": self.plan_version,
            "stages": [list(s.modules) for s in self.stages],
        }

    def compute_plan_id(self) -> str:
        return hashlib.sha256(json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")).hexdigest()


def schedule_build(graph: ModuleGraph) -> BuildPlan:
    """
    Layered Kahn sort over static edges. Each stage holds every module
    whose static dependencies all sit in earlier stages.
    """
    dependents = graph.dependents()
    in_degree: Dict[str, int] = {name: 0 for name in graph.modules}
    for e in graph.static_edges():
        in_degree[e.source] += 1

    ready = sorted(n for n, d in in_degree.items() if d == 0)
    stages: List[BuildStage] = []
    scheduled = 0

    while ready:
        stages.append(BuildStage(index=len(stages), modules=tuple(ready)))
        scheduled += len(ready)

        nxt: List[str] = []
        for current in ready:
            for dependent in dependents[current]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    nxt.append(dependent)
        ready = sorted(nxt)

    if scheduled != len(graph.modules):
        raise SchedulingError(remaining=[n for n, d in in_degree.items() if d > 0])

    return BuildPlan(stages=tuple(stages))
