from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict

from modgraph.core.descriptors.store import DescriptorStore
from modgraph.core.errors import ResolutionError
from modgraph.core.graph.builder import build_module_graph
from modgraph.core.graph.models import ModuleGraph
from modgraph.core.graph.validator import ValidationReport, validate_module_graph
from modgraph.core.observability.metrics import record_resolution
from modgraph.core.resolution.closure import ClosureResult, compute_closures
from modgraph.core.resolution.scheduler import BuildPlan, schedule_build

from .lifecycle import ModuleLifecycle
from .state_machine import ModuleState

log = logging.getLogger("modgraph.pipeline")


def _ms(t0: float, t1: float) -> int:
    return int(round((t1 - t0) * 1000))


@dataclass
class ResolutionResult:
    graph: ModuleGraph
    report: ValidationReport
    closures: Dict[str, ClosureResult]
    plan: BuildPlan
    states: Dict[str, str] = field(default_factory=dict)
    timings_ms: Dict[str, int] = field(default_factory=dict)

    @property
    def plan_id(self) -> str:
        return self.plan.compute_plan_id()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan_id": self.plan_id,
            "plan_version": self.plan.plan_version,
            "stages": [list(s.modules) for s in self.plan.stages],
            "closures": {name: c.to_dict() for name, c in self.closures.items()},
        }


def resolve(store: DescriptorStore) -> ResolutionResult:
    """
    Store -> graph -> validation -> closures -> build plan.

    Any ResolutionError aborts the whole pass; no partial plan is returned.
    """
    t0_total = time.perf_counter()
    try:
        t0 = time.perf_counter()
        graph = build_module_graph(store)
        t1 = time.perf_counter()

        report = validate_module_graph(graph)
        t2 = time.perf_counter()
    except ResolutionError as e:
        record_resolution(e.code)
        log.info("pipeline.resolve failed code=%s modules=%s detail=%s", e.code, len(store), e)
        raise

    lifecycle = ModuleLifecycle(graph.names(), graph.static_dependencies)
    lifecycle.advance_all(report.order, ModuleState.GRAPHED)
    lifecycle.advance_all(report.order, ModuleState.VALIDATED)

    closures = compute_closures(graph)
    lifecycle.advance_all(report.order, ModuleState.CLOSURE_COMPUTED)
    t3 = time.perf_counter()

    plan = schedule_build(graph)
    lifecycle.advance_all(plan.all_modules(), ModuleState.SCHEDULED)
    t4 = time.perf_counter()

    timings = {
        "graph_build_ms": _ms(t0, t1),
        "validate_ms": _ms(t1, t2),
        "closure_ms": _ms(t2, t3),
        "schedule_ms": _ms(t3, t4),
        "total_ms": _ms(t0_total, time.perf_counter()),
    }
    record_resolution("ok")

    log.debug(
        "pipeline.resolve modules=%s edges=%s stages=%s graph_ms=%s validate_ms=%s closure_ms=%s schedule_ms=%s total_ms=%s",
        report.module_count,
        report.edge_count,
        len(plan.stages),
        timings["graph_build_ms"],
        timings["validate_ms"],
        timings["closure_ms"],
        timings["schedule_ms"],
        timings["total_ms"],
    )

    return ResolutionResult(
        graph=graph,
        report=report,
        closures=closures,
        plan=plan,
        states=lifecycle.snapshot(),
        timings_ms=timings,
    )
