from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Mapping, Optional

from modgraph.core.config import Settings
from modgraph.core.observability.metrics import record_module_outcome
from modgraph.core.resolution.closure import ClosureResult
from modgraph.core.resolution.scheduler import BuildPlan, BuildStage

from .events import BuildEvent, EventType
from .models import ExecutionReport, ModuleBuildRequest, ModuleOutcome, ModuleRecord

log = logging.getLogger("modgraph.execution")

BuildWorker = Callable[[ModuleBuildRequest], Any]


class StageRunner:
    """
    Runs a BuildPlan stage by stage.

    Modules of one stage run concurrently; a stage starts only after every
    module of the previous stage succeeded. When a module fails, siblings
    that already started run to completion, queued siblings are cancelled
    and no later stage is started. Cancelled and never-started modules are
    reported as SKIPPED.
    """

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is None:
            max_workers = Settings.from_env().max_workers
        self.max_workers = max(1, int(max_workers))
        self._lock = threading.Lock()

    def run(
        self,
        *,
        plan: BuildPlan,
        closures: Mapping[str, ClosureResult],
        worker: BuildWorker,
    ) -> ExecutionReport:
        plan_id = plan.compute_plan_id()
        report = ExecutionReport(plan_id=plan_id)
        for stage in plan.stages:
            for name in stage.modules:
                report.modules[name] = ModuleRecord(module=name, stage=stage.index)

        self._emit(report, "PlanCreated", payload={
            "stage_count": len(plan.stages),
            "module_count": len(report.modules),
        })

        aborted = threading.Event()

        t0 = time.perf_counter()
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="modgraph-build") as pool:
            for stage in plan.stages:
                if report.failed_stage is not None:
                    self._skip_stage(report, stage)
                    continue
                self._run_stage(pool, report, stage, closures, worker, aborted)

        total_ms = int(round((time.perf_counter() - t0) * 1000))
        if report.failed_stage is not None:
            self._emit(report, "BuildAborted", payload={"failed_stage": report.failed_stage, "total_ms": total_ms})
            log.warning("build aborted plan_id=%s failed_stage=%s total_ms=%s", plan_id, report.failed_stage, total_ms)
        else:
            self._emit(report, "BuildCompleted", payload={"total_ms": total_ms})
            log.info("build completed plan_id=%s modules=%s total_ms=%s", plan_id, len(report.modules), total_ms)

        return report

    # --- internals ---

    def _emit(self, report: ExecutionReport, event_type: EventType, **kwargs) -> None:
        ev = BuildEvent.mk(event_type, report.plan_id, **kwargs)
        with self._lock:
            report.events.append(ev)

    def _run_stage(
        self,
        pool: ThreadPoolExecutor,
        report: ExecutionReport,
        stage: BuildStage,
        closures: Mapping[str, ClosureResult],
        worker: BuildWorker,
        aborted: threading.Event,
    ) -> None:
        self._emit(report, "StageStarted", stage=stage.index, payload={"modules": list(stage.modules)})

        futures: Dict[Future, str] = {}
        for name in stage.modules:
            req = ModuleBuildRequest.from_closure(closures[name], stage.index)
            futures[pool.submit(self._run_module, report, req, worker, aborted)] = name

        for fut in as_completed(futures):
            name = futures[fut]
            rec = report.modules[name]

            if fut.cancelled():
                rec.outcome = ModuleOutcome.SKIPPED
                record_module_outcome(rec.outcome.value)
                self._emit(report, "ModuleSkipped", stage=stage.index, module=name)
                continue

            fut.result()
            if rec.outcome == ModuleOutcome.FAILED and report.failed_stage is None:
                report.failed_stage = stage.index
                for other in futures:
                    other.cancel()

        # barrier: every future above is done (finished or cancelled)
        self._emit(report, "StageCompleted", stage=stage.index, payload={
            "outcomes": {n: report.modules[n].outcome.value for n in stage.modules},
        })

    def _run_module(
        self,
        report: ExecutionReport,
        req: ModuleBuildRequest,
        worker: BuildWorker,
        aborted: threading.Event,
    ) -> None:
        rec = report.modules[req.module]
        if aborted.is_set():
            # a sibling already failed; never hand this module to the worker
            rec.outcome = ModuleOutcome.SKIPPED
            record_module_outcome(rec.outcome.value)
            self._emit(report, "ModuleSkipped", stage=req.stage, module=req.module)
            return

        rec.outcome = ModuleOutcome.RUNNING
        self._emit(report, "ModuleStarted", stage=req.stage, module=req.module)

        t0 = time.perf_counter()
        try:
            rec.output = worker(req)
        except Exception as e:
            rec.duration_ms = int(round((time.perf_counter() - t0) * 1000))
            rec.error = f"{type(e).__name__}: {e}"
            rec.outcome = ModuleOutcome.FAILED
            aborted.set()
            record_module_outcome(rec.outcome.value)
            log.warning("module build failed module=%s stage=%s error=%s", req.module, req.stage, rec.error)
            self._emit(report, "ModuleFailed", stage=req.stage, module=req.module, payload={"error": rec.error})
            return

        rec.duration_ms = int(round((time.perf_counter() - t0) * 1000))
        rec.outcome = ModuleOutcome.SUCCEEDED
        record_module_outcome(rec.outcome.value)
        self._emit(report, "ModuleSucceeded", stage=req.stage, module=req.module, payload={
            "duration_ms": rec.duration_ms,
        })

    def _skip_stage(self, report: ExecutionReport, stage: BuildStage) -> None:
        for name in stage.modules:
            report.modules[name].outcome = ModuleOutcome.SKIPPED
            record_module_outcome(ModuleOutcome.SKIPPED.value)
        self._emit(report, "StageCompleted", stage=stage.index, payload={"skipped": True})
