from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, HTTPException, Query

from modgraph.api.schemas.resolve import EventsResponse, PlanListResponse, PlanSavedResponse, ResolveRequest
from modgraph.core.build_plan.persist import append_events, plans_dir, save_plan
from modgraph.core.build_plan.store import list_plans, load_plan, tail_events
from modgraph.core.config import Settings
from modgraph.core.descriptors.store import DescriptorStore
from modgraph.core.errors import ResolutionError
from modgraph.core.execution.events import BuildEvent
from modgraph.core.pipeline.resolver import resolve

router = APIRouter(prefix="/api/v1/plans", tags=["Plans"])


def _workspace_root() -> Path:
    return Settings.from_env().workspace_root


@router.post("", response_model=PlanSavedResponse)
def create_plan(req: ResolveRequest):
    try:
        result = resolve(DescriptorStore(req.modules))
    except ResolutionError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    ws = _workspace_root()
    plan_id = save_plan(ws, result)
    ev = BuildEvent.mk("PlanCreated", plan_id, payload={
        "stage_count": len(result.plan.stages),
        "module_count": result.report.module_count,
    })
    append_events(ws, [vars(ev)])

    return {
        "plan_id": plan_id,
        "path": str(plans_dir(ws) / f"{plan_id}.json"),
        "stage_count": len(result.plan.stages),
    }


@router.get("", response_model=PlanListResponse)
def get_plans(limit: int = Query(50, ge=1, le=200)):
    return {"plans": [vars(p) for p in list_plans(_workspace_root(), limit=limit)]}


@router.get("/events", response_model=EventsResponse)
def get_events(limit: int = Query(200, ge=1, le=2000)):
    return {"events": tail_events(_workspace_root(), limit=limit)}


@router.get("/{plan_id}")
def get_plan(plan_id: str):
    try:
        return load_plan(_workspace_root(), plan_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
