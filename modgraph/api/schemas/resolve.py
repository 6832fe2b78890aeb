from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from modgraph.core.descriptors.models import ModuleDescriptor


class ResolveRequest(BaseModel):
    modules: List[ModuleDescriptor] = Field(default_factory=list)


class DependentsRequest(ResolveRequest):
    module: str = Field(min_length=1)


class ClosureOut(BaseModel):
    module: str
    include_paths: List[str]
    link_dependencies: List[str]
    runtime_loaded: List[str]
    pch_mode: str


class ResolveResponse(BaseModel):
    plan_id: str
    plan_version: str
    stages: List[List[str]]
    closures: Dict[str, ClosureOut]


class ValidateResponse(BaseModel):
    valid: bool
    module_count: int
    edge_count: int
    static_edge_count: int
    order: List[str] = Field(default_factory=list)


class DependentsResponse(BaseModel):
    module: str
    dependents: List[str]


class PlanSavedResponse(BaseModel):
    plan_id: str
    path: str
    stage_count: int


class PlanPointerOut(BaseModel):
    plan_id: str
    file_path: str
    created_ts: Optional[str] = None


class PlanListResponse(BaseModel):
    plans: List[PlanPointerOut]


class EventsResponse(BaseModel):
    events: List[Dict[str, Any]]
