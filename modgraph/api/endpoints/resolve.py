from __future__ import annotations

from fastapi import APIRouter, HTTPException

from modgraph.api.schemas.resolve import (
    DependentsRequest,
    DependentsResponse,
    ResolveRequest,
    ResolveResponse,
    ValidateResponse,
)
from modgraph.core.descriptors.store import DescriptorStore
from modgraph.core.errors import ResolutionError
from modgraph.core.graph.builder import build_module_graph
from modgraph.core.graph.export import dependents_of, graph_to_dict
from modgraph.core.graph.validator import validate_module_graph
from modgraph.core.pipeline.resolver import resolve

router = APIRouter(prefix="/api/v1", tags=["Resolution"])


def _unprocessable(e: ResolutionError) -> HTTPException:
    return HTTPException(status_code=422, detail=e.to_dict())


@router.post("/resolve", response_model=ResolveResponse)
def resolve_modules(req: ResolveRequest):
    try:
        result = resolve(DescriptorStore(req.modules))
    except ResolutionError as e:
        raise _unprocessable(e)
    return result.to_dict()


@router.post("/validate", response_model=ValidateResponse)
def validate_modules(req: ResolveRequest):
    try:
        graph = build_module_graph(DescriptorStore(req.modules))
        report = validate_module_graph(graph)
    except ResolutionError as e:
        raise _unprocessable(e)
    return {
        "valid": True,
        "module_count": report.module_count,
        "edge_count": report.edge_count,
        "static_edge_count": report.static_edge_count,
        "order": list(report.order),
    }


@router.post("/graph")
def module_graph(req: ResolveRequest):
    try:
        graph = build_module_graph(DescriptorStore(req.modules))
    except ResolutionError as e:
        raise _unprocessable(e)
    return graph_to_dict(graph)


@router.post("/dependents", response_model=DependentsResponse)
def module_dependents(req: DependentsRequest):
    try:
        graph = build_module_graph(DescriptorStore(req.modules))
        validate_module_graph(graph)
        out = dependents_of(graph, req.module)
    except ResolutionError as e:
        raise _unprocessable(e)
    return {"module": req.module, "dependents": out}
