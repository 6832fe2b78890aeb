from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from modgraph.core.observability.metrics import snapshot_named, snapshot_requests

router = APIRouter()


def _render():
    req = snapshot_requests()
    body = {"requests": req}
    body.update(snapshot_named())

    for k in ("requests_total", "requests_GET", "requests_POST"):
        if k in req:
            body[k] = req[k]

    return body


@router.get("/api/v1/metrics/snapshot")
def metrics_snapshot_v1():
    """Process-local counters: HTTP requests, resolution outcomes, module outcomes."""
    return _render()


@router.get("/metrics", include_in_schema=False)
def metrics_scrape() -> Response:
    # text exposition of the default registry (HTTP, resolution and build counters)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
