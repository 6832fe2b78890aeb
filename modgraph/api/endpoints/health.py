from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from modgraph.core.build_plan.persist import plans_dir
from modgraph.core.config import Settings
from modgraph.core.observability.metrics import inc_named

router = APIRouter()


@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive"}


@router.get("/api/v1/health/ready")
def readiness():
    """
    Readiness reflects ability to serve traffic: the plan workspace must be
    writable.
    """
    inc_named("health_ready")

    settings = Settings.from_env()
    problems: list[str] = []

    try:
        probe = plans_dir(settings.workspace_root) / ".ready_check.tmp"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
    except OSError as e:
        problems.append(f"workspace_not_writable:{settings.workspace_root} err={type(e).__name__}")

    if problems:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": problems},
        )

    return {"status": "ready", "env": settings.env}
