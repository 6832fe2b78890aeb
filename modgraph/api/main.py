from __future__ import annotations

from fastapi import FastAPI

from modgraph.api.endpoints import health
from modgraph.api.endpoints import metrics as metrics_ep
from modgraph.api.endpoints.plans import router as plans_router
from modgraph.api.endpoints.resolve import router as resolve_router
from modgraph.api.middleware.error_shaping import SafeErrorMiddleware
from modgraph.api.middleware.request_context import RequestContextMiddleware, SecurityHeadersMiddleware
from modgraph.core.config import Settings

settings = Settings.from_env()

app = FastAPI(
    title="modgraph",
    version="0.1.0",
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST.
# Runtime order (outermost -> innermost):
#   SafeErrorMiddleware -> SecurityHeaders -> RequestContext -> handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SecurityHeadersMiddleware, enabled=settings.security_headers)
app.add_middleware(SafeErrorMiddleware)

app.include_router(health.router)
app.include_router(metrics_ep.router)
app.include_router(resolve_router)
app.include_router(plans_router)
