from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from modgraph.core.errors import InvariantViolation
from modgraph.core.observability.metrics import inc_named

log = logging.getLogger("modgraph.errors")


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _error_body(code: str, rid: Optional[str]) -> Dict[str, Any]:
    body: Dict[str, Any] = {"detail": "Internal Server Error", "code": code}
    if rid:
        body["request_id"] = rid
    return body


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence for the HTTP surface.

    Data problems never get here: endpoints turn ResolutionError into a 422.
    What does arrive is either a resolver defect (InvariantViolation, e.g. a
    cycle that reached the scheduler) or an unexpected crash. Both become a
    500 with a stable `code` and the request id; the traceback stays in the
    server log.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except InvariantViolation as e:
            rid = _request_id(request)
            inc_named("errors_internal_invariant_violation")
            log.critical(
                "resolver invariant violated type=%s rid=%s path=%s detail=%s",
                type(e).__name__,
                rid,
                request.url.path,
                e,
                exc_info=True,
            )
            return JSONResponse(status_code=500, content=_error_body("internal_invariant_violation", rid))
        except Exception as e:
            rid = _request_id(request)
            inc_named("errors_unhandled")
            log.error(
                "unhandled error type=%s rid=%s path=%s",
                type(e).__name__,
                rid,
                request.url.path,
                exc_info=True,
            )
            return JSONResponse(status_code=500, content=_error_body("internal_error", rid))
