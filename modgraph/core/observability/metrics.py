from __future__ import annotations

from collections import Counter
from typing import Dict, Optional

from prometheus_client import Counter as PromCounter

# Requests counters (HTTP-level)
_REQUESTS = Counter()

# Named counters (custom)
_NAMED = Counter()

_PROM_RESOLUTIONS = PromCounter(
    "modgraph_resolutions_total",
    "Resolution passes by outcome (ok or error code)",
    ["outcome"],
)

_PROM_MODULES_BUILT = PromCounter(
    "modgraph_modules_built_total",
    "Modules handed to the build worker, by outcome",
    ["outcome"],
)


def reset_metrics() -> None:
    """
    Test helper: clears all counters to avoid cross-test leakage.
    Safe to call multiple times.
    """
    _REQUESTS.clear()
    _NAMED.clear()


def inc_http(method: str, path: str, status: Optional[int] = None) -> None:
    m = (method or "UNKNOWN").upper()
    p = path or "/"
    s = status if status is not None else "unknown"

    _REQUESTS["requests_total"] += 1
    _REQUESTS[f"requests_{m}"] += 1
    _REQUESTS[f"path_{p}|{s}"] += 1


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def record_resolution(outcome: str) -> None:
    inc_named(f"resolutions_{outcome}")
    _PROM_RESOLUTIONS.labels(outcome=outcome).inc()


def record_module_outcome(outcome: str) -> None:
    inc_named(f"modules_{outcome.lower()}")
    _PROM_MODULES_BUILT.labels(outcome=outcome.lower()).inc()


def snapshot_requests() -> Dict[str, int]:
    return dict(_REQUESTS)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
