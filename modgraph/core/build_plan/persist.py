from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from modgraph.core.execution.events import now_utc_iso
from modgraph.core.pipeline.resolver import ResolutionResult

log = logging.getLogger("modgraph.plans")


def _modgraph_dir(workspace_dir: Path) -> Path:
    d = workspace_dir / ".modgraph"
    d.mkdir(parents=True, exist_ok=True)
    return d


def plans_dir(workspace_dir: Path) -> Path:
    d = _modgraph_dir(workspace_dir) / "plans"
    d.mkdir(parents=True, exist_ok=True)
    return d


def events_log(workspace_dir: Path) -> Path:
    return _modgraph_dir(workspace_dir) / "events.log"


def save_plan(workspace_dir: Path, result: ResolutionResult) -> str:
    plan_id = result.plan_id
    out = plans_dir(workspace_dir) / f"{plan_id}.json"

    payload: Dict[str, Any] = {
        **result.to_dict(),
        "created_ts": now_utc_iso(),
        "module_count": result.report.module_count,
        "edge_count": result.report.edge_count,
        "states": result.states,
        "timings_ms": result.timings_ms,
    }
    out.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    log.info("plan saved plan_id=%s path=%s", plan_id, out)
    return plan_id


def append_events(workspace_dir: Path, events: List[Dict[str, Any]]) -> None:
    """
    Append JSONL events to <workspace>/.modgraph/events.log.
    If the existing file doesn't end with a newline, add one first.
    """
    if not events:
        return

    log_path = events_log(workspace_dir)

    with log_path.open("ab+") as f:
        f.seek(0, 2)
        size = f.tell()
        if size > 0:
            f.seek(-1, 2)
            last = f.read(1)
            if last != b"\n":
                f.write(b"\n")

        for e in events:
            f.write((json.dumps(e) + "\n").encode("utf-8"))
