from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .persist import events_log, plans_dir


@dataclass(frozen=True)
class PlanPointer:
    plan_id: str
    file_path: str
    created_ts: Optional[str] = None


def list_plans(workspace_dir: Path, limit: int = 50) -> List[PlanPointer]:
    files = sorted(plans_dir(workspace_dir).glob("*.json"), key=lambda p: p.stat().st_mtime, reverse=True)
    out: List[PlanPointer] = []
    for p in files[: max(1, min(limit, 200))]:
        data = json.loads(p.read_text(encoding="utf-8"))
        out.append(PlanPointer(plan_id=p.stem, file_path=str(p), created_ts=data.get("created_ts")))
    return out


def load_plan(workspace_dir: Path, plan_id: str) -> Dict[str, Any]:
    # plan ids are sha256 hex digests
    if not plan_id or not all(c in "0123456789abcdef" for c in plan_id):
        raise FileNotFoundError(f"Plan not found: {plan_id}")
    p = plans_dir(workspace_dir) / f"{plan_id}.json"
    if not p.exists():
        raise FileNotFoundError(f"Plan not found: {plan_id}")
    return json.loads(p.read_text(encoding="utf-8"))


def tail_events(workspace_dir: Path, limit: int = 200) -> List[Dict[str, Any]]:
    """Return the last N JSONL events from .modgraph/events.log."""
    path = events_log(workspace_dir)
    if not path.exists():
        return []
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    lines = lines[-max(1, min(limit, 2000)) :]
    return [json.loads(ln) for ln in lines if ln.strip()]
