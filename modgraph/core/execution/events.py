from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional


EventType = Literal[
    "PlanCreated",
    "StageStarted",
    "ModuleStarted",
    "ModuleSucceeded",
    "ModuleFailed",
    "ModuleSkipped",
    "StageCompleted",
    "BuildAborted",
    "BuildCompleted",
]


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class BuildEvent:
    event_type: EventType
    ts: str
    plan_id: str
    stage: Optional[int] = None
    module: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def mk(
        event_type: EventType,
        plan_id: str,
        stage: Optional[int] = None,
        module: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> "BuildEvent":
        return BuildEvent(
            event_type=event_type,
            ts=now_utc_iso(),
            plan_id=plan_id,
            stage=stage,
            module=module,
            payload=payload or {},
        )
