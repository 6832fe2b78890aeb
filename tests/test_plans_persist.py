from pathlib import Path

import pytest

from helpers import make_store, mod
from modgraph.core.build_plan.persist import append_events, events_log, save_plan
from modgraph.core.build_plan.store import list_plans, load_plan, tail_events
from modgraph.core.pipeline.resolver import resolve


def _result():
    return resolve(make_store(mod("App", public_dependencies=["Core"]), mod("Core")))


def test_save_list_load_roundtrip(tmp_path: Path):
    result = _result()
    plan_id = save_plan(tmp_path, result)

    assert plan_id == result.plan_id
    ptrs = list_plans(tmp_path)
    assert [p.plan_id for p in ptrs] == [plan_id]
    assert ptrs[0].created_ts

    data = load_plan(tmp_path, plan_id)
    assert data["stages"] == [["Core"], ["App"]]
    assert data["closures"]["App"]["link_dependencies"] == ["Core"]
    assert data["states"] == {"App": "SCHEDULED", "Core": "SCHEDULED"}


def test_load_missing_or_malformed_plan_id(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_plan(tmp_path, "ab" * 32)
    with pytest.raises(FileNotFoundError):
        load_plan(tmp_path, "../../etc/passwd")


def test_append_events_repairs_missing_newline(tmp_path: Path):
    append_events(tmp_path, [{"event_type": "PlanCreated", "n": 1}])
    with events_log(tmp_path).open("ab") as f:
        f.write(b'{"event_type": "Partial", "n": 2}')

    append_events(tmp_path, [{"event_type": "PlanCreated", "n": 3}])

    events = tail_events(tmp_path)
    assert [e["n"] for e in events] == [1, 2, 3]
    assert tail_events(tmp_path, limit=1) == [{"event_type": "PlanCreated", "n": 3}]


def test_no_events_yet(tmp_path: Path):
    assert tail_events(tmp_path) == []
    append_events(tmp_path, [])
    assert not events_log(tmp_path).exists()
