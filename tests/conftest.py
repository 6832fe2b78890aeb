from pathlib import Path

import pytest

from modgraph.core.observability.metrics import reset_metrics

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("MODGRAPH_ENV", "dev")
    monkeypatch.setenv("MODGRAPH_WORKSPACE_ROOT", str(tmp_path / "workspace"))
    reset_metrics()


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES
