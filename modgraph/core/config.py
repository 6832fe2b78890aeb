from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = ("1", "true", "yes")


def env_flag(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(key: str, default: int) -> int:
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    env: str = "dev"
    workspace_root: Path = Path("workspace")
    max_workers: int = 4
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8001
    security_headers: bool = False

    @property
    def is_prod(self) -> bool:
        return self.env == "prod"

    @classmethod
    def from_env(cls) -> "Settings":
        env = (os.getenv("MODGRAPH_ENV") or "dev").strip().lower()
        return cls(
            env=env,
            workspace_root=Path((os.getenv("MODGRAPH_WORKSPACE_ROOT") or "workspace").strip()),
            max_workers=max(1, _env_int("MODGRAPH_MAX_WORKERS", 4)),
            log_level=(os.getenv("MODGRAPH_LOG_LEVEL") or "INFO").strip().upper(),
            host=(os.getenv("MODGRAPH_HOST") or "0.0.0.0").strip(),
            port=_env_int("MODGRAPH_PORT", 8001),
            security_headers=env_flag("MODGRAPH_SECURITY_HEADERS_ENABLED", default=(env == "prod")),
        )
