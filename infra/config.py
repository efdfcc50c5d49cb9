# infra/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.services.sla.service import DEFAULT_SLA_HOURS
from core.services.work_calendar.budget import DEFAULT_MAX_DAY_STEPS
from core.services.work_calendar.service import DEFAULT_LEAVE_LOOKAHEAD_DAYS
from infra.path import default_db_url


def _read(env: Mapping[str, str], name: str) -> Optional[str]:
    raw = (env.get(name) or "").strip()
    return raw or None


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = _read(env, name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc


@dataclass(frozen=True)
class EngineSettings:
    database_url: Optional[str] = None
    leave_lookahead_days: int = DEFAULT_LEAVE_LOOKAHEAD_DAYS
    default_sla_hours: float = DEFAULT_SLA_HOURS
    step_budget_days: int = DEFAULT_MAX_DAY_STEPS
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def resolved_database_url(self) -> str:
        # Resolved lazily so tests never touch the per-user data dir.
        return self.database_url or default_db_url()

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level {self.log_level!r}.")
        return level

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        env = os.environ if env is None else env
        return EngineSettings(
            database_url=_read(env, "SLA_DATABASE_URL"),
            leave_lookahead_days=_read_int(
                env, "SLA_LEAVE_LOOKAHEAD_DAYS", DEFAULT_LEAVE_LOOKAHEAD_DAYS
            ),
            default_sla_hours=_read_float(env, "SLA_DEFAULT_HOURS", DEFAULT_SLA_HOURS),
            step_budget_days=_read_int(env, "SLA_STEP_BUDGET_DAYS", DEFAULT_MAX_DAY_STEPS),
            log_level=_read(env, "SLA_LOG_LEVEL") or "INFO",
            api_host=_read(env, "SLA_API_HOST") or "127.0.0.1",
            api_port=_read_int(env, "SLA_API_PORT", 8000),
        )


__all__ = ["EngineSettings"]
