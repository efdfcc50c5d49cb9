# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.config import EngineSettings
from infra.path import user_data_dir
from infra.operational_support import (
    OperationalSupport,
    TraceIdLogFilter,
    get_operational_support,
)


def setup_logging(
    settings: EngineSettings | None = None,
    log_dir: Path | None = None,
    support: OperationalSupport | None = None,
) -> Path:
    """
    Configure root logging for the API process.
    Logs go to the per-user data directory unless ``log_dir`` is given.
    """
    settings = settings or EngineSettings.from_env()
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    logger = logging.getLogger()
    logger.setLevel(settings.log_level_value)
    logger.handlers.clear()

    trace_filter = TraceIdLogFilter()

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.addFilter(trace_filter)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s")
    )
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.addFilter(trace_filter)
    console.setFormatter(logging.Formatter("%(levelname)s [trace=%(trace_id)s]: %(message)s"))
    logger.addHandler(console)

    logger.info("Logging initialized at level %s. Log file at %s", settings.log_level.upper(), log_file)
    (support or get_operational_support()).emit_event(
        event_type="sla.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file), "log_level": settings.log_level.upper()},
    )
    return log_file
