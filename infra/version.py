from __future__ import annotations

import os
from importlib import metadata

DISTRIBUTION_NAME = "sla-deadline-engine"
_DEFAULT_APP_VERSION = "1.0.0"


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME) or None
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    """Version reported by /health and support events.

    ``SLA_APP_VERSION`` wins, then the installed distribution metadata.
    """
    env_override = (os.getenv("SLA_APP_VERSION") or "").strip()
    if env_override:
        return env_override
    return _installed_version() or _DEFAULT_APP_VERSION


__all__ = ["DISTRIBUTION_NAME", "get_app_version"]
