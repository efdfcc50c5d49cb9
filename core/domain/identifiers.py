from __future__ import annotations

import uuid


def generate_id() -> str:
    """Canonical UUID4 text, the key format of calendars, developers and leave."""
    return str(uuid.uuid4())


__all__ = ["generate_id"]
