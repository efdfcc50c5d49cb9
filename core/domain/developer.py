from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Developer:
    id: str
    name: str
    availability_calendar_id: Optional[str] = None
    timezone: str = "UTC"

    @staticmethod
    def create(
        name: str,
        availability_calendar_id: Optional[str] = None,
        timezone: str = "UTC",
    ) -> "Developer":
        return Developer(
            id=generate_id(),
            name=name.strip(),
            availability_calendar_id=availability_calendar_id,
            timezone=timezone,
        )


__all__ = ["Developer"]
