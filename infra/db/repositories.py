# infra/db/repositories.py
"""Compatibility wrapper for repository imports."""

from infra.db.availability import (
    SqlAlchemyAvailabilityCalendarRepository,
    SqlAlchemyDeveloperRepository,
    SqlAlchemyLeaveRepository,
)

__all__ = [
    "SqlAlchemyAvailabilityCalendarRepository",
    "SqlAlchemyDeveloperRepository",
    "SqlAlchemyLeaveRepository",
]
