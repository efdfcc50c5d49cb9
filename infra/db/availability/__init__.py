from infra.db.availability.mapper import (
    calendar_from_orm,
    calendar_to_orm,
    developer_from_orm,
    developer_to_orm,
    leave_from_orm,
    leave_to_orm,
)
from infra.db.availability.repository import (
    SqlAlchemyAvailabilityCalendarRepository,
    SqlAlchemyDeveloperRepository,
    SqlAlchemyLeaveRepository,
)

__all__ = [
    "calendar_from_orm",
    "calendar_to_orm",
    "developer_from_orm",
    "developer_to_orm",
    "leave_from_orm",
    "leave_to_orm",
    "SqlAlchemyAvailabilityCalendarRepository",
    "SqlAlchemyDeveloperRepository",
    "SqlAlchemyLeaveRepository",
]
