# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str,*, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class ComputationError(DomainError):
    """Raised when a calculation cannot finish with the given inputs."""


class CalendarNotFoundError(NotFoundError):
    """No availability calendar can be resolved for a developer."""


class InvalidCalendarError(ValidationError):
    """Calendar description cannot produce any working time."""


class InvalidTimeRangeError(ValidationError):
    """A measured range ends before it starts."""


class CalendarUnsatisfiableError(ComputationError):
    """The walking step budget ran out before the calculation finished."""
