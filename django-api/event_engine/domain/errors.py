"""Domain error codes for the event engine."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    MISSION_NOT_FOUND = "MISSION_NOT_FOUND"
    ASSIGNMENT_NOT_FOUND = "ASSIGNMENT_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_OPERATION = "UNKNOWN_OPERATION"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    TRANSACTION_FAILURE = "TRANSACTION_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """A referenced entity or resource does not exist."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class MissionNotFoundError(NotFoundError):
    """Raised when a mission is not found under the given event."""

    def __init__(self, mission_id: str) -> None:
        super().__init__(code=ErrorCode.MISSION_NOT_FOUND, message="Mission not found")
        self.mission_id = mission_id


class AssignmentNotFoundError(NotFoundError):
    def __init__(self, assignment_id: str) -> None:
        super().__init__(
            code=ErrorCode.ASSIGNMENT_NOT_FOUND,
            message="Resource assignment not found",
        )
        self.assignment_id = assignment_id


class ResourceNotFoundError(NotFoundError):
    """Raised when a vehicle, venue or team does not exist."""

    def __init__(self, resource: str) -> None:
        super().__init__(code=ErrorCode.RESOURCE_NOT_FOUND, message="Resource not found")
        self.resource = resource


class ValidationError(DomainError):
    """Raised for missing or malformed input, before any transaction opens."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)
        self.field = field


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, field: str = "id") -> None:
        super().__init__(message=f"Invalid {field} format", field=field)
        self.code = ErrorCode.INVALID_ID


class UnknownOperationError(ValidationError):
    def __init__(self, operation: str) -> None:
        super().__init__(message="Invalid operation", field="operation")
        self.code = ErrorCode.UNKNOWN_OPERATION
        self.operation = operation


class InvalidTransitionError(DomainError):
    """Raised when a status change is not allowed from the current state."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Cannot move from {current} to {requested}",
        )
        self.current = current
        self.requested = requested


class ResourceConflictError(DomainError):
    """Raised when an assignment would double-book a resource.

    Carries every conflict found so the caller can present them.
    """

    def __init__(self, conflicts: list) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_CONFLICT,
            message="Resource is already booked for an overlapping time window",
        )
        self.conflicts = list(conflicts)


class TransactionFailureError(DomainError):
    """Raised when the storage transaction cannot commit.

    ``attempts`` is the number of tries made before giving up.
    """

    def __init__(self, attempts: int = 1) -> None:
        super().__init__(
            code=ErrorCode.TRANSACTION_FAILURE,
            message="The operation could not be completed, please retry",
        )
        self.attempts = attempts
