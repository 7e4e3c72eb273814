"""
Exceptions raised by the fittrack data access layer.

Each exception carries a human-readable message, an error code for API
responses, the matching HTTP status code and optional details. Every
error can also be rendered as a user-facing notification.
"""

from enum import Enum
from typing import Any

from .notifications import Notification, Severity


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    WORKOUT_INCOMPLETE = "WORKOUT_INCOMPLETE"

    STORE_ERROR = "STORE_ERROR"


class FitTrackError(Exception):
    """
    Base exception for all fittrack errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    title = "Something went wrong"

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def to_notification(self, title: str | None = None) -> Notification:
        """Build the notification shown to the user for this failure."""
        return Notification(
            title=title or self.title,
            description=self.message,
            severity=Severity.DESTRUCTIVE,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class ValidationError(FitTrackError):
    """Raised when input is malformed (empty name, negative number)."""

    title = "Invalid input"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )
        self.field = field


class NotFoundError(FitTrackError):
    """Raised when a record does not exist or is not visible to the caller."""

    title = "Not found"

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, status_code=404, details=details)


class WorkoutNotFoundError(NotFoundError):
    """Raised when a workout id does not resolve."""

    def __init__(self, workout_id: str) -> None:
        super().__init__(
            message=f"Workout {workout_id} not found",
            code=ErrorCode.WORKOUT_NOT_FOUND,
            details={"workout_id": workout_id},
        )
        self.workout_id = workout_id


class AuthorizationError(FitTrackError):
    """Raised when the caller's identity does not own the record."""

    title = "Access denied"

    def __init__(
        self,
        message: str = "You do not have access to this record",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FORBIDDEN,
            status_code=403,
            details=details,
        )


class AuthenticationError(FitTrackError):
    """Raised when a request carries no authenticated identity."""

    title = "Sign in required"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message=message, code=ErrorCode.UNAUTHORIZED, status_code=401)


class StoreError(FitTrackError):
    """Raised when the underlying record store fails."""

    title = "Storage error"

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, status_code=500, details=details)


class IncompleteWorkoutError(StoreError):
    """Raised when a workout was saved but its exercise set was not."""

    title = "Workout saved without exercises"

    def __init__(self, workout_id: str, reason: str) -> None:
        super().__init__(
            message=f"Workout {workout_id} was created but its exercises were not saved: {reason}",
            code=ErrorCode.WORKOUT_INCOMPLETE,
            details={"workout_id": workout_id},
        )
        self.workout_id = workout_id
