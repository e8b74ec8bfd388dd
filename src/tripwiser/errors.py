"""
Custom exceptions and error handling for Tripwiser.

Defines application-specific exceptions with error codes so handlers can map
failures to HTTP responses without leaking internal detail to the client.

Usage:
    from tripwiser.errors import ValidationError, ErrorCode

    raise ValidationError("paid_by 'm9' is not a group member", code=ErrorCode.UNKNOWN_MEMBER)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Ledger validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_MEMBER = "UNKNOWN_MEMBER"
    SHARES_MISMATCH = "SHARES_MISMATCH"
    SELF_SETTLEMENT = "SELF_SETTLEMENT"
    UNBALANCED_LEDGER = "UNBALANCED_LEDGER"
    MEMBER_IN_USE = "MEMBER_IN_USE"

    # Request errors
    INVALID_REQUEST = "INVALID_REQUEST"

    # Lookup errors
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"

    # Write conflicts
    GROUP_CHANGED = "GROUP_CHANGED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.UNKNOWN_MEMBER: "An expense or settlement refers to someone who is not in this group.",
    ErrorCode.SHARES_MISMATCH: "The split amounts do not add up to the expense total.",
    ErrorCode.SELF_SETTLEMENT: "A settlement must be between two different members.",
    ErrorCode.UNBALANCED_LEDGER: "Group balances could not be reconciled. Please review recent expenses.",
    ErrorCode.MEMBER_IN_USE: "Cannot remove a member with existing expenses or settlements.",
    ErrorCode.INVALID_REQUEST: "Invalid request format. Please try again.",
    ErrorCode.GROUP_NOT_FOUND: "Group not found.",
    ErrorCode.TRIP_NOT_FOUND: "Trip not found.",
    ErrorCode.MEMBER_NOT_FOUND: "Member not found in this group.",
    ErrorCode.GROUP_CHANGED: "This group was changed by someone else. Please reload and try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class TripwiserError(Exception):
    """Base exception for all Tripwiser errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class ValidationError(TripwiserError):
    """Caller-supplied ledger data is inconsistent."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code=code)


class NotFoundError(TripwiserError):
    """A group, trip or member does not exist."""

    pass


class ConflictError(TripwiserError):
    """A conditional write lost to a concurrent change."""

    pass
