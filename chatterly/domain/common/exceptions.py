"""
Domain layer exceptions.

Raised when input or state violates a rule of the practice domain. The
HTTP layer translates them into error responses; they never carry
transport concerns themselves.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when input is malformed.

    Example: a turn number below 1, or a payload session id that does not
    match the session in the URL.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidStateError(DomainError):
    """
    Raised when an operation is not legal in the aggregate's current state.

    Example: completing a session that has already ended.
    """

    code = "INVALID_STATE"

    def __init__(self, message: str, current_state: str, action: str) -> None:
        super().__init__(message, {"current_state": current_state, "action": action})
        self.current_state = current_state
        self.action = action


class InvariantViolationError(DomainError):
    """
    Raised when an aggregate invariant would be broken.

    Example: completed_turns exceeding total_turns.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant
