"""Custom exception hierarchy for the Chatterly application."""

from starlette import status


class ChatterlyError(Exception):
    """Base exception for all Chatterly application errors."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ChatterlyError):
    """Resource not found error."""

    code = "NOT_FOUND"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class SessionNotFoundError(NotFoundError):
    """Practice session not found, or not owned by the caller."""

    def __init__(self, session_id: int | None = None) -> None:
        """Initialize with session ID."""
        self.session_id = session_id
        if session_id is not None:
            super().__init__(f"Session with id {session_id} not found")
        else:
            super().__init__("Session not found")


class TurnNotFoundError(NotFoundError):
    """Learning turn not found within the given session."""

    def __init__(self, turn_id: int | None = None, session_id: int | None = None) -> None:
        """Initialize with turn and session IDs."""
        self.turn_id = turn_id
        self.session_id = session_id
        if turn_id is not None:
            super().__init__(f"Turn with id {turn_id} not found in session {session_id}")
        else:
            super().__init__("Turn not found")


class StoreError(ChatterlyError):
    """The persistence layer failed to read or write."""

    code = "DATABASE_ERROR"

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the failed operation name."""
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Store operation '{operation}' failed",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation},
        )


class UnauthorizedError(ChatterlyError):
    """No trusted user identity was supplied with the request."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required") -> None:
        """Initialize with 401 status code."""
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)
