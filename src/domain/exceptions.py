"""Base exception classes for the case-lifecycle domain layer.

Every failure the core raises belongs to exactly one error kind. The
boundary layer translates kinds into response status codes; the core never
deals with status codes itself.

Kinds:
    NotFoundError: A referenced entity does not exist.
    InvalidStateError: The operation is not legal in the current lifecycle state.
    ConflictError: A unique key would be duplicated.
    InvalidInputError: Missing or malformed fields, unknown enum values.
    ForbiddenError: A capability check failed (raised by the boundary).
    UnexpectedError: Anything unanticipated; always logged server-side.
"""


class CaseEngineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from one of the kind
    classes below rather than from this class directly.
    """

    title: str = "Case Engine Error"

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(CaseEngineError):
    """Raised when a referenced entity does not exist."""

    title = "Not Found"


class InvalidStateError(CaseEngineError):
    """Raised when an operation is not legal in the current lifecycle state."""

    title = "Invalid State"


class ConflictError(CaseEngineError):
    """Raised when an operation would duplicate a unique key."""

    title = "Conflict"


class InvalidInputError(CaseEngineError):
    """Raised for missing or malformed input and unknown enum values."""

    title = "Invalid Input"


class ForbiddenError(CaseEngineError):
    """Raised when the capability check for an actor fails."""

    title = "Forbidden"


class UnexpectedError(CaseEngineError):
    """Raised for unanticipated failures.

    The message is logged server-side and never returned to the caller.
    """

    title = "Internal Error"
