"""Domain semantic exceptions.

None of these derive from ``ValueError`` so that pydantic model validators
let them propagate unchanged instead of wrapping them.
"""


class DomainError(Exception):
    """Base domain exception."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input is malformed or out of range."""


class NotFound(DomainError):
    """Raised when a trip, item, invite or anchor does not exist."""


class Forbidden(DomainError):
    """Raised when the actor lacks the role an operation requires."""


class InvariantViolation(DomainError):
    """Raised when a transition would leave the trip in an invalid state."""


class EmailAlreadyRegistered(ValidationError):
    """Raised when signing up with an email that already has an account."""


__all__ = [
    "DomainError",
    "EmailAlreadyRegistered",
    "Forbidden",
    "InvariantViolation",
    "NotFound",
    "ValidationError",
]
