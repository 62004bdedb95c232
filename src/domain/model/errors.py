"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API layer maps them to HTTP status codes (see api/errors.py).
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class FieldError:
    """A single invalid input field."""
    field: str
    message: str


class ValidationError(DomainError):
    """Input violates a business validation rule.

    Carries every offending field so callers can report them in one response.
    """

    def __init__(self, message: str, errors: list[FieldError] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidTransitionError(ValidationError):
    """Requested lifecycle change is not allowed from the current state."""


class NotFoundError(DomainError):
    """Requested entity or relationship does not exist."""


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""
