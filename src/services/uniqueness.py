"""Uniqueness checks run before writes.

The check and the write that follows are separate store calls; two
concurrent requests carrying the same value can both pass.
"""

from typing import Any

from domain.model.errors import ConflictError
from port.record_repository import RecordRepository


def is_unique(
    repo: RecordRepository,
    field: str,
    value: Any,
    excluding_id: str | None = None,
) -> bool:
    """True if no record other than excluding_id has field == value."""
    return repo.count_matching(field, value, excluding_id=excluding_id) == 0


def ensure_unique(
    repo: RecordRepository,
    field: str,
    value: Any,
    excluding_id: str | None = None,
    message: str | None = None,
) -> None:
    """Raise ConflictError if value is already used by another record."""
    if not is_unique(repo, field, value, excluding_id=excluding_id):
        raise ConflictError(message or f"This {field} is already in use")
