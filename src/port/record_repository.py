"""Operations every entity repository offers, whatever the backing store."""

from datetime import datetime
from typing import Any, Protocol


class RecordRepository(Protocol):
    def get_by_id(self, record_id: str) -> Any | None:
        """Return the record or None if it does not exist (trashed records included)."""
        ...

    def count_matching(self, field: str, value: Any, excluding_id: str | None = None) -> int:
        """Count records whose field equals value, skipping excluding_id."""
        ...

    def update(self, record_id: str, changes: dict[str, Any]) -> Any | None:
        """Apply a partial update and refresh updated_at. Return None if missing."""
        ...

    def set_deleted_at(self, record_id: str, deleted_at: datetime | None) -> Any | None:
        """Set or clear the soft-delete marker. Return None if missing."""
        ...

    def erase(self, record_id: str) -> bool:
        """Remove the record and its employment edges. Return True if it existed."""
        ...
