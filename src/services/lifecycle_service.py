"""Soft delete, restore and erase, applied the same way to every entity."""

from datetime import datetime, timezone
from logging import getLogger
from typing import Any, Callable

from domain.model.errors import NotFoundError
from domain.model.lifecycle import DeleteMode, RecordState, parse_mode, transition
from port.record_repository import RecordRepository

logger = getLogger(__name__)


def apply_delete_mode(
    repo: RecordRepository,
    record_id: str,
    mode: str | DeleteMode,
    on_erase: Callable[[str], None] | None = None,
    not_found_message: str = "This record does not exist",
) -> Any | None:
    """Move a record through its lifecycle.

    trash sets deleted_at, restore clears it, erase removes the record for
    good and then runs on_erase (e.g. avatar directory cleanup).

    Returns:
        The updated record, or None after an erase.

    Raises:
        ValidationError: unknown mode
        InvalidTransitionError: mode not allowed in the record's current state
        NotFoundError: record does not exist
    """
    mode = parse_mode(mode)

    record = repo.get_by_id(record_id)
    if record is None:
        raise NotFoundError(not_found_message)

    target = transition(record.state, mode)

    if target is RecordState.ERASED:
        if not repo.erase(record_id):
            raise NotFoundError(not_found_message)
        if on_erase:
            on_erase(record_id)
        logger.info("Record erased", extra={"recordId": record_id})
        return None

    deleted_at = datetime.now(timezone.utc) if target is RecordState.TRASHED else None
    updated = repo.set_deleted_at(record_id, deleted_at)
    if updated is None:
        raise NotFoundError(not_found_message)

    logger.info("Record lifecycle changed", extra={"recordId": record_id, "state": target.value})
    return updated
