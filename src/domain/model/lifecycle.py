from datetime import datetime
from enum import Enum

from domain.model.errors import FieldError, InvalidTransitionError, ValidationError


class RecordState(str, Enum):
    """Lifecycle state of a stored record."""
    ACTIVE = 'active'
    TRASHED = 'trashed'
    ERASED = 'erased'


class DeleteMode(str, Enum):
    """Modes accepted by DELETE requests."""
    ERASE = 'erase'
    TRASH = 'trash'
    RESTORE = 'restore'


_TRANSITIONS: dict[tuple[RecordState, DeleteMode], RecordState] = {
    (RecordState.ACTIVE, DeleteMode.TRASH): RecordState.TRASHED,
    (RecordState.TRASHED, DeleteMode.RESTORE): RecordState.ACTIVE,
    (RecordState.ACTIVE, DeleteMode.ERASE): RecordState.ERASED,
    (RecordState.TRASHED, DeleteMode.ERASE): RecordState.ERASED,
}


def state_of(deleted_at: datetime | None) -> RecordState:
    """Derive the state of a record that still exists in the store."""
    return RecordState.TRASHED if deleted_at is not None else RecordState.ACTIVE


def parse_mode(value: str | DeleteMode) -> DeleteMode:
    """Convert a raw mode string to DeleteMode.

    Raises:
        ValidationError: value is not one of erase, trash, restore
    """
    if isinstance(value, DeleteMode):
        return value
    try:
        return DeleteMode(value)
    except ValueError:
        allowed = ', '.join(m.value for m in DeleteMode)
        raise ValidationError(
            f"Unknown delete mode: {value!r}",
            [FieldError('mode', f"must be one of: {allowed}")],
        ) from None


def transition(state: RecordState, mode: DeleteMode) -> RecordState:
    """Return the state reached by applying mode to state.

    Raises:
        InvalidTransitionError: mode cannot be applied in this state
            (trashing a trashed record, restoring an active one, or
            touching an erased one)
    """
    try:
        return _TRANSITIONS[(state, mode)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot {mode.value} a record that is {state.value}",
            [FieldError('mode', f"{mode.value} is not allowed while {state.value}")],
        ) from None
