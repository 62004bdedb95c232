from dataclasses import dataclass
from datetime import datetime

from domain.model.lifecycle import RecordState, state_of


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    avatar: str | None = None
    deleted_at: datetime | None = None

    @property
    def state(self) -> RecordState:
        return state_of(self.deleted_at)
