from dataclasses import dataclass
from datetime import date, datetime

from domain.model.lifecycle import RecordState, state_of


@dataclass
class Company:
    """Domain model representing a company."""
    id: str
    name: str
    since: date
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def state(self) -> RecordState:
        return state_of(self.deleted_at)
