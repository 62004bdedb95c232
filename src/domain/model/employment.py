from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Employment:
    """Directed User → Company edge.

    A user holds at most one employment; employing them elsewhere replaces it.
    """
    user_id: str
    company_id: str
    created_at: datetime
    position: str | None = None
    since: date | None = None
