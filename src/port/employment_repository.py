"""Port definition for the User → Company employment relationship."""

from datetime import date
from typing import Protocol

from domain.model.company import Company
from domain.model.employment import Employment
from domain.model.user import User


class EmploymentRepository(Protocol):
    def get(self, user_id: str) -> Employment | None: ...

    def employ(
        self,
        user_id: str,
        company_id: str,
        position: str | None = None,
        since: date | None = None,
    ) -> Employment | None:
        """Create or replace the user's employment. None if either side is missing."""
        ...

    def dismiss(self, user_id: str) -> bool: ...

    def company_of(self, user_id: str) -> Company | None: ...

    def users_of(self, company_id: str) -> list[User]: ...

    def colleagues_of(self, user_id: str) -> list[User]:
        """Users sharing the user's company (user → company → user), excluding the user."""
        ...
