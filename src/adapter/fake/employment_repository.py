"""In-memory implementation of EmploymentRepository for testing.

Edges whose user or company has been erased from the fake record stores are
dropped on every access, like DETACH DELETE in the graph store.
"""

from datetime import date, datetime, timezone

from adapter.fake.company_repository import FakeCompanyRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.company import Company
from domain.model.employment import Employment
from domain.model.user import User


class FakeEmploymentRepository:
    def __init__(self, users: FakeUserRepository, companies: FakeCompanyRepository):
        self.users = users
        self.companies = companies
        self._edges: dict[str, Employment] = {}

    @property
    def edges(self) -> dict[str, Employment]:
        for user_id, edge in list(self._edges.items()):
            if user_id not in self.users.store or edge.company_id not in self.companies.store:
                del self._edges[user_id]
        return self._edges

    # ── write operations ─────────────────────────────────────

    def employ(
        self,
        user_id: str,
        company_id: str,
        position: str | None = None,
        since: date | None = None,
    ) -> Employment | None:
        if user_id not in self.users.store or company_id not in self.companies.store:
            return None

        edge = Employment(
            user_id=user_id,
            company_id=company_id,
            created_at=datetime.now(timezone.utc),
            position=position,
            since=since,
        )
        self.edges[user_id] = edge
        return edge

    def dismiss(self, user_id: str) -> bool:
        return self.edges.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get(self, user_id: str) -> Employment | None:
        return self.edges.get(user_id)

    def company_of(self, user_id: str) -> Company | None:
        edge = self.edges.get(user_id)
        if not edge:
            return None
        return self.companies.store.get(edge.company_id)

    def users_of(self, company_id: str) -> list[User]:
        users = [
            self.users.store[e.user_id]
            for e in self.edges.values()
            if e.company_id == company_id
        ]
        return sorted(users, key=lambda u: u.name)

    def colleagues_of(self, user_id: str) -> list[User]:
        edge = self.edges.get(user_id)
        if not edge:
            return []
        return [u for u in self.users_of(edge.company_id) if u.id != user_id]
