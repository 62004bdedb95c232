"""In-memory implementation of CompanyRepository for testing."""

import uuid
from datetime import date, datetime, timezone
from typing import Any

from adapter.fake.listing import apply_list_options
from domain.model.company import Company
from domain.model.listing import ListOptions

_UPDATABLE = {'name', 'since'}


class FakeCompanyRepository:
    def __init__(self):
        self.store: dict[str, Company] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, name: str, since: date) -> Company:
        company_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        company = Company(
            id=company_id,
            name=name,
            since=since,
            created_at=now,
            updated_at=now,
        )
        self.store[company_id] = company
        return company

    def update(self, company_id: str, changes: dict[str, Any]) -> Company | None:
        company = self.store.get(company_id)
        if not company:
            return None

        for key, value in changes.items():
            if key in _UPDATABLE:
                setattr(company, key, value)
        company.updated_at = datetime.now(timezone.utc)
        return company

    def set_deleted_at(self, company_id: str, deleted_at: datetime | None) -> Company | None:
        company = self.store.get(company_id)
        if not company:
            return None

        company.deleted_at = deleted_at
        company.updated_at = datetime.now(timezone.utc)
        return company

    def erase(self, company_id: str) -> bool:
        return self.store.pop(company_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, company_id: str) -> Company | None:
        return self.store.get(company_id)

    def find_many(self, options: ListOptions) -> list[Company]:
        return apply_list_options(self.store.values(), options)

    def count_matching(self, field: str, value: Any, excluding_id: str | None = None) -> int:
        return sum(
            1 for c in self.store.values()
            if getattr(c, field, None) == value and c.id != excluding_id
        )
