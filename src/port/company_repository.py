from datetime import date
from typing import Protocol

from domain.model.company import Company
from domain.model.listing import ListOptions
from port.record_repository import RecordRepository


class CompanyRepository(RecordRepository, Protocol):
    """Protocol defining the interface for company data access."""
    def create(self, name: str, since: date) -> Company: ...

    def get_by_id(self, company_id: str) -> Company | None: ...

    def find_many(self, options: ListOptions) -> list[Company]: ...
