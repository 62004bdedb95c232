"""Company service — business logic for company records."""

from datetime import date
from logging import getLogger

from domain.model.company import Company
from domain.model.errors import NotFoundError
from domain.model.lifecycle import DeleteMode
from domain.model.listing import EntityKind, ListOptions
from port.company_repository import CompanyRepository
from services.lifecycle_service import apply_delete_mode

logger = getLogger(__name__)

COMPANY_NOT_FOUND = "This company does not exist"


def list_companies(
    repo: CompanyRepository,
    search: str | None = None,
    sort_by: str | None = None,
    limit: int | None = None,
) -> list[Company]:
    options = ListOptions.create(EntityKind.COMPANY, search=search, sort_by=sort_by, limit=limit)
    return repo.find_many(options)


def get_company(repo: CompanyRepository, company_id: str) -> Company:
    company = repo.get_by_id(company_id)
    if company is None:
        raise NotFoundError(COMPANY_NOT_FOUND)
    return company


def create_company(repo: CompanyRepository, name: str, since: date) -> Company:
    company = repo.create(name=name, since=since)
    logger.info("Company created", extra={"companyId": company.id})
    return company


def update_company(
    repo: CompanyRepository,
    company_id: str,
    name: str | None = None,
    since: date | None = None,
) -> Company:
    get_company(repo, company_id)

    changes: dict = {}
    if name:
        changes['name'] = name
    if since:
        changes['since'] = since

    updated = repo.update(company_id, changes)
    if updated is None:
        raise NotFoundError(COMPANY_NOT_FOUND)
    return updated


def delete_company(
    repo: CompanyRepository,
    company_id: str,
    mode: str | DeleteMode,
) -> Company | None:
    """trash / restore / erase a company. Erasing drops its employment edges."""
    return apply_delete_mode(repo, company_id, mode, not_found_message=COMPANY_NOT_FOUND)
