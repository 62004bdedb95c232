"""Employment service — who works where, and with whom."""

from datetime import date
from logging import getLogger

from domain.model.company import Company
from domain.model.employment import Employment
from domain.model.errors import NotFoundError
from domain.model.user import User
from port.company_repository import CompanyRepository
from port.employment_repository import EmploymentRepository
from port.user_repository import UserRepository
from services.company_service import COMPANY_NOT_FOUND
from services.user_service import USER_NOT_FOUND

logger = getLogger(__name__)


def _require_user(users: UserRepository, user_id: str) -> None:
    if users.get_by_id(user_id) is None:
        raise NotFoundError(USER_NOT_FOUND)


def _require_company(companies: CompanyRepository, company_id: str) -> None:
    if companies.get_by_id(company_id) is None:
        raise NotFoundError(COMPANY_NOT_FOUND)


def company_of(employments: EmploymentRepository, users: UserRepository, user_id: str) -> Company:
    _require_user(users, user_id)
    company = employments.company_of(user_id)
    if company is None:
        raise NotFoundError("This user is not employed by any company")
    return company


def users_of(
    employments: EmploymentRepository,
    companies: CompanyRepository,
    company_id: str,
) -> list[User]:
    _require_company(companies, company_id)
    return employments.users_of(company_id)


def colleagues_of(employments: EmploymentRepository, users: UserRepository, user_id: str) -> list[User]:
    """Users working at the same company as user_id, never including user_id itself."""
    _require_user(users, user_id)
    return [u for u in employments.colleagues_of(user_id) if u.id != user_id]


def employ(
    employments: EmploymentRepository,
    users: UserRepository,
    companies: CompanyRepository,
    user_id: str,
    company_id: str,
    position: str | None = None,
    since: date | None = None,
) -> Employment:
    """Attach the user to a company, replacing any previous employment."""
    _require_user(users, user_id)
    _require_company(companies, company_id)

    employment = employments.employ(user_id, company_id, position=position, since=since)
    if employment is None:
        raise NotFoundError("User or company no longer exists")

    logger.info("User employed", extra={"userId": user_id, "companyId": company_id})
    return employment


def dismiss(employments: EmploymentRepository, users: UserRepository, user_id: str) -> None:
    _require_user(users, user_id)
    if not employments.dismiss(user_id):
        raise NotFoundError("This user is not employed by any company")
    logger.info("User dismissed", extra={"userId": user_id})
