"""Seed the configured store with sample companies and employed users.

Wipes existing users, companies and avatars first.

Usage:
    PYTHONPATH=src python src/scripts/seed.py
    PYTHONPATH=src python src/scripts/seed.py --companies 5 --password secret1
    STORE_BACKEND=neo4j PYTHONPATH=src python src/scripts/seed.py
"""

import argparse
import logging
import random
import shutil
import sys
from datetime import date, timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.model.listing import EntityKind, ListOptions
from port.company_repository import CompanyRepository
from port.employment_repository import EmploymentRepository
from port.user_repository import UserRepository
from services import company_service, employment_service
from services.user_service import hash_password
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

COMPANY_WORDS = ["Northwind", "Bluefin", "Acme", "Globex", "Initech", "Umbrella", "Stark", "Wayne"]
COMPANY_SUFFIXES = ["Labs", "Systems", "Holdings", "Group", "Industries"]
FIRST_NAMES = ["Ann", "Ben", "Chloe", "Dev", "Elena", "Farid", "Grace", "Hugo", "Iris", "Jonas"]
LAST_NAMES = ["Berg", "Costa", "Dubois", "Evans", "Fischer", "Garcia", "Ito", "Kowalski"]
POSITIONS = ["Engineer", "Designer", "Manager", "Analyst", "Support"]


def _wipe(users: UserRepository, companies: CompanyRepository, storage_root: Path) -> None:
    for user in users.find_many(ListOptions.create(EntityKind.USER)):
        users.erase(user.id)
    for company in companies.find_many(ListOptions.create(EntityKind.COMPANY)):
        companies.erase(company.id)
    shutil.rmtree(storage_root / 'users', ignore_errors=True)


def seed(
    users: UserRepository,
    companies: CompanyRepository,
    employments: EmploymentRepository,
    company_count: int = 3,
    password: str = "123456",
    rng: random.Random | None = None,
) -> int:
    """Create company_count companies with 3-5 employees each. Return the number of users."""
    rng = rng or random.Random()
    password_hash = hash_password(password)
    created = 0

    for _ in range(company_count):
        since = date.today() - timedelta(days=rng.randint(365, 15 * 365))
        company = company_service.create_company(
            companies,
            name=f"{rng.choice(COMPANY_WORDS)} {rng.choice(COMPANY_SUFFIXES)}",
            since=since,
        )

        for _ in range(rng.randint(3, 5)):
            first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
            user = users.create(
                name=f"{first} {last}",
                email=f"{first}.{last}.{rng.randrange(10**6)}@example.com".lower(),
                password_hash=password_hash,
            )
            employment_service.employ(
                employments, users, companies, user.id, company.id,
                position=rng.choice(POSITIONS),
                since=since + timedelta(days=rng.randint(0, 365)),
            )
            created += 1

        logger.info("Seeded company", extra={"companyId": company.id})

    return created


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed users and companies")
    parser.add_argument("--companies", type=int, default=3, help="Number of companies to create")
    parser.add_argument("--password", type=str, default="123456", help="Password for every seeded user")
    parser.add_argument("--keep", action="store_true", help="Don't wipe existing records first")
    args = parser.parse_args()

    setup_structured_logging()

    from api.dependencies import (
        STORAGE_ROOT,
        get_company_repo,
        get_employment_repo,
        get_user_repo,
    )

    users, companies, employments = get_user_repo(), get_company_repo(), get_employment_repo()

    if not args.keep:
        _wipe(users, companies, Path(STORAGE_ROOT))

    count = seed(users, companies, employments, company_count=args.companies, password=args.password)
    print(f"Seeded {args.companies} companies and {count} users")
    return 0


if __name__ == "__main__":
    sys.exit(main())
