"""Neo4j schema setup, run once at app startup."""

from logging import getLogger

from neo4j import Driver

from adapter.neo4j.company_repository import Neo4jCompanyRepository
from adapter.neo4j.user_repository import Neo4jUserRepository

logger = getLogger(__name__)


def ensure_all_constraints(driver: Driver) -> bool:
    results = [
        Neo4jUserRepository(driver).ensure_constraints(),
        Neo4jCompanyRepository(driver).ensure_constraints(),
    ]
    if not all(results):
        logger.warning("Failed to create some Neo4j constraints")
    return all(results)
