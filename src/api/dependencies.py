import os
from functools import lru_cache

from fastapi import HTTPException

from adapter.mongodb.company_repository import MongoCompanyRepository
from adapter.mongodb.connection import DATABASE_NAME, get_mongodb_client
from adapter.mongodb.employment_repository import MongoEmploymentRepository
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.neo4j.company_repository import Neo4jCompanyRepository
from adapter.neo4j.connection import get_neo4j_driver
from adapter.neo4j.employment_repository import Neo4jEmploymentRepository
from adapter.neo4j.user_repository import Neo4jUserRepository
from adapter.storage.local_avatar_storage import LocalAvatarStorage
from port.avatar_storage import AvatarStorage
from port.company_repository import CompanyRepository
from port.employment_repository import EmploymentRepository
from port.user_repository import UserRepository

BACKEND_MONGODB = 'mongodb'
BACKEND_NEO4J = 'neo4j'

STORE_BACKEND = os.getenv('STORE_BACKEND', BACKEND_MONGODB).lower()
STORAGE_ROOT = os.getenv('STORAGE_ROOT', 'storage')

if STORE_BACKEND not in (BACKEND_MONGODB, BACKEND_NEO4J):
    raise ValueError(
        f"STORE_BACKEND must be '{BACKEND_MONGODB}' or '{BACKEND_NEO4J}', got '{STORE_BACKEND}'"
    )


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def _get_driver():
    """Get Neo4j driver, raising 503 if unavailable."""
    driver = get_neo4j_driver()
    if driver is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return driver


def get_user_repo() -> UserRepository:
    if STORE_BACKEND == BACKEND_NEO4J:
        return Neo4jUserRepository(_get_driver())
    return MongoUserRepository(_get_db())


def get_company_repo() -> CompanyRepository:
    if STORE_BACKEND == BACKEND_NEO4J:
        return Neo4jCompanyRepository(_get_driver())
    return MongoCompanyRepository(_get_db())


def get_employment_repo() -> EmploymentRepository:
    if STORE_BACKEND == BACKEND_NEO4J:
        return Neo4jEmploymentRepository(_get_driver())
    return MongoEmploymentRepository(_get_db())


@lru_cache
def get_avatar_storage() -> AvatarStorage:
    return LocalAvatarStorage(STORAGE_ROOT)
