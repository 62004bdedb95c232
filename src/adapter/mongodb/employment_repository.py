"""MongoDB implementation of EmploymentRepository.

Employments live in their own collection keyed by user id, which keeps at
most one employment per user. Relationship queries are two lookups: the
edge(s) first, then the records on the other side.
"""

from datetime import date, datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import (
    COMPANIES_COLLECTION_NAME,
    EMPLOYMENTS_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
)
from adapter.mongodb.company_repository import MongoCompanyRepository, _date_to_datetime
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.company import Company
from domain.model.employment import Employment
from domain.model.user import User

logger = getLogger(__name__)


class MongoEmploymentRepository:
    def __init__(self, db: Database):
        self.collection = db[EMPLOYMENTS_COLLECTION_NAME]
        self.users = db[USERS_COLLECTION_NAME]
        self.companies = db[COMPANIES_COLLECTION_NAME]
        self._user_repo = MongoUserRepository(db)
        self._company_repo = MongoCompanyRepository(db)

    def ensure_indexes(self) -> bool:
        """Create indexes for employments collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('company_id', 1)], 'idx_employments_company_id')
            return True
        except Exception as e:
            logger.error("Failed to create employments indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Employment:
        since = doc.get('since')
        return Employment(
            user_id=doc['_id'],
            company_id=doc['company_id'],
            created_at=doc['created_at'],
            position=doc.get('position'),
            since=since.date() if isinstance(since, datetime) else since,
        )

    # ── write operations ─────────────────────────────────────

    def employ(
        self,
        user_id: str,
        company_id: str,
        position: str | None = None,
        since: date | None = None,
    ) -> Employment | None:
        try:
            if not self.users.count_documents({'_id': user_id}, limit=1):
                return None
            if not self.companies.count_documents({'_id': company_id}, limit=1):
                return None

            doc = {
                '_id': user_id,
                'company_id': company_id,
                'position': position,
                'since': _date_to_datetime(since) if since else None,
                'created_at': datetime.now(timezone.utc),
            }
            self.collection.replace_one({'_id': user_id}, doc, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to save employment", extra={
                "userId": user_id, "companyId": company_id, "error": str(e)
            })
            raise

        logger.info("Employment saved", extra={"userId": user_id, "companyId": company_id})
        return self._to_domain(doc)

    def dismiss(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to remove employment", extra={"userId": user_id, "error": str(e)})
            raise
        return result.deleted_count > 0

    # ── read operations ──────────────────────────────────────

    def get(self, user_id: str) -> Employment | None:
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get employment", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def company_of(self, user_id: str) -> Company | None:
        edge = self.get(user_id)
        if not edge:
            return None
        return self._company_repo.get_by_id(edge.company_id)

    def users_of(self, company_id: str) -> list[User]:
        return self._users_at(company_id)

    def colleagues_of(self, user_id: str) -> list[User]:
        edge = self.get(user_id)
        if not edge:
            return []
        return self._users_at(edge.company_id, excluding_id=user_id)

    def _users_at(self, company_id: str, excluding_id: str | None = None) -> list[User]:
        try:
            user_ids = [
                doc['_id']
                for doc in self.collection.find({'company_id': company_id}, {'_id': 1})
                if doc['_id'] != excluding_id
            ]
            if not user_ids:
                return []
            docs = self.users.find({'_id': {'$in': user_ids}}).sort('name', 1)
            return [self._user_repo._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list employees", extra={"companyId": company_id, "error": str(e)})
            raise
