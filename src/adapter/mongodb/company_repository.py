"""MongoDB implementation of CompanyRepository."""

import uuid
from datetime import date, datetime, timezone
from logging import getLogger
from typing import Any

from adapter.mongodb.connection import COMPANIES_COLLECTION_NAME
from adapter.mongodb.record_repository import MongoRecordRepository
from domain.model.company import Company

logger = getLogger(__name__)


def _date_to_datetime(value: date) -> datetime:
    # BSON has no date-only type
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


class MongoCompanyRepository(MongoRecordRepository):
    collection_name = COMPANIES_COLLECTION_NAME
    updatable = frozenset({'name', 'since'})

    def ensure_indexes(self) -> bool:
        """Create indexes for companies collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('name', 1)], 'idx_companies_name')
            create_index_safe(self.collection, [('since', 1)], 'idx_companies_since')
            return True
        except Exception as e:
            logger.error("Failed to create companies indexes", extra={"error": str(e)})
            return False

    def _edge_filter(self, record_id: str) -> dict:
        return {'company_id': record_id}

    def _to_domain(self, doc: dict) -> Company:
        since = doc['since']
        return Company(
            id=doc['_id'],
            name=doc['name'],
            since=since.date() if isinstance(since, datetime) else since,
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            deleted_at=doc.get('deleted_at'),
        )

    def _to_document(self, changes: dict[str, Any]) -> dict[str, Any]:
        if isinstance(changes.get('since'), date):
            changes = {**changes, 'since': _date_to_datetime(changes['since'])}
        return changes

    def create(self, name: str, since: date) -> Company:
        now = self._now()
        return self._insert({
            '_id': uuid.uuid4().hex,
            'name': name,
            'since': _date_to_datetime(since),
            'created_at': now,
            'updated_at': now,
        })
