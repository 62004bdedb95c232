"""Shared MongoDB plumbing for User and Company repositories."""

from datetime import datetime, timezone
from logging import getLogger
from typing import Any

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import EMPLOYMENTS_COLLECTION_NAME
from adapter.mongodb.queries import build_list_query
from domain.model.listing import ListOptions

logger = getLogger(__name__)


class MongoRecordRepository:
    """Base class; subclasses set collection_name, updatable, _edge_filter and _to_domain."""

    collection_name: str
    updatable: frozenset[str] = frozenset()

    def __init__(self, db: Database):
        self.collection: Collection = db[self.collection_name]
        self.employments: Collection = db[EMPLOYMENTS_COLLECTION_NAME]

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Any:
        raise NotImplementedError

    def _edge_filter(self, record_id: str) -> dict:
        """Filter on the employments collection matching every edge of this record."""
        raise NotImplementedError

    def _to_document(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Hook for subclasses whose fields need conversion (e.g. date → datetime)."""
        return changes

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _find_and_set(self, record_id: str, update: dict, action: str) -> Any | None:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': record_id},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to {action}", extra={
                "collection": self.collection_name, "recordId": record_id, "error": str(e)
            })
            raise

        if doc is None:
            logger.warning(f"Record not found to {action}", extra={
                "collection": self.collection_name, "recordId": record_id
            })
            return None
        return self._to_domain(doc)

    def _insert(self, doc: dict) -> Any:
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to insert record", extra={
                "collection": self.collection_name, "error": str(e)
            })
            raise
        logger.info("Record created", extra={"collection": self.collection_name, "recordId": doc['_id']})
        return self._to_domain(doc)

    # ── write operations ─────────────────────────────────────

    def update(self, record_id: str, changes: dict[str, Any]) -> Any | None:
        """Partial update; unknown keys are ignored and updated_at is always refreshed."""
        fields = {k: v for k, v in changes.items() if k in self.updatable}
        fields = self._to_document(fields)
        fields['updated_at'] = self._now()
        return self._find_and_set(record_id, {'$set': fields}, 'update record')

    def set_deleted_at(self, record_id: str, deleted_at: datetime | None) -> Any | None:
        if deleted_at is None:
            update = {'$unset': {'deleted_at': ''}, '$set': {'updated_at': self._now()}}
            action = 'restore record'
        else:
            update = {'$set': {'deleted_at': deleted_at, 'updated_at': self._now()}}
            action = 'trash record'
        return self._find_and_set(record_id, update, action)

    def erase(self, record_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': record_id})
            if result.deleted_count == 0:
                return False
            edges = self.employments.delete_many(self._edge_filter(record_id))
        except PyMongoError as e:
            logger.error("Failed to erase record", extra={
                "collection": self.collection_name, "recordId": record_id, "error": str(e)
            })
            raise

        logger.info("Record erased", extra={
            "collection": self.collection_name,
            "recordId": record_id,
            "edgesRemoved": edges.deleted_count,
        })
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, record_id: str) -> Any | None:
        try:
            doc = self.collection.find_one({'_id': record_id})
        except PyMongoError as e:
            logger.error("Failed to get record", extra={
                "collection": self.collection_name, "recordId": record_id, "error": str(e)
            })
            raise
        return self._to_domain(doc) if doc else None

    def find_many(self, options: ListOptions) -> list[Any]:
        query = build_list_query(options)
        try:
            cursor = self.collection.find(query.filter)
            if query.sort:
                cursor = cursor.sort(query.sort)
            if query.limit:
                cursor = cursor.limit(query.limit)
            records = [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list records", extra={
                "collection": self.collection_name, "error": str(e)
            })
            raise

        logger.debug("Listed records", extra={"collection": self.collection_name, "count": len(records)})
        return records

    def count_matching(self, field: str, value: Any, excluding_id: str | None = None) -> int:
        query: dict = {field: value}
        if excluding_id is not None:
            query['_id'] = {'$ne': excluding_id}
        try:
            return self.collection.count_documents(query)
        except PyMongoError as e:
            logger.error("Failed to count records", extra={
                "collection": self.collection_name, "field": field, "error": str(e)
            })
            raise
