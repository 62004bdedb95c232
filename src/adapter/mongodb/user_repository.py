"""MongoDB implementation of UserRepository."""

import uuid
from logging import getLogger

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.record_repository import MongoRecordRepository
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository(MongoRecordRepository):
    collection_name = USERS_COLLECTION_NAME
    updatable = frozenset({'name', 'email', 'password_hash', 'avatar'})

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            # Not unique: email uniqueness is checked by the service before writing
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email')
            create_index_safe(self.collection, [('name', 1)], 'idx_users_name')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _edge_filter(self, record_id: str) -> dict:
        # employments are keyed by user id
        return {'_id': record_id}

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
            avatar=doc.get('avatar'),
            deleted_at=doc.get('deleted_at'),
        )

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Create a new user and return the User object."""
        now = self._now()
        return self._insert({
            '_id': uuid.uuid4().hex,
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        })
