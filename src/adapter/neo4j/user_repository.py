"""Neo4j implementation of UserRepository."""

import uuid
from typing import Any

from adapter.neo4j.connection import USER_LABEL
from adapter.neo4j.record_repository import Neo4jRecordRepository
from domain.model.user import User


def user_from_properties(props: dict[str, Any]) -> User:
    return User(
        id=props['id'],
        name=props['name'],
        email=props['email'],
        created_at=props['created_at'],
        updated_at=props['updated_at'],
        password_hash=props.get('password_hash'),
        avatar=props.get('avatar'),
        deleted_at=props.get('deleted_at'),
    )


class Neo4jUserRepository(Neo4jRecordRepository):
    label = USER_LABEL
    updatable = frozenset({'name', 'email', 'password_hash', 'avatar'})

    def _to_domain(self, props: dict[str, Any]) -> User:
        return user_from_properties(props)

    def create(self, name: str, email: str, password_hash: str) -> User:
        now = self._now()
        return self._create({
            'id': uuid.uuid4().hex,
            'name': name,
            'email': email,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        })
