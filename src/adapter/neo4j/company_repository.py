"""Neo4j implementation of CompanyRepository."""

import uuid
from datetime import date
from typing import Any

from adapter.neo4j.connection import COMPANY_LABEL
from adapter.neo4j.record_repository import Neo4jRecordRepository
from domain.model.company import Company


def company_from_properties(props: dict[str, Any]) -> Company:
    return Company(
        id=props['id'],
        name=props['name'],
        since=props['since'],
        created_at=props['created_at'],
        updated_at=props['updated_at'],
        deleted_at=props.get('deleted_at'),
    )


class Neo4jCompanyRepository(Neo4jRecordRepository):
    label = COMPANY_LABEL
    updatable = frozenset({'name', 'since'})

    def _to_domain(self, props: dict[str, Any]) -> Company:
        return company_from_properties(props)

    def create(self, name: str, since: date) -> Company:
        now = self._now()
        return self._create({
            'id': uuid.uuid4().hex,
            'name': name,
            'since': since,
            'created_at': now,
            'updated_at': now,
        })
