"""Neo4j implementation of EmploymentRepository.

Employment is a (:User)-[:WORK_AT]->(:Company) relationship carrying
position, since and created_at properties.
"""

from datetime import date, datetime, timezone
from logging import getLogger

from neo4j import Driver, RoutingControl
from neo4j.exceptions import Neo4jError

from adapter.neo4j.connection import COMPANY_LABEL, DATABASE_NAME, USER_LABEL, WORK_AT
from adapter.neo4j.company_repository import company_from_properties
from adapter.neo4j.record_repository import node_properties, to_native
from adapter.neo4j.user_repository import user_from_properties
from domain.model.company import Company
from domain.model.employment import Employment
from domain.model.user import User

logger = getLogger(__name__)

_EMPLOY = f"""
MATCH (u:{USER_LABEL} {{id: $user_id}}), (c:{COMPANY_LABEL} {{id: $company_id}})
OPTIONAL MATCH (u)-[old:{WORK_AT}]->()
DELETE old
WITH DISTINCT u, c
CREATE (u)-[r:{WORK_AT} {{position: $position, since: $since, created_at: $now}}]->(c)
RETURN r, u.id AS user_id, c.id AS company_id
"""

_GET = f"""
MATCH (u:{USER_LABEL} {{id: $user_id}})-[r:{WORK_AT}]->(c:{COMPANY_LABEL})
RETURN r, u.id AS user_id, c.id AS company_id
"""

_DISMISS = f"MATCH (:{USER_LABEL} {{id: $user_id}})-[r:{WORK_AT}]->() DELETE r"

_COMPANY_OF = f"""
MATCH (u:{USER_LABEL} {{id: $user_id}})-[:{WORK_AT}]->(c:{COMPANY_LABEL})
RETURN c
"""

_USERS_OF = f"""
MATCH (u:{USER_LABEL})-[:{WORK_AT}]->(c:{COMPANY_LABEL} {{id: $company_id}})
RETURN u ORDER BY u.name
"""

_COLLEAGUES_OF = f"""
MATCH (u:{USER_LABEL} {{id: $user_id}})-[:{WORK_AT}]->(:{COMPANY_LABEL})<-[:{WORK_AT}]-(n:{USER_LABEL})
WHERE n.id <> u.id
RETURN DISTINCT n ORDER BY n.name
"""


class Neo4jEmploymentRepository:
    def __init__(self, driver: Driver, database: str = DATABASE_NAME):
        self.driver = driver
        self.database = database

    def _run(self, query: str, params: dict, write: bool = False):
        try:
            return self.driver.execute_query(
                query,
                parameters_=params,
                routing_=RoutingControl.WRITE if write else RoutingControl.READ,
                database_=self.database,
            )
        except Neo4jError as e:
            logger.error("Cypher query failed", extra={"relationship": WORK_AT, "error": str(e)})
            raise

    @staticmethod
    def _to_domain(record) -> Employment:
        props = {key: to_native(value) for key, value in dict(record['r']).items()}
        return Employment(
            user_id=record['user_id'],
            company_id=record['company_id'],
            created_at=props['created_at'],
            position=props.get('position'),
            since=props.get('since'),
        )

    # ── write operations ─────────────────────────────────────

    def employ(
        self,
        user_id: str,
        company_id: str,
        position: str | None = None,
        since: date | None = None,
    ) -> Employment | None:
        records, _, _ = self._run(_EMPLOY, {
            'user_id': user_id,
            'company_id': company_id,
            'position': position,
            'since': since,
            'now': datetime.now(timezone.utc),
        }, write=True)
        if not records:
            return None
        logger.info("Employment saved", extra={"userId": user_id, "companyId": company_id})
        return self._to_domain(records[0])

    def dismiss(self, user_id: str) -> bool:
        _, summary, _ = self._run(_DISMISS, {'user_id': user_id}, write=True)
        return summary.counters.relationships_deleted > 0

    # ── read operations ──────────────────────────────────────

    def get(self, user_id: str) -> Employment | None:
        records, _, _ = self._run(_GET, {'user_id': user_id})
        return self._to_domain(records[0]) if records else None

    def company_of(self, user_id: str) -> Company | None:
        records, _, _ = self._run(_COMPANY_OF, {'user_id': user_id})
        if not records:
            return None
        return company_from_properties(node_properties(records[0]['c']))

    def users_of(self, company_id: str) -> list[User]:
        records, _, _ = self._run(_USERS_OF, {'company_id': company_id})
        return [user_from_properties(node_properties(r['u'])) for r in records]

    def colleagues_of(self, user_id: str) -> list[User]:
        records, _, _ = self._run(_COLLEAGUES_OF, {'user_id': user_id})
        return [user_from_properties(node_properties(r['n'])) for r in records]
