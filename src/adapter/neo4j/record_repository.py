"""Shared Neo4j plumbing for User and Company repositories."""

from datetime import datetime, timezone
from logging import getLogger
from typing import Any

from neo4j import Driver, RoutingControl
from neo4j.exceptions import Neo4jError
from neo4j.time import Date, DateTime

from adapter.neo4j.connection import DATABASE_NAME
from adapter.neo4j.queries import build_list_query
from domain.model.listing import ListOptions

logger = getLogger(__name__)


def to_native(value: Any) -> Any:
    """Convert driver temporal types to their datetime/date equivalents."""
    if isinstance(value, (DateTime, Date)):
        return value.to_native()
    return value


def node_properties(node) -> dict[str, Any]:
    return {key: to_native(value) for key, value in dict(node).items()}


class Neo4jRecordRepository:
    """Base class; subclasses set label, updatable and _to_domain."""

    label: str
    updatable: frozenset[str] = frozenset()

    def __init__(self, driver: Driver, database: str = DATABASE_NAME):
        self.driver = driver
        self.database = database

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, props: dict[str, Any]) -> Any:
        raise NotImplementedError

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _run(self, query: str, params: dict | None = None, write: bool = False):
        try:
            return self.driver.execute_query(
                query,
                parameters_=params or {},
                routing_=RoutingControl.WRITE if write else RoutingControl.READ,
                database_=self.database,
            )
        except Neo4jError as e:
            logger.error("Cypher query failed", extra={"label": self.label, "error": str(e)})
            raise

    def _single(self, query: str, params: dict, write: bool = False) -> Any | None:
        records, _, _ = self._run(query, params, write=write)
        if not records:
            return None
        return self._to_domain(node_properties(records[0]['n']))

    def _create(self, props: dict[str, Any]) -> Any:
        record = self._single(f"CREATE (n:{self.label} $props) RETURN n", {'props': props}, write=True)
        logger.info("Node created", extra={"label": self.label, "recordId": props['id']})
        return record

    # ── write operations ─────────────────────────────────────

    def ensure_constraints(self) -> bool:
        """Create the uniqueness constraint on the node id."""
        try:
            self._run(
                f"CREATE CONSTRAINT {self.label.lower()}_id IF NOT EXISTS "
                f"FOR (n:{self.label}) REQUIRE n.id IS UNIQUE",
                write=True,
            )
            return True
        except Neo4jError:
            return False

    def update(self, record_id: str, changes: dict[str, Any]) -> Any | None:
        fields = {k: v for k, v in changes.items() if k in self.updatable}
        return self._single(
            f"MATCH (n:{self.label} {{id: $id}}) SET n += $changes, n.updated_at = $now RETURN n",
            {'id': record_id, 'changes': fields, 'now': self._now()},
            write=True,
        )

    def set_deleted_at(self, record_id: str, deleted_at: datetime | None) -> Any | None:
        # SET to null removes the property
        return self._single(
            f"MATCH (n:{self.label} {{id: $id}}) SET n.deleted_at = $deleted_at, n.updated_at = $now RETURN n",
            {'id': record_id, 'deleted_at': deleted_at, 'now': self._now()},
            write=True,
        )

    def erase(self, record_id: str) -> bool:
        _, summary, _ = self._run(
            f"MATCH (n:{self.label} {{id: $id}}) DETACH DELETE n",
            {'id': record_id},
            write=True,
        )
        erased = summary.counters.nodes_deleted > 0
        if erased:
            logger.info("Node erased", extra={
                "label": self.label,
                "recordId": record_id,
                "edgesRemoved": summary.counters.relationships_deleted,
            })
        return erased

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, record_id: str) -> Any | None:
        return self._single(f"MATCH (n:{self.label} {{id: $id}}) RETURN n", {'id': record_id})

    def find_many(self, options: ListOptions) -> list[Any]:
        query, params = build_list_query(options)
        records, _, _ = self._run(query, params)
        return [self._to_domain(node_properties(r['n'])) for r in records]

    def count_matching(self, field: str, value: Any, excluding_id: str | None = None) -> int:
        records, _, _ = self._run(
            f"MATCH (n:{self.label}) "
            "WHERE n[$field] = $value AND ($excluding_id IS NULL OR n.id <> $excluding_id) "
            "RETURN count(n) AS total",
            {'field': field, 'value': value, 'excluding_id': excluding_id},
        )
        return records[0]['total'] if records else 0
