"""Cypher templates for list queries.

The query text is assembled only from the constant fragments below; search
text, limits and field lists always travel as parameters. The sort fragment
is looked up by the already allow-listed sort_by value.
"""

from adapter.neo4j.connection import COMPANY_LABEL, USER_LABEL
from domain.model.listing import EntityKind, ListOptions

_MATCH = {
    EntityKind.USER: f"MATCH (n:{USER_LABEL})",
    EntityKind.COMPANY: f"MATCH (n:{COMPANY_LABEL})",
}

_SEARCH = (
    "WHERE any(field IN $search_fields "
    "WHERE toLower(toString(n[field])) CONTAINS toLower($search))"
)

_RETURN = "RETURN n"

_ORDER_BY = {
    (EntityKind.USER, 'name'): "ORDER BY n.name",
    (EntityKind.USER, 'email'): "ORDER BY n.email",
    (EntityKind.COMPANY, 'name'): "ORDER BY n.name",
    (EntityKind.COMPANY, 'since'): "ORDER BY n.since",
}

_LIMIT = "LIMIT $limit"


def build_list_query(options: ListOptions) -> tuple[str, dict]:
    """Return (cypher, params) for a validated ListOptions."""
    parts = [_MATCH[options.kind]]
    params: dict = {}

    if options.search:
        parts.append(_SEARCH)
        params['search'] = options.search
        params['search_fields'] = list(options.kind.search_fields)

    parts.append(_RETURN)

    if options.sort_by:
        parts.append(_ORDER_BY[(options.kind, options.sort_by)])

    if options.limit is not None:
        parts.append(_LIMIT)
        params['limit'] = options.limit

    return ' '.join(parts), params
