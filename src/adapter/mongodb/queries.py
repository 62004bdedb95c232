"""Filter/sort/limit rendering for MongoDB list queries."""

import re
from dataclasses import dataclass, field

from domain.model.listing import ListOptions

ASCENDING = 1


@dataclass(frozen=True)
class MongoListQuery:
    filter: dict = field(default_factory=dict)
    sort: list[tuple[str, int]] = field(default_factory=list)
    limit: int = 0  # pymongo treats 0 as "no limit"


def build_list_query(options: ListOptions) -> MongoListQuery:
    """Translate validated ListOptions into find() arguments.

    Search text is escaped and matched case-insensitively against every
    searchable field of the entity (OR). sort_by has already been checked
    against the entity's allow-list.
    """
    query: dict = {}
    if options.search:
        pattern = {'$regex': re.escape(options.search), '$options': 'i'}
        query['$or'] = [{f: pattern} for f in options.kind.search_fields]

    sort = [(options.sort_by, ASCENDING)] if options.sort_by else []

    return MongoListQuery(filter=query, sort=sort, limit=options.limit or 0)
