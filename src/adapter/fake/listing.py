"""In-memory rendering of ListOptions, mirroring what the store adapters do."""

from typing import Any, Iterable

from domain.model.listing import ListOptions


def apply_list_options(records: Iterable[Any], options: ListOptions) -> list[Any]:
    results = list(records)

    if options.search:
        needle = options.search.lower()
        results = [
            r for r in results
            if any(needle in str(getattr(r, f) or '').lower() for f in options.kind.search_fields)
        ]

    if options.sort_by:
        results.sort(key=lambda r: getattr(r, options.sort_by))

    if options.limit is not None:
        results = results[:options.limit]
    return results
