"""Validated listing options shared by every store adapter.

Adapters turn a ListOptions into their own parameterized query; the only
values that ever reach query text are the allow-listed field names below.
"""

from dataclasses import dataclass
from enum import Enum

from domain.model.errors import FieldError, ValidationError

MIN_LIMIT = 5
MAX_LIMIT = 100


class EntityKind(str, Enum):
    USER = 'user'
    COMPANY = 'company'

    @property
    def search_fields(self) -> tuple[str, ...]:
        return _SEARCH_FIELDS[self]

    @property
    def sort_fields(self) -> tuple[str, ...]:
        return _SORT_FIELDS[self]


_SEARCH_FIELDS = {
    EntityKind.USER: ('name', 'email'),
    EntityKind.COMPANY: ('name',),
}

_SORT_FIELDS = {
    EntityKind.USER: ('name', 'email'),
    EntityKind.COMPANY: ('name', 'since'),
}


@dataclass(frozen=True)
class ListOptions:
    """Filter/sort/limit for a list query.

    Build instances through create() so the values are guaranteed valid.
    """
    kind: EntityKind
    search: str | None = None
    sort_by: str | None = None
    limit: int | None = None

    @classmethod
    def create(
        cls,
        kind: EntityKind,
        search: str | None = None,
        sort_by: str | None = None,
        limit: int | None = None,
    ) -> 'ListOptions':
        """Validate raw options, collecting every problem before raising.

        Raises:
            ValidationError: sort_by outside the allow-list or limit outside
                [MIN_LIMIT, MAX_LIMIT]
        """
        errors: list[FieldError] = []

        search = search.strip() if search else None

        if sort_by is not None and sort_by not in kind.sort_fields:
            errors.append(FieldError(
                'sort_by', f"must be one of: {', '.join(kind.sort_fields)}"
            ))

        if limit is not None:
            if isinstance(limit, bool) or not isinstance(limit, int):
                errors.append(FieldError('limit', 'must be an integer'))
            elif not MIN_LIMIT <= limit <= MAX_LIMIT:
                errors.append(FieldError(
                    'limit', f"must be between {MIN_LIMIT} and {MAX_LIMIT}"
                ))

        if errors:
            raise ValidationError("Invalid list options", errors)

        return cls(kind=kind, search=search or None, sort_by=sort_by, limit=limit)
