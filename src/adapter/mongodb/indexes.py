"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

_COMPARED_OPTIONS = ('unique', 'sparse')


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create index, replacing an existing one that conflicts with it.

    A conflict is an index with the same name but a different key pattern or
    options (e.g. an old unique email index), or the same key pattern under
    another name.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _resolve_conflict(collection, keys, name, **kwargs)


def _resolve_conflict(collection, keys: list, name: str, **kwargs) -> bool:
    """Drop conflicting index and recreate."""
    keys_dict = dict(keys)
    wanted = {opt: bool(kwargs.get(opt, False)) for opt in _COMPARED_OPTIONS}

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict
        existing = {opt: bool(idx_info.get(opt, False)) for opt in _COMPARED_OPTIONS}

        if same_name or same_keys:
            if same_name and same_keys and existing == wanted:
                continue
            logger.warning("Dropping conflicting index", extra={"index": idx_name, "replacement": name})
            collection.drop_index(idx_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info("Recreated index", extra={"index": name})
            return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.company_repository import MongoCompanyRepository
    from adapter.mongodb.employment_repository import MongoEmploymentRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoCompanyRepository(db).ensure_indexes(),
        MongoEmploymentRepository(db).ensure_indexes(),
    ]
    return all(results)
