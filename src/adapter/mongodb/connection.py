import os
import logging

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'staffbook')
USERS_COLLECTION_NAME = 'users'
COMPANIES_COLLECTION_NAME = 'companies'
EMPLOYMENTS_COLLECTION_NAME = 'employments'

_CLIENT_OPTIONS = {
    'tz_aware': True,  # timestamps come back as UTC-aware datetimes
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': int(os.getenv('MONGO_MAX_POOL_SIZE', 10)),
    'minPoolSize': 0,
    'maxIdleTimeMS': 30000,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
}

_client_cache: MongoClient | None = None
_connection_attempted = False
_connection_failed = False


def reset_client():
    global _client_cache
    if _client_cache is not None:
        _client_cache.close()
    _client_cache = None


def _connect() -> MongoClient:
    client = MongoClient(MONGO_URL, **_CLIENT_OPTIONS)
    try:
        client.admin.command('ping')
    except PyMongoError:
        client.close()
        raise
    return client


def _cached_client_alive() -> bool:
    try:
        _client_cache.admin.command('ping')
        return True
    except PyMongoError:
        logger.debug("[MONGODB] Cached client failed ping, reconnecting")
        return False


def get_mongodb_client() -> MongoClient | None:
    """Get a cached MongoDB client, reconnecting if the cached one stopped answering.

    A failed first connection is treated as a configuration problem and is
    not retried for the lifetime of the process.

    Returns:
        MongoDB client or None if connection fails
    """
    global _client_cache, _connection_attempted, _connection_failed

    if _client_cache is not None:
        if _cached_client_alive():
            return _client_cache
        _client_cache = None

    if _connection_failed:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured.")
        _connection_failed = True
        return None

    try:
        _client_cache = _connect()
    except (ConnectionFailure, PyMongoError) as e:
        if not _connection_attempted:
            logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
            _connection_failed = True
        return None

    if not _connection_attempted:
        logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
    _connection_attempted = True
    return _client_cache


def ping() -> bool:
    return get_mongodb_client() is not None
