import os
import logging

from neo4j import Driver, GraphDatabase
from neo4j.exceptions import AuthError, DriverError, Neo4jError, ServiceUnavailable
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

neo4j_logger = logging.getLogger('neo4j')
neo4j_logger.setLevel(logging.WARNING)

NEO4J_URL = os.getenv('NEO4J_URL')
NEO4J_USERNAME = os.getenv('NEO4J_USERNAME', 'neo4j')
NEO4J_PASSWORD = os.getenv('NEO4J_PASSWORD', '')
DATABASE_NAME = os.getenv('NEO4J_DATABASE', 'neo4j')

USER_LABEL = 'User'
COMPANY_LABEL = 'Company'
WORK_AT = 'WORK_AT'

_driver_cache: Driver | None = None
_connection_failed = False


def reset_driver():
    global _driver_cache
    if _driver_cache is not None:
        _driver_cache.close()
    _driver_cache = None


@retry(
    retry=retry_if_exception_type(ServiceUnavailable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
def _connect() -> Driver:
    driver = GraphDatabase.driver(
        NEO4J_URL,
        auth=(NEO4J_USERNAME, NEO4J_PASSWORD),
        max_connection_pool_size=10,
        connection_acquisition_timeout=10.0,
    )
    try:
        driver.verify_connectivity()
    except Exception:
        driver.close()
        raise
    return driver


def get_neo4j_driver() -> Driver | None:
    """Get a cached Neo4j driver, connecting on first use.

    The driver owns a connection pool and is safe to share between requests.
    A configuration error (missing URL, bad credentials) is not retried.

    Returns:
        Neo4j driver or None if connection fails
    """
    global _driver_cache, _connection_failed

    if _driver_cache is not None:
        return _driver_cache

    if _connection_failed:
        return None

    if not NEO4J_URL:
        logger.error("[NEO4J] NEO4J_URL not configured.")
        _connection_failed = True
        return None

    try:
        _driver_cache = _connect()
        logger.info(f"[NEO4J] Connected successfully to {DATABASE_NAME}")
        return _driver_cache
    except AuthError as e:
        logger.error(f"[NEO4J] Authentication failed: {str(e)[:200]}")
        _connection_failed = True
        return None
    except (DriverError, Neo4jError) as e:
        logger.error(f"[NEO4J] Connection failed: {str(e)[:200]}")
        return None


def ping() -> bool:
    driver = get_neo4j_driver()
    if driver is None:
        return False
    try:
        driver.verify_connectivity()
        return True
    except (DriverError, Neo4jError):
        return False
