"""FastAPI application entry point."""

import os
import sys
import logging
import time
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars at import time
load_dotenv()

# main.py is at <root>/src/api/main.py
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.dependencies import BACKEND_NEO4J, STORAGE_ROOT, STORE_BACKEND
from api.errors import register_exception_handlers
from api.routes import companies, health, users
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Staffbook API"
API_PREFIX = "/api/v1"


def _prepare_store() -> None:
    """Create indexes (MongoDB) or constraints (Neo4j) for the configured backend."""
    if STORE_BACKEND == BACKEND_NEO4J:
        from adapter.neo4j.connection import get_neo4j_driver
        from adapter.neo4j.constraints import ensure_all_constraints

        driver = get_neo4j_driver()
        if driver is None:
            logger.warning("Neo4j unavailable, skipping constraint creation")
        elif ensure_all_constraints(driver):
            logger.info("Neo4j constraints verified/created successfully")
        return

    from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
    from adapter.mongodb.indexes import ensure_all_indexes

    client = get_mongodb_client()
    if client is None:
        logger.warning("MongoDB unavailable, skipping index creation")
    elif ensure_all_indexes(client[DATABASE_NAME]):
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    logger.info("Starting", extra={"backend": STORE_BACKEND, "storageRoot": STORAGE_ROOT})
    _prepare_store()

    yield

    if STORE_BACKEND == BACKEND_NEO4J:
        from adapter.neo4j.connection import reset_driver
        reset_driver()
    else:
        from adapter.mongodb.connection import reset_client
        reset_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="CRUD API for users, companies and who works where",
    version=VERSION,
    lifespan=lifespan,
)

# CORS configuration
# - CORS_ORIGINS="*": allow_credentials must be False (browsers reject credentials with wildcard)
# - comma-separated list: credentials allowed
cors_origins_env = os.getenv("CORS_ORIGINS", "*")

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info("Request handled", extra={
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "durationMs": round((time.perf_counter() - started) * 1000, 1),
    })
    return response


app.include_router(users.router, prefix=API_PREFIX)
app.include_router(companies.router, prefix=API_PREFIX)
app.include_router(health.router)

# Avatar paths stored on users are relative to STORAGE_ROOT
app.mount("/storage", StaticFiles(directory=STORAGE_ROOT, check_dir=False), name="storage")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        access_log=False  # structured application logs already cover requests
    )
