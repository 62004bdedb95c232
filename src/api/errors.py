"""Mapping from domain errors to HTTP responses.

Every validation failure is answered with 400 and the full list of field
errors, whether it came from FastAPI's request parsing, from a pydantic
model built inside a route, or from a service.
"""

import logging
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.model.errors import (
    ConflictError,
    DomainError,
    FieldError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {'body', 'query', 'path', 'header', 'cookie'}


def field_errors_from_pydantic(errors: Iterable[dict]) -> list[FieldError]:
    """Flatten pydantic error dicts into FieldErrors ("field" is the dotted location)."""
    result = []
    for err in errors:
        loc = [str(part) for part in err.get('loc', ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        result.append(FieldError(field='.'.join(loc) or '__root__', message=err.get('msg', 'invalid')))
    return result


def validation_error_from_pydantic(errors: Iterable[dict]) -> ValidationError:
    return ValidationError("Invalid request", field_errors_from_pydantic(errors))


def _body(message: str, errors: list[FieldError] | None = None) -> dict:
    body: dict = {"detail": message}
    if errors:
        body["errors"] = [{"field": e.field, "message": e.message} for e in errors]
    return body


async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Validation failed", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_body(str(exc), exc.errors))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors_from_pydantic(exc.errors())
    logger.info("Request validation failed", extra={"path": request.url.path, "errorCount": len(errors)})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_body("Invalid request", errors))


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=_body(str(exc)))


async def _conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.info("Conflict", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=_body(str(exc)))


async def _domain_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.error("Unhandled domain error", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=_body(str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(ConflictError, _conflict_handler)
    app.add_exception_handler(DomainError, _domain_handler)
