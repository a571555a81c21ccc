"""
Domain errors and their HTTP translation.

Services raise these at the point of detection; the handlers registered by
``register_exception_handlers`` turn them into ``{"detail", "code"}`` JSON.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base exception for catalog errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        self.message = message
        self.headers = headers
        super().__init__(message)


class NotFoundError(CatalogError):
    """Entity (or a referenced relation) does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, message: str, relation: Optional[str] = None):
        super().__init__(message)
        self.relation = relation


class ConflictError(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class UnauthorizedError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "No autorizado"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ValidationFailedError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_FAILED"


def error_response(status_code: int, code: str, detail: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code},
        headers=headers,
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.code, exc.message, exc.headers)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # Unique constraints are the last word on isbn/email races.
    logger.warning("Integrity violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(
        status.HTTP_409_CONFLICT,
        ConflictError.code,
        "El registro entra en conflicto con datos existentes",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
