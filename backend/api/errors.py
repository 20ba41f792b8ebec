"""
Exception handlers.

Maps the domain exception hierarchy in shared/exceptions.py onto HTTP
status codes so that routes can let service errors propagate.
"""

import logging
from datetime import timezone
from email.utils import format_datetime

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ChirpError,
    ExternalServiceError,
    NotFoundError,
    PolicyDeniedError,
    RateLimitedError,
    ValidationError,
)

from .models.errors import ValidationErrorResponse

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins.
STATUS_CODES: list[tuple[type[ChirpError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (PolicyDeniedError, 403),
    (NotFoundError, 404),
    (RateLimitedError, 429),
    (ExternalServiceError, 500),
]


def status_for(exc: ChirpError) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def chirp_error_handler(request: Request, exc: ChirpError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")

    headers = None
    if isinstance(exc, RateLimitedError):
        headers = {"Retry-After": format_datetime(exc.retry_after.astimezone(timezone.utc), usegmt=True)}
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ValidationErrorResponse(detail=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ChirpError, chirp_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
