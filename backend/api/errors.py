"""
Exception handlers.

Maps the HifzError taxonomy onto HTTP status codes. Routes raise domain
exceptions and never build error responses themselves.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from modules.licensing.exceptions import AuthorityUnavailableError, EntitlementDeniedError
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    HifzError,
    NotFoundError,
    StoreError,
    ValidationError,
)

from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

# Most specific first
STATUS_BY_ERROR: list[tuple[type[HifzError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (EntitlementDeniedError, status.HTTP_402_PAYMENT_REQUIRED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthorityUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: HifzError) -> int:
    """HTTP status for a domain exception (500 when unmapped)."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(error: HifzError) -> ErrorResponse:
    """Response body for a domain exception; internal detail never leaves."""
    if status_for(error) >= status.HTTP_500_INTERNAL_SERVER_ERROR and not isinstance(
        error, ExternalServiceError
    ):
        return ErrorResponse(
            error=error.code,
            message="Internal error, please retry later",
        )
    return ErrorResponse(**error.to_dict())


async def hifz_error_handler(request: Request, exc: HifzError) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, AuthorityUnavailableError):
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.reason}")
    elif status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.code}: {exc.message} {exc.details}"
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.code}")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc).model_dump(),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(
        error="VALIDATION_ERROR",
        message="Malformed request",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain exception handlers on an application."""
    app.add_exception_handler(HifzError, hifz_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
