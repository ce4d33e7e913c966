"""
backend.api.error_adapters

Purpose:
    Wrap third-party / framework exceptions into the ServiceError family.
    One adapter per external error kind; the original is kept as __cause__.

Author:
    Kanir Pandya

Created:
    2026-10-17
"""

from __future__ import annotations

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from backend.api.errors import (
    AccessDeniedError,
    AuthenticationError,
    BadRequestError,
    InvalidTokenError,
    MethodNotAllowedError,
    ResourceNotFoundError,
    ServiceError,
    UnknownServerError,
)
from backend.api.security.exceptions import (
    AccessDeniedException,
    InvalidGrantException,
    InvalidTokenException,
)


def from_access_denied(exc: AccessDeniedException) -> AccessDeniedError:
    return AccessDeniedError(cause=exc)


def from_invalid_token(exc: InvalidTokenException) -> InvalidTokenError:
    return InvalidTokenError(cause=exc)


def from_invalid_grant(exc: InvalidGrantException) -> AuthenticationError:
    return AuthenticationError(cause=exc)


def from_type_mismatch(exc: RequestValidationError) -> BadRequestError:
    return BadRequestError(cause=exc)


def from_http_exception(exc: HTTPException) -> ServiceError:
    status_code = exc.status_code
    if status_code == 401:
        return AuthenticationError(cause=exc)
    if status_code == 403:
        return AccessDeniedError(cause=exc)
    if status_code == 404:
        return ResourceNotFoundError(cause=exc)
    if status_code == 405:
        return MethodNotAllowedError(cause=exc)
    if 400 <= status_code < 500:
        return BadRequestError(cause=exc)
    return UnknownServerError(cause=exc)
