"""
backend.api.errors

Purpose:
    Internal exception types for API error handling.
    Routes raise ServiceError / PrepError; the error translator converts them to ErrorResponse.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

from typing import ClassVar

from backend.api.contracts.error_contract import DEFAULT_GLOBAL_MESSAGE, ErrorCode
from backend.api.contracts.status_registry import ErrorKind


def _code_value(code: ErrorCode | str | None) -> str | None:
    if isinstance(code, ErrorCode):
        return code.value
    return code


class ServiceError(Exception):
    """
    Application-defined error carrying a stable code and message.

    Subclasses pin `kind` (used for the declared status lookup) and may provide a
    default code/message. `cause` becomes `__cause__` so the root cause survives wrapping.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.SERVICE
    default_code: ClassVar[ErrorCode | None] = None
    default_message: ClassVar[str] = DEFAULT_GLOBAL_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.code = _code_value(code if code is not None else self.default_code)
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message


class BadRequestError(ServiceError):
    kind = ErrorKind.BAD_REQUEST
    default_code = ErrorCode.BAD_REQUEST
    default_message = "Bad request"


class AuthenticationError(ServiceError):
    kind = ErrorKind.AUTHENTICATION
    default_code = ErrorCode.AUTH_ERROR
    default_message = "Authentication failed"


class AccessDeniedError(ServiceError):
    kind = ErrorKind.ACCESS_DENIED
    default_code = ErrorCode.ACCESS_DENIED
    default_message = "Access is denied"


class InvalidTokenError(ServiceError):
    kind = ErrorKind.INVALID_TOKEN
    default_code = ErrorCode.INVALID_TOKEN
    default_message = "Invalid access token"


class ResourceNotFoundError(ServiceError):
    kind = ErrorKind.RESOURCE_NOT_FOUND
    default_code = ErrorCode.NOT_FOUND
    default_message = "Resource not found"


class MethodNotAllowedError(ServiceError):
    kind = ErrorKind.METHOD_NOT_ALLOWED
    default_code = ErrorCode.METHOD_NOT_ALLOWED
    default_message = "Method not allowed"


class UnknownServerError(ServiceError):
    kind = ErrorKind.UNKNOWN_SERVER


class PrepError(Exception):
    """
    Data-preparation pipeline error.

    Carries a message key (for localization) and a message detail instead of a single
    message. Not a ServiceError: the translator classifies it on its own.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.PREP
    default_code: ClassVar[ErrorCode | None] = ErrorCode.PREP_ERROR

    def __init__(
        self,
        message_key: str,
        message_detail: str | None = None,
        *,
        code: ErrorCode | str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.code = _code_value(code if code is not None else self.default_code)
        self.message_key = message_key
        self.message_detail = message_detail
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        if self.message_detail:
            return f"{self.message_key}: {self.message_detail}"
        return self.message_key

    def __str__(self) -> str:
        return self.message


class PrepBadRequestError(PrepError):
    kind = ErrorKind.PREP_BAD_REQUEST
    default_code = ErrorCode.PREP_BAD_REQUEST


class PrepNotFoundError(PrepError):
    kind = ErrorKind.PREP_NOT_FOUND
    default_code = ErrorCode.PREP_NOT_FOUND
