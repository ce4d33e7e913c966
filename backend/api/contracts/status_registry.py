"""
backend.api.contracts.status_registry

Purpose:
    Declared HTTP status per error kind.
    The registry is filled once at startup and queried by exact kind match.

Author:
    Kanir Pandya

Created:
    2026-10-17
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class ErrorKind(str, Enum):
    SERVICE = "service"
    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    ACCESS_DENIED = "access_denied"
    INVALID_TOKEN = "invalid_token"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    UNKNOWN_SERVER = "unknown_server"

    PREP = "prep"
    PREP_BAD_REQUEST = "prep_bad_request"
    PREP_NOT_FOUND = "prep_not_found"


# SERVICE, UNKNOWN_SERVER and PREP intentionally have no declared status.
DEFAULT_STATUSES: Mapping[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.RESOURCE_NOT_FOUND: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.PREP_BAD_REQUEST: 400,
    ErrorKind.PREP_NOT_FOUND: 404,
}


class StatusRegistry:
    def __init__(self, statuses: Mapping[ErrorKind, int] | None = None) -> None:
        self._statuses: dict[ErrorKind, int] = dict(statuses or {})

    def register(self, kind: ErrorKind, status_code: int) -> None:
        if not 100 <= status_code <= 599:
            raise ValueError(f"Invalid HTTP status code for {kind.value}: {status_code}")
        self._statuses[kind] = status_code

    def lookup(self, kind: ErrorKind) -> int | None:
        return self._statuses.get(kind)

    def as_dict(self) -> dict[str, int]:
        return {kind.value: code for kind, code in self._statuses.items()}


def default_status_registry() -> StatusRegistry:
    return StatusRegistry(DEFAULT_STATUSES)
