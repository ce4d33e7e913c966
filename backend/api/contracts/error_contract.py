"""
backend.api.contracts.error_contract

Purpose:
    Stable error contract for the API (codes + response model).
    Every translated error leaves the service as an ErrorResponse.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_GLOBAL_MESSAGE = "Internal server error"


class ErrorCode(str, Enum):
    # Generic
    BAD_REQUEST = "GB0001"
    AUTH_ERROR = "GB0002"
    ACCESS_DENIED = "GB0003"
    INVALID_TOKEN = "GB0004"
    NOT_FOUND = "GB0005"
    METHOD_NOT_ALLOWED = "GB0006"

    # Data preparation
    PREP_ERROR = "PR0001"
    PREP_BAD_REQUEST = "PR0002"
    PREP_NOT_FOUND = "PR0003"


class ErrorResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str | None = Field(default=None, description="Machine-readable application code")
    message: str = Field(..., description="Human-readable error message")
    details: str | None = Field(default=None, description="Root-cause description")
