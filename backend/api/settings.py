# backend/api/settings.py
"""
backend.api.settings

Purpose:
    Centralized configuration for the FastAPI service.
    Values default sensibly and can be overridden from the service environment.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

from backend.api.contracts.api_paths import ApiPaths

logger = logging.getLogger(__name__)


def _as_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return None


def _as_float(raw: str | None, *, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric setting value %r; using %s", raw, default)
        return default


class Settings(BaseModel):
    service_name: str = Field(default="datasphere-api")
    service_version: str = Field(default="0.1.0")

    api_v1_prefix: str = Field(default=ApiPaths().v1_prefix)

    # Log the full traceback next to each translated error (server side only).
    print_stack_trace: bool = Field(default=True)

    engine_base_url: str = Field(default="http://localhost:8082")
    engine_cancel_timeout_s: float = Field(default=2.0, gt=0)


def get_settings() -> Settings:
    defaults = Settings()

    print_stack_trace = _as_bool(os.getenv("PRINT_STACK_TRACE"))

    return Settings(
        service_name=os.getenv("SERVICE_NAME") or defaults.service_name,
        service_version=os.getenv("SERVICE_VERSION") or defaults.service_version,
        print_stack_trace=(
            defaults.print_stack_trace if print_stack_trace is None else print_stack_trace
        ),
        engine_base_url=os.getenv("ENGINE_BASE_URL") or defaults.engine_base_url,
        engine_cancel_timeout_s=_as_float(
            os.getenv("ENGINE_CANCEL_TIMEOUT_S"), default=defaults.engine_cancel_timeout_s
        ),
    )
