"""
backend.api.routes.v1.info

Purpose:
    Versioned info endpoint that exposes API metadata and the error catalogue
    (application codes and declared statuses) for client discovery.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags
from backend.api.contracts.error_contract import DEFAULT_GLOBAL_MESSAGE, ErrorCode

_paths = ApiPaths()

router = APIRouter(tags=[ApiTags().info])


@router.get(_paths.info)
def info(request: Request) -> dict:
    settings = request.app.state.settings
    translator = request.app.state.error_translator

    # Keep this as stable contract; safe for clients to depend on.
    return {
        "api_version": "v1",
        "service": settings.service_name,
        "version": settings.service_version,
        "endpoints": {
            "health": f"{settings.api_v1_prefix}{_paths.health}",
            "info": f"{settings.api_v1_prefix}{_paths.info}",
        },
        "errors": {
            "codes": {code.name: code.value for code in ErrorCode},
            "statuses": translator.registry.as_dict(),
            "default_status": 500,
            "default_message": DEFAULT_GLOBAL_MESSAGE,
        },
    }
