"""
backend.api.routes.v1.health

Purpose:
    Versioned health endpoint for API clients.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from fastapi import APIRouter

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

_paths = ApiPaths()

router = APIRouter(tags=[ApiTags().health])


@router.get(_paths.health)
def health() -> dict:
    return {"status": "ok"}
