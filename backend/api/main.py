"""
backend.api.main

Purpose:
    FastAPI application entrypoint for the DataSphere backend API.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

from fastapi import FastAPI

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.request_id_policy import RequestIdPolicy
from backend.api.contracts.status_registry import StatusRegistry, default_status_registry
from backend.api.engine.query_client import DruidQueryCanceller, QueryCanceller
from backend.api.error_handlers import register_error_handlers
from backend.api.logging.logging_config import configure_logging
from backend.api.middleware.request_id import RequestIdMiddleware
from backend.api.routes.v1 import v1_router
from backend.api.settings import Settings, get_settings
from backend.api.translator import ErrorTranslator


def create_app(
    settings: Settings | None = None,
    *,
    canceller: QueryCanceller | None = None,
    registry: StatusRegistry | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    configure_logging()

    app = FastAPI(title=settings.service_name, version=settings.service_version)

    # Container/orchestrator liveness check
    @app.get(ApiPaths().health)
    def health() -> dict:
        return {"ok": True}

    translator = ErrorTranslator(
        registry or default_status_registry(),
        canceller=canceller
        or DruidQueryCanceller(settings.engine_base_url, timeout_s=settings.engine_cancel_timeout_s),
        print_stack_trace=settings.print_stack_trace,
    )
    app.add_middleware(RequestIdMiddleware, policy=RequestIdPolicy(), translator=translator)

    app.state.settings = settings
    app.state.error_translator = translator

    register_error_handlers(app, translator)

    app.include_router(v1_router, prefix=settings.api_v1_prefix)

    return app


app = create_app()
