"""
backend.api.error_handlers

Purpose:
    Register global exception handlers that route every error through the ErrorTranslator
    and render the result as a stable ErrorResponse (or nothing, for a gone client).

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.responses import Response

from backend.api.errors import PrepError, ServiceError
from backend.api.logging.request_context import RequestContext, get_current_query_id
from backend.api.security.exceptions import (
    AccessDeniedException,
    InvalidGrantException,
    InvalidTokenException,
)
from backend.api.translator import ErrorTranslation, ErrorTranslator

# Starlette resolves handlers through the exception MRO, so each kind gets its own entry.
# Everything else is caught by RequestIdMiddleware; an Exception handler here would
# run in ServerErrorMiddleware, which re-raises after responding.
HANDLED_EXCEPTIONS: tuple[type[BaseException], ...] = (
    OSError,
    ServiceError,
    PrepError,
    AccessDeniedException,
    InvalidTokenException,
    InvalidGrantException,
    RequestValidationError,
    HTTPException,
)


def _get_query_id(request: Request) -> str | None:
    qid = getattr(getattr(request, "state", None), "query_id", None)
    if isinstance(qid, str) and qid:
        return qid

    qid2 = get_current_query_id()
    if isinstance(qid2, str) and qid2:
        return qid2

    return None


def build_request_context(request: Request) -> RequestContext:
    return RequestContext(uri=request.url.path, query_id=_get_query_id(request))


def render_translation(translation: ErrorTranslation) -> Response:
    if translation.suppressed or translation.body is None:
        # Client is gone; send nothing beyond a bodiless status line.
        return Response(status_code=translation.status_code)

    return JSONResponse(
        status_code=translation.status_code,
        content=translation.body.model_dump(),
        headers=dict(translation.headers),
    )


async def translate_to_response(
    translator: ErrorTranslator, request: Request, exc: Exception
) -> Response:
    ctx = build_request_context(request)
    translation = await run_in_threadpool(translator.translate, exc, ctx)
    return render_translation(translation)


def register_error_handlers(app: FastAPI, translator: ErrorTranslator) -> None:
    """
    Register global exception handlers on the FastAPI app.
    """

    async def handle_error(request: Request, exc: Exception) -> Response:
        return await translate_to_response(translator, request, exc)

    for exc_type in HANDLED_EXCEPTIONS:
        app.add_exception_handler(exc_type, handle_error)
