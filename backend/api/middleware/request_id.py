"""
backend.api.middleware.request_id

Purpose:
    Middleware that ensures each request has a request-id and propagates it to responses,
    including error responses for exceptions no registered handler claims.

Notes:
    - Unclaimed exceptions are translated here rather than by an Exception handler:
      Starlette serves those from ServerErrorMiddleware, which sits outside this
      middleware (no request-id header) and re-raises after responding.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from backend.api.contracts.request_id_policy import RequestIdPolicy
from backend.api.error_handlers import translate_to_response
from backend.api.logging.request_context import request_id_ctx_var
from backend.api.translator import ErrorTranslator


class RequestIdMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        policy: RequestIdPolicy | None = None,
        translator: ErrorTranslator | None = None,
    ) -> None:
        super().__init__(app)
        self._policy = policy or RequestIdPolicy()
        self._translator = translator

    def _resolve_request_id(self, request: Request) -> str:
        incoming = (
            request.headers.get(self._policy.request_id_header)
            or request.headers.get(self._policy.correlation_id_header)
        )
        return incoming if incoming else str(uuid.uuid4())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = self._resolve_request_id(request)

        # Attach for handlers/logging
        request.state.request_id = request_id
        request_id_ctx_var.set(request_id)

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            if self._translator is None:
                raise
            response = await translate_to_response(self._translator, request, exc)

        # Echo back for client correlation
        response.headers[self._policy.response_header] = request_id
        return response
