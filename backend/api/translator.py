"""
backend.api.translator

Purpose:
    Turn any exception raised while handling a request into exactly one
    (status, ErrorResponse) pair, logging each translated error once.

Design Notes:
    - Classification is a single pass in a fixed order: I/O, domain, prep,
      security/framework adapters, then the catch-all.
    - Declared statuses come from the StatusRegistry (exact kind match);
      no declared status means 500 with the default global message.
    - A client disconnect ("broken pipe") produces no body. The engine query bound to the
      request, if any, is cancelled best effort.
    - translate() never raises; a failure inside translation yields a bare 500.

Author:
    Kanir Pandya

Created:
    2026-10-17
"""

from __future__ import annotations

import errno
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from backend.api import error_adapters
from backend.api.contracts.error_contract import DEFAULT_GLOBAL_MESSAGE, ErrorResponse
from backend.api.contracts.status_registry import StatusRegistry
from backend.api.engine.query_client import QueryCanceller
from backend.api.errors import PrepError, ServiceError, UnknownServerError
from backend.api.logging.request_context import RequestContext
from backend.api.security.exceptions import (
    AccessDeniedException,
    InvalidGrantException,
    InvalidTokenException,
)

logger = logging.getLogger(__name__)

HTTP_500 = 500
HTTP_503 = 503

_BROKEN_PIPE = "broken pipe"


@dataclass(frozen=True)
class ErrorTranslation:
    """
    Result of translating one exception.

    `suppressed=True` means the transport is gone and nothing should be written back;
    `body` is None in that case only.
    """

    status_code: int
    body: ErrorResponse | None
    headers: Mapping[str, str] = field(default_factory=dict)
    suppressed: bool = False

    @classmethod
    def suppress(cls) -> ErrorTranslation:
        return cls(status_code=HTTP_503, body=None, suppressed=True)


# ---------------------------------------------------------------------------
# Root cause
# ---------------------------------------------------------------------------

_VALUE_ERROR_PREFIX = re.compile(r"^Value error,\s*")


def _clean_validation_message(err: dict[str, Any]) -> str:
    msg = _VALUE_ERROR_PREFIX.sub("", str(err.get("msg") or ""))
    loc = err.get("loc") or []
    if err.get("type") == "missing" and len(loc) >= 2:
        return f"Missing required field: {loc[-1]}."
    return msg


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in jsonable_encoder(exc.errors()):
        if not isinstance(err, dict):
            continue
        loc = err.get("loc") or []
        # First element is the source ("path", "query", "body", ...)
        where = ".".join(str(p) for p in loc[1:]) or ".".join(str(p) for p in loc)
        msg = _clean_validation_message(err)
        parts.append(f"{where}: {msg}" if where else msg)
    return "; ".join(parts) or "Request validation failed"


def root_cause(exc: BaseException) -> BaseException:
    seen = {id(exc)}
    cur = exc
    while cur.__cause__ is not None and id(cur.__cause__) not in seen:
        cur = cur.__cause__
        seen.add(id(cur))
    return cur


def is_client_disconnect(exc: BaseException) -> bool:
    cause = root_cause(exc)
    if isinstance(cause, BrokenPipeError) or getattr(cause, "errno", None) == errno.EPIPE:
        return True
    return _BROKEN_PIPE in root_cause_message(exc).lower()


def root_cause_message(exc: BaseException) -> str:
    """Message of the innermost exception in the `__cause__` chain."""
    cause = root_cause(exc)
    if isinstance(cause, RequestValidationError):
        return _describe_validation_error(cause)
    return str(cause) or type(cause).__name__


# ---------------------------------------------------------------------------
# Translator
# ---------------------------------------------------------------------------

class ErrorTranslator:
    def __init__(
        self,
        registry: StatusRegistry,
        *,
        canceller: QueryCanceller | None = None,
        print_stack_trace: bool = True,
    ) -> None:
        self.registry = registry
        self.canceller = canceller
        self.print_stack_trace = print_stack_trace

    def translate(self, exc: BaseException, ctx: RequestContext) -> ErrorTranslation:
        try:
            return self._entry_point_for(exc)(exc, ctx)
        except Exception:
            logger.exception("[API:%s] Failed to translate %s", ctx.uri, type(exc).__name__)
            return ErrorTranslation(
                status_code=HTTP_500,
                body=ErrorResponse(code=None, message=DEFAULT_GLOBAL_MESSAGE, details=None),
            )

    def _entry_point_for(
        self, exc: BaseException
    ) -> Callable[[Any, RequestContext], ErrorTranslation]:
        if isinstance(exc, OSError):
            return self.handle_io_error
        if isinstance(exc, ServiceError):
            return self.handle_service_error
        if isinstance(exc, PrepError):
            return self.handle_prep_error
        if isinstance(exc, AccessDeniedException):
            return self.handle_access_denied
        if isinstance(exc, InvalidTokenException):
            return self.handle_invalid_token
        if isinstance(exc, InvalidGrantException):
            return self.handle_invalid_grant
        if isinstance(exc, RequestValidationError):
            return self.handle_type_mismatch
        if isinstance(exc, HTTPException):
            return self.handle_http_exception
        return self.handle_all

    # ---- I/O ----

    def handle_io_error(self, exc: OSError, ctx: RequestContext) -> ErrorTranslation:
        if not is_client_disconnect(exc):
            return self.handle_all(exc, ctx)

        logger.info("[API:%s] Client disconnected; response suppressed", ctx.uri)
        if ctx.query_id:
            self._cancel_query(ctx.query_id)
        return ErrorTranslation.suppress()

    def _cancel_query(self, query_id: str) -> None:
        if self.canceller is None:
            logger.warning("No query canceller configured; query %s left running", query_id)
            return
        try:
            self.canceller.cancel_query(query_id)
        except Exception:
            logger.warning("Failed to cancel query %s after client disconnect", query_id, exc_info=True)

    # ---- Domain ----

    def handle_service_error(self, exc: ServiceError, ctx: RequestContext) -> ErrorTranslation:
        declared = self.registry.lookup(exc.kind)
        details = root_cause_message(exc)

        if declared is not None:
            status_code = declared
            response = ErrorResponse(code=exc.code, message=exc.message, details=details)
        else:
            status_code = HTTP_500
            response = ErrorResponse(code=exc.code, message=DEFAULT_GLOBAL_MESSAGE, details=details)

        self._log(ctx, response, exc_info=exc if self.print_stack_trace else None)
        return ErrorTranslation(status_code=status_code, body=response)

    def handle_prep_error(self, exc: PrepError, ctx: RequestContext) -> ErrorTranslation:
        declared = self.registry.lookup(exc.kind)

        if declared is not None:
            status_code = declared
            response = ErrorResponse(
                code=exc.code, message=exc.message_key, details=exc.message_detail
            )
        else:
            status_code = HTTP_500
            response = ErrorResponse(code=exc.code, message=DEFAULT_GLOBAL_MESSAGE, details=exc.message)

        self._log(ctx, response)
        return ErrorTranslation(status_code=status_code, body=response)

    # ---- Security / framework adapters ----

    def handle_access_denied(self, exc: AccessDeniedException, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(error_adapters.from_access_denied(exc), ctx)

    def handle_invalid_token(self, exc: InvalidTokenException, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(error_adapters.from_invalid_token(exc), ctx)

    def handle_invalid_grant(self, exc: InvalidGrantException, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(error_adapters.from_invalid_grant(exc), ctx)

    def handle_type_mismatch(self, exc: RequestValidationError, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(error_adapters.from_type_mismatch(exc), ctx)

    def handle_http_exception(self, exc: HTTPException, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(error_adapters.from_http_exception(exc), ctx)

    # ---- Catch-all ----

    def handle_all(self, exc: BaseException, ctx: RequestContext) -> ErrorTranslation:
        return self.handle_service_error(UnknownServerError(cause=exc), ctx)

    @staticmethod
    def _log(
        ctx: RequestContext, response: ErrorResponse, *, exc_info: BaseException | None = None
    ) -> None:
        logger.error(
            "[API:%s] %s %s: %s",
            ctx.uri,
            response.code or "",
            response.message,
            response.details,
            exc_info=exc_info,
        )
