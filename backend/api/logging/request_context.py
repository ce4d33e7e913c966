"""
backend.api.logging.request_context

Purpose:
    Request-scoped context storage using contextvars.
    Holds the request id (for logs) and the id of the engine query currently
    running for this request (for cancellation on client disconnect).

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

request_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id",
    default=None,
)

query_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "query_id",
    default=None,
)


def bind_query_id(query_id: str | None, *, request: Any = None) -> contextvars.Token[str | None]:
    """
    Record the engine query id for the current request.

    Code that submits a query calls this before waiting on the engine, so a
    disconnect during the wait can cancel the right query.

    Sync endpoints run in a worker thread whose context changes are not seen by the
    exception handlers; pass `request` so the id is also stored on `request.state`.
    """
    if request is not None:
        request.state.query_id = query_id or None
    return query_id_ctx_var.set(query_id or None)


def get_current_query_id() -> str | None:
    return query_id_ctx_var.get()


@dataclass(frozen=True)
class RequestContext:
    """Read-only view of the failed request, passed explicitly to the error translator."""

    uri: str
    query_id: str | None = None
