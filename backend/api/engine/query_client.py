"""
backend.api.engine.query_client

Purpose:
    Client for the query engine operations the API needs outside of query execution.
    Currently: cancelling an in-flight query when the requesting client has gone away.

Notes:
    - Cancellation is best effort; callers are expected to log and ignore QueryCancelError.
    - Uses a short timeout so a slow engine cannot hold up error handling.

Author:
    Kanir Pandya

Created:
    2026-10-17
"""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)


class QueryCancelError(RuntimeError):
    pass


class QueryCanceller(Protocol):
    def cancel_query(self, query_id: str) -> None: ...


class DruidQueryCanceller:
    """Cancels Druid queries via `DELETE /druid/v2/{queryId}` on the broker/router."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def cancel_query(self, query_id: str) -> None:
        url = f"{self.base_url}/druid/v2/{quote(query_id, safe='')}"
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as http_client:
                response = http_client.delete(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise QueryCancelError(f"Failed to cancel query {query_id}: {e}") from e

        logger.info("engine: cancelled query %s", query_id)
