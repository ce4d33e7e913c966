"""
backend.api.logging.context_filter

Purpose:
    Logging filter that injects request_id and query_id from contextvars into log records.

Author:
    Kanir Pandya

Created:
    2026-02-15

Updated:
    2026-10-17
"""

from __future__ import annotations

import logging

from backend.api.logging.request_context import query_id_ctx_var, request_id_ctx_var


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx_var.get() or "-"
        record.query_id = query_id_ctx_var.get() or "-"
        return True
