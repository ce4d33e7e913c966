"""
tests.api.test_settings

Purpose:
    Environment-driven configuration parsing.
"""

from __future__ import annotations

import pytest

from backend.api.settings import get_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "SERVICE_NAME",
        "PRINT_STACK_TRACE",
        "ENGINE_BASE_URL",
        "ENGINE_CANCEL_TIMEOUT_S",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = get_settings()

    assert settings.print_stack_trace is True
    assert settings.engine_cancel_timeout_s == 2.0
    assert settings.api_v1_prefix == "/v1"


@pytest.mark.parametrize("raw, expected", [("false", False), ("0", False), ("YES", True), ("junk", True)])
def test_print_stack_trace_from_env(monkeypatch, raw, expected) -> None:
    monkeypatch.setenv("PRINT_STACK_TRACE", raw)

    assert get_settings().print_stack_trace is expected


def test_engine_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("ENGINE_BASE_URL", "http://druid-router:8888")
    monkeypatch.setenv("ENGINE_CANCEL_TIMEOUT_S", "not-a-number")

    settings = get_settings()

    assert settings.engine_base_url == "http://druid-router:8888"
    assert settings.engine_cancel_timeout_s == 2.0
