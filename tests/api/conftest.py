"""
tests.api.conftest

Shared pytest fixtures for API tests.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.api.contracts.status_registry import default_status_registry
from backend.api.main import create_app
from backend.api.settings import Settings
from backend.api.translator import ErrorTranslator


class FakeCanceller:
    """Records cancel_query calls instead of talking to the engine."""

    def __init__(self, *, fail: bool = False) -> None:
        self.cancelled: list[str] = []
        self.fail = fail

    def cancel_query(self, query_id: str) -> None:
        self.cancelled.append(query_id)
        if self.fail:
            raise RuntimeError("engine unreachable")


@pytest.fixture()
def canceller_factory():
    return FakeCanceller


@pytest.fixture()
def canceller(canceller_factory) -> FakeCanceller:
    return canceller_factory()


@pytest.fixture()
def translator(canceller) -> ErrorTranslator:
    return ErrorTranslator(default_status_registry(), canceller=canceller, print_stack_trace=False)


@pytest.fixture()
def app_factory(canceller):
    """
    Factory fixture that creates a fresh app with a recording canceller.

    Tests add their own failing routes to the returned app.
    """

    def _make(**settings_overrides):
        settings = Settings(**settings_overrides)
        return create_app(settings, canceller=canceller)

    return _make


@pytest.fixture()
def client_factory(app_factory):
    """
    Factory fixture that creates a fresh TestClient.

    IMPORTANT:
        Server exceptions are re-raised by the client, so any error escaping the
        error boundary fails the test.
    """

    def _make(app=None) -> TestClient:
        return TestClient(app or app_factory(), raise_server_exceptions=True)

    return _make


@pytest.fixture()
def client(client_factory) -> TestClient:
    return client_factory()
