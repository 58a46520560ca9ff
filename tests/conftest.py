"""Shared fixtures: an app wired to a simulated Gemini upstream."""

from __future__ import annotations

from typing import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings


class FakeUpstream:
    """Records outbound requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: str = "{}"
        self.error: Exception | None = None

    def respond(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body

    def fail(self, error: Exception) -> None:
        self.error = error

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings(tmp_path) -> Settings:
    (tmp_path / "index.html").write_text("<html><body>Gemini Relay</body></html>")
    return Settings(google_api_key="test-key", static_dir=str(tmp_path))


@pytest.fixture
def make_client(upstream: FakeUpstream) -> Iterator[Callable[[Settings], TestClient]]:
    clients: list[TestClient] = []

    def _make(settings: Settings) -> TestClient:
        app = create_app(settings, transport=httpx.MockTransport(upstream.handler))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    return make_client(settings)
