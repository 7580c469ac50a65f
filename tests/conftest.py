from __future__ import annotations

import json
from collections.abc import Generator
from datetime import timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from kanboard_mcp.config import Settings
from kanboard_mcp.mcp_server.dispatcher import ToolContext
from kanboard_mcp.mcp_server.schemas import BackendResult
from kanboard_mcp.utils.formatting import KanboardLinks

KANBOARD_URL = "http://kanboard.test"


class FakeKanboard:
    """In-memory Kanboard JSON-RPC peer served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.results: dict[str, object] = {}
        self.errors: dict[str, str] = {}
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        method = body["method"]
        if method in self.errors:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32000, "message": self.errors[method]}},
            )
        if method not in self.results:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32601, "message": "Method not found"}},
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": self.results[method]})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class StubBackend:
    """Backend double for dispatcher tests; records every call."""

    def __init__(self, results: dict[str, BackendResult] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, dict | None]] = []

    async def call(self, method: str, params: dict | None = None) -> BackendResult:
        self.calls.append((method, params))
        return self.results.get(method, BackendResult.failure(f"unexpected call {method}"))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        kanboard_url=KANBOARD_URL,
        kanboard_username="jsonrpc",
        kanboard_password="secret-token",
        display_timezone="UTC",
    )


@pytest.fixture
def fake_kanboard() -> FakeKanboard:
    return FakeKanboard()


@pytest.fixture
def stub_backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def tool_ctx(stub_backend) -> ToolContext:
    return ToolContext(backend=stub_backend, links=KanboardLinks(KANBOARD_URL), tz=timezone.utc)


@pytest.fixture
def test_ctx(settings, fake_kanboard) -> Generator[dict, None, None]:
    from kanboard_mcp.app import create_app

    app = create_app(settings, transport=fake_kanboard.transport())
    with TestClient(app) as client:
        yield {
            "client": client,
            "kanboard": fake_kanboard,
            "settings": settings,
        }
