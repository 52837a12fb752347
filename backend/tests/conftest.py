"""
Test configuration and fixtures.
"""
import json
from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from relay.api import create_app
from relay.client import CompletionClient
from relay.config import Settings
from relay.deps import get_app_settings, get_completion_client


class ProviderStub:
    """Deterministic stand-in for the completion provider.

    Records every outbound request so tests can assert on call counts and
    request bodies.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"choices": [{"message": {"role": "assistant", "content": "X"}}]}
        self.raw_body: bytes | None = None
        self.error: Exception | None = None
        self.transport = httpx.MockTransport(self.handler)

    def reply_with(self, content: str | None) -> None:
        self.status_code = 200
        self.payload = {"choices": [{"message": {"role": "assistant", "content": content}}]}

    def fail_with(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self.payload = payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def make_settings(**overrides: Any) -> Settings:
    """Fake configuration; never reads a local .env file."""
    values: dict[str, Any] = {
        "OPENAI_API_KEY": "test-key",
        "OPENAI_BASE_URL": "https://provider.test/v1/",
        "OPENAI_MODEL": "mock-model",
        "LOG_FORMAT": "console",
        "LOG_LEVEL": "DEBUG",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def provider() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def unconfigured_settings() -> Settings:
    return make_settings(OPENAI_API_KEY=None)


def build_app(settings: Settings, provider: ProviderStub) -> FastAPI:
    """Create the app with the provider swapped for the stub."""
    app = create_app(settings)

    def stub_client(app_settings: Settings = Depends(get_app_settings)) -> CompletionClient:
        return CompletionClient(app_settings, transport=provider.transport)

    app.dependency_overrides[get_completion_client] = stub_client
    return app


@pytest_asyncio.fixture
async def client(settings: Settings, provider: ProviderStub) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing the FastAPI app."""
    transport = ASGITransport(app=build_app(settings, provider))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def unconfigured_client(
    unconfigured_settings: Settings, provider: ProviderStub
) -> AsyncGenerator[AsyncClient, None]:
    """Client against an app with no OPENAI_API_KEY configured."""
    transport = ASGITransport(app=build_app(unconfigured_settings, provider))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def app_factory(provider: ProviderStub):
    """Build an app for ad-hoc settings, wired to the shared provider stub."""
    def _build(app_settings: Settings) -> FastAPI:
        return build_app(app_settings, provider)
    return _build
