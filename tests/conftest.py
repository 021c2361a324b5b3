"""
Pytest configuration and fixtures for webflow-tools tests.

The Webflow API is faked with an httpx.MockTransport that records every
request and answers from a queue of canned responses.
"""

import json
from typing import Any

import httpx
import pytest

from webflow_tools.client import WebflowClient
from webflow_tools.config import Settings
from webflow_tools.tools.base import ToolContext


class FakeWebflow:
    """Queue-driven stand-in for the Webflow API."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def respond(self, body: Any = None, status: int = 200) -> None:
        """Queue a JSON response."""
        self._responses.append(httpx.Response(status, json=body if body is not None else {}))

    def respond_text(self, text: str, status: int) -> None:
        """Queue a raw text response."""
        self._responses.append(httpx.Response(status, text=text))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            msg = f"Unexpected request: {request.method} {request.url}"
            raise AssertionError(msg)
        return self._responses.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def body(self, index: int = 0) -> Any:
        """Decoded JSON body of the request at ``index``."""
        return json.loads(self.requests[index].content)

    def path(self, index: int = 0) -> str:
        """Path of the request at ``index`` relative to the API root."""
        return self.requests[index].url.path.removeprefix("/v2")


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "api_key": "test-api-key",
        "site_id": "test-site-id",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fake_api() -> FakeWebflow:
    return FakeWebflow()


@pytest.fixture
def settings_factory():
    """Build settings with test defaults and the given overrides."""
    return make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings: Settings, fake_api: FakeWebflow) -> WebflowClient:
    return WebflowClient(settings, transport=fake_api.transport)


@pytest.fixture
def context(settings: Settings, client: WebflowClient) -> ToolContext:
    return ToolContext(settings=settings, client=client)


@pytest.fixture
def context_factory(fake_api: FakeWebflow):
    """Build a context with custom settings on the shared fake API."""

    def build(**overrides: Any) -> ToolContext:
        custom = make_settings(**overrides)
        return ToolContext(
            settings=custom,
            client=WebflowClient(custom, transport=fake_api.transport),
        )

    return build
