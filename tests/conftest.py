"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient

from src.api.main import create_app
from src.shared.config import Settings

# Outcome of one probe in the mocked Google API: a response, or an httpx
# exception class raised as if the transport failed
KeyOutcome = httpx.Response | type[httpx.RequestError]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fake Google API host and no static UI."""
    return Settings(
        model_name="gemini-test-pro",
        api_base_url="https://gemini.test/v1beta",
        probe_timeout=5.0,
        static_dir=tmp_path / "no-static-ui",
    )


@pytest.fixture
def app(settings: Settings):
    """FastAPI app built with test settings."""
    return create_app(settings)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async client driving the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def google_api(
    respx_mock: respx.MockRouter, settings: Settings
) -> Callable[[dict[str, KeyOutcome]], respx.Route]:
    """
    Mock the generateContent endpoint, answering each probe by its ``key`` param.

    Usage::

        route = google_api({"k1": httpx.Response(200, json={})})
    """

    def mock(outcomes: dict[str, KeyOutcome]) -> respx.Route:
        def handler(request: httpx.Request) -> httpx.Response:
            outcome = outcomes[request.url.params["key"]]
            if isinstance(outcome, httpx.Response):
                return outcome
            raise outcome("simulated transport failure", request=request)

        return respx_mock.post(
            host="gemini.test",
            path=f"/v1beta/models/{settings.model_name}:generateContent",
        ).mock(side_effect=handler)

    return mock


@pytest.fixture
def gemini_ok() -> Callable[[], httpx.Response]:
    """Factory for a successful generateContent response."""

    def build() -> httpx.Response:
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "OK"}]}}]},
        )

    return build


@pytest.fixture
def gemini_error() -> Callable[[int, str], httpx.Response]:
    """Factory for a Google API error response."""

    def build(status_code: int, message: str) -> httpx.Response:
        return httpx.Response(
            status_code,
            json={"error": {"code": status_code, "message": message, "status": "ERROR"}},
        )

    return build
