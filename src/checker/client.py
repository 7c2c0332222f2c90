"""
HTTP client for probing Gemini API keys.

Each probe is a single ``generateContent`` call against the configured Pro
model, capped at two output tokens so a valid key costs next to nothing.
"""

from typing import Any

import httpx
import structlog

from src.shared.config import Settings

logger = structlog.get_logger(__name__)

PROBE_PROMPT = "Check Pro status"
PROBE_MAX_OUTPUT_TOKENS = 2
PROBE_KEEPALIVE_CONNECTIONS = 20


def mask_key(key: str) -> str:
    """Shorten a key for logging so the full credential never hits the logs."""
    return f"{key[:8]}..."


def build_probe_payload() -> dict[str, Any]:
    """Return the fixed minimal generation request body."""
    return {
        "contents": [{"parts": [{"text": PROBE_PROMPT}]}],
        "generationConfig": {"maxOutputTokens": PROBE_MAX_OUTPUT_TOKENS},
    }


class GeminiProbeClient:
    """
    Async client that sends validation probes to the Generative Language API.

    One instance serves one batch: the underlying ``httpx.AsyncClient`` is
    opened on entry and closed on exit. Probes share its connection pool
    and nothing else.
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the probe client.

        Args:
            settings: Deployment settings (model, base URL, timeout).
        """
        self._settings = settings
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GeminiProbeClient":
        # No pool cap or pool timeout: every probe in a batch connects at once
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.probe_timeout, pool=None),
            limits=httpx.Limits(
                max_connections=None,
                max_keepalive_connections=PROBE_KEEPALIVE_CONNECTIONS,
            ),
            headers={"Content-Type": "application/json"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def model_url(self) -> str:
        return f"{self._settings.api_base_url}/models/{self._settings.model_name}:generateContent"

    def build_probe_url(self, key: str) -> str:
        """
        Return the probe URL with the key as the ``key`` query credential.

        Raises:
            TypeError: If ``key`` is not a string.
        """
        if not isinstance(key, str):
            raise TypeError(f"API key must be a string, got {type(key).__name__}")
        return str(httpx.URL(self.model_url, params={"key": key}))

    async def send_probe(self, key: str) -> httpx.Response:
        """
        POST the probe request for one key.

        Raises:
            httpx.TransportError: If no HTTP response was obtained.
        """
        assert self._client is not None, "Client not initialized. Use async context manager."

        url = self.build_probe_url(key)
        logger.debug("Sending key probe", key=mask_key(key), model=self._settings.model_name)
        return await self._client.post(url, json=build_probe_payload())
