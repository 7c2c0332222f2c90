"""
Batch validation of Gemini API keys.

Every candidate key gets one independent probe. All probes run
concurrently and the batch waits for every one of them; a probe's outcome
is always folded into a ProbeResult, so the batch itself cannot fail once
the input has been accepted.
"""

import asyncio
from collections import Counter
from collections.abc import Sequence
from typing import Any

import httpx
import structlog

from src.checker.client import GeminiProbeClient, mask_key
from src.checker.models import UNKNOWN_REMOTE_ERROR, ProbeOutcome, ProbeResult
from src.shared.config import Settings

logger = structlog.get_logger(__name__)

KEYS_REQUIRED_MESSAGE = "API keys array is required."


class ValidationRequestError(Exception):
    """The submitted batch is missing, not a list, or empty."""

    def __init__(self, message: str = KEYS_REQUIRED_MESSAGE):
        self.message = message
        super().__init__(message)


def ensure_key_batch(candidate_keys: Any) -> list[Any]:
    """
    Check that the batch is a non-empty list.

    Individual items are not inspected here; an item that cannot be probed
    surfaces later as an internal fault at its position.

    Raises:
        ValidationRequestError: If the batch is absent, not a list, or empty.
    """
    if not candidate_keys or not isinstance(candidate_keys, list):
        raise ValidationRequestError()
    return candidate_keys


def extract_error_message(response: httpx.Response) -> str:
    """
    Pull ``error.message`` out of a Google API error body.

    Raises:
        ValueError: If the body is not valid JSON.
    """
    data = response.json()
    error = data.get("error") if isinstance(data, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str) and message:
        return message
    return UNKNOWN_REMOTE_ERROR


class KeyValidator:
    """Validates batches of candidate keys against the configured Pro model."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _client(self) -> GeminiProbeClient:
        return GeminiProbeClient(self._settings)

    async def probe_key(
        self, key: str, client: GeminiProbeClient | None = None
    ) -> ProbeResult:
        """
        Probe a single key and classify the outcome.

        Args:
            key: Candidate key.
            client: Open probe client to reuse; a private one is opened if omitted.

        Returns:
            A Pro, rejected, or transport-failure result.
        """
        if client is None:
            async with self._client() as own_client:
                return await self.probe_key(key, own_client)

        try:
            response = await client.send_probe(key)
        except httpx.RequestError as e:
            logger.warning(
                "Key probe network error",
                key=mask_key(key),
                error_type=type(e).__name__,
                error=str(e),
            )
            return ProbeResult.transport_failure(key)

        if response.is_success:
            logger.info("Key is Pro", key=mask_key(key))
            return ProbeResult.pro(key)

        try:
            message = extract_error_message(response)
        except ValueError as e:
            logger.warning(
                "Key probe returned unreadable error body",
                key=mask_key(key),
                status_code=response.status_code,
                error=str(e),
            )
            return ProbeResult.transport_failure(key)

        logger.info(
            "Key rejected",
            key=mask_key(key),
            status_code=response.status_code,
            message=message,
        )
        return ProbeResult.rejected(key, message, response.status_code)

    async def validate_keys(self, candidate_keys: Sequence[str]) -> list[ProbeResult]:
        """
        Probe every key concurrently and return results in input order.

        Raises:
            ValidationRequestError: If the batch is absent, not a list, or empty.
        """
        keys = ensure_key_batch(candidate_keys)

        logger.info(
            "Key check batch received",
            key_count=len(keys),
            model=self._settings.model_name,
        )

        async with self._client() as client:
            outcomes = await asyncio.gather(
                *(self.probe_key(key, client) for key in keys),
                return_exceptions=True,
            )

        results: list[ProbeResult] = []
        for position, outcome in enumerate(outcomes):
            if isinstance(outcome, ProbeResult):
                results.append(outcome)
                continue
            if not isinstance(outcome, Exception):
                raise outcome
            logger.error(
                "Unexpected error during key check",
                position=position,
                error_type=type(outcome).__name__,
                error=str(outcome),
                exc_info=outcome,
            )
            results.append(ProbeResult.internal_fault())

        counts = Counter(result.outcome for result in results)
        logger.info(
            "Key check batch complete",
            key_count=len(results),
            **{outcome.value: counts.get(outcome, 0) for outcome in ProbeOutcome},
        )
        return results
