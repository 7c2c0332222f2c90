# Gemini Key Checker

from src.checker.client import GeminiProbeClient, build_probe_payload, mask_key
from src.checker.models import ProbeOutcome, ProbeResult
from src.checker.validator import (
    KeyValidator,
    ValidationRequestError,
    ensure_key_batch,
    extract_error_message,
)

__all__ = [
    "GeminiProbeClient",
    "KeyValidator",
    "ProbeOutcome",
    "ProbeResult",
    "ValidationRequestError",
    "build_probe_payload",
    "ensure_key_batch",
    "extract_error_message",
    "mask_key",
]
