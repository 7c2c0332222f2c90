"""
Pydantic schemas for API requests and responses.

Key check responses use src.checker.models.ProbeResult directly.
"""

from typing import Any

from pydantic import BaseModel


def keys_from_body(payload: Any) -> Any:
    """
    Return the ``keys`` member of a POST /check-keys body.

    The body is accepted as any JSON value. Anything other than an object
    yields None, so a bare array, string or number is reported with the
    checker's own 400 message rather than a schema validation error.
    """
    if isinstance(payload, dict):
        return payload.get("keys")
    return None


class HealthResponse(BaseModel):
    """Response body for GET /api/v1/health."""

    status: str
    model: str
    version: str
