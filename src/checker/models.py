"""
Data models for key probe results.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Sentinel status for probes that never received an HTTP response
TRANSPORT_FAILURE_STATUS = "N/A"

UNKNOWN_KEY = "Unknown Key"
UNKNOWN_REMOTE_ERROR = "未知错误"
TRANSPORT_FAILURE_MESSAGE = "Network error or unable to reach Google API."
INTERNAL_FAULT_MESSAGE = "An unexpected error occurred during check."


class ProbeOutcome(StrEnum):
    """Classification of a single key probe."""

    PRO = "pro"
    REJECTED = "rejected"
    TRANSPORT_FAILURE = "transport_failure"
    INTERNAL_FAULT = "internal_fault"


class ProbeResult(BaseModel):
    """
    Outcome of validating one candidate key.

    Serialized with camelCase aliases and without unset fields, so a Pro key
    renders as ``{"key": ..., "isPro": true}``. ``outcome`` is server-side
    only: the named constructors set it, and a result built directly gets
    PRO or REJECTED from ``is_pro``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    is_pro: bool = Field(alias="isPro")
    error: str | None = None
    status_code: int | str | None = Field(default=None, alias="statusCode")
    outcome: ProbeOutcome = Field(default=ProbeOutcome.REJECTED, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _default_outcome(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("outcome") is None:
            is_pro = data.get("is_pro", data.get("isPro"))
            data = {**data, "outcome": ProbeOutcome.PRO if is_pro else ProbeOutcome.REJECTED}
        return data

    @classmethod
    def pro(cls, key: str) -> "ProbeResult":
        return cls(key=key, is_pro=True, outcome=ProbeOutcome.PRO)

    @classmethod
    def rejected(cls, key: str, message: str, status_code: int) -> "ProbeResult":
        return cls(
            key=key,
            is_pro=False,
            error=message,
            status_code=status_code,
            outcome=ProbeOutcome.REJECTED,
        )

    @classmethod
    def transport_failure(cls, key: str) -> "ProbeResult":
        return cls(
            key=key,
            is_pro=False,
            error=TRANSPORT_FAILURE_MESSAGE,
            status_code=TRANSPORT_FAILURE_STATUS,
            outcome=ProbeOutcome.TRANSPORT_FAILURE,
        )

    @classmethod
    def internal_fault(cls) -> "ProbeResult":
        """Placeholder for a probe that crashed; the submitted key is not echoed."""
        return cls(
            key=UNKNOWN_KEY,
            is_pro=False,
            error=INTERNAL_FAULT_MESSAGE,
            status_code=500,
            outcome=ProbeOutcome.INTERNAL_FAULT,
        )
