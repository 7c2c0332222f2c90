"""
Key check endpoint.

POST /check-keys takes ``{"keys": [...]}`` and returns one result per key,
in the order submitted.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from src.api.dependencies import KeyValidatorDep
from src.api.schemas import keys_from_body
from src.checker.models import ProbeResult

router = APIRouter()


@router.post(
    "/check-keys",
    response_model=list[ProbeResult],
    response_model_exclude_none=True,
    responses={400: {"description": "API keys array is missing, not an array, or empty"}},
)
async def check_keys(
    validator: KeyValidatorDep,
    payload: Annotated[
        Any,
        Body(
            description="Object with a ``keys`` array of candidate Gemini API keys, in display order",
            examples=[{"keys": ["AIzaSyExampleKeyOne", "AIzaSyExampleKeyTwo"]}],
        ),
    ] = None,
) -> list[ProbeResult]:
    """
    Check which of the submitted keys can call the configured Pro model.

    Keys that fail are reported with the remote error message and status;
    the request as a whole only fails when the batch itself is unusable.
    """
    return await validator.validate_keys(keys_from_body(payload))
