"""
Tests for POST /check-keys.
"""

import httpx
import pytest
from httpx import AsyncClient

KEYS_REQUIRED = {"error": "API keys array is required."}


class TestCheckKeysValidation:
    """Unusable batches are rejected with 400 before any remote call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"keys": []},
            {},
            {"keys": None},
            {"keys": "AIzaSingleKeyNotInAList"},
            {"keys": {"0": "AIzaKey"}},
            {"apiKeys": ["AIzaKey"]},
        ],
    )
    async def test_unusable_batch_returns_400(
        self, client: AsyncClient, respx_mock, body
    ) -> None:
        response = await client.post("/check-keys", json=body)

        assert response.status_code == 400
        assert response.json() == KEYS_REQUIRED
        assert len(respx_mock.calls) == 0

    @pytest.mark.asyncio
    async def test_missing_body_returns_400(self, client: AsyncClient, respx_mock) -> None:
        response = await client.post("/check-keys")

        assert response.status_code == 400
        assert response.json() == KEYS_REQUIRED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [["AIzaKey"], "AIzaKey", 42, True])
    async def test_body_without_keys_object_returns_400(
        self, client: AsyncClient, respx_mock, body
    ) -> None:
        """
        Given: A JSON body that is not an object, so it has no keys member
        When: POST /check-keys
        Then: Same 400 as a missing keys array, and Google is never called
        """
        response = await client.post("/check-keys", json=body)

        assert response.status_code == 400
        assert response.json() == KEYS_REQUIRED
        assert len(respx_mock.calls) == 0

    @pytest.mark.asyncio
    async def test_json_null_body_returns_400(self, client: AsyncClient, respx_mock) -> None:
        response = await client.post(
            "/check-keys", content="null", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == KEYS_REQUIRED

    @pytest.mark.asyncio
    async def test_malformed_json_is_a_schema_error(self, client: AsyncClient, respx_mock) -> None:
        response = await client.post(
            "/check-keys", content="{\"keys\": [", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_validation_error_has_request_id(self, client: AsyncClient, respx_mock) -> None:
        response = await client.post("/check-keys", json={"keys": []})

        assert "X-Request-ID" in response.headers


class TestCheckKeysResults:
    """Per-key results come back in submission order."""

    @pytest.mark.asyncio
    async def test_pro_key(self, client: AsyncClient, google_api, gemini_ok) -> None:
        """
        Given: Google accepts the key
        When: POST /check-keys
        Then: Result has isPro true and no error fields at all
        """
        google_api({"AIzaPro": gemini_ok()})

        response = await client.post("/check-keys", json={"keys": ["AIzaPro"]})

        assert response.status_code == 200
        assert response.json() == [{"key": "AIzaPro", "isPro": True}]

    @pytest.mark.asyncio
    async def test_permission_denied_key(self, client: AsyncClient, google_api, gemini_error) -> None:
        google_api({"AIzaFree": gemini_error(403, "permission denied")})

        response = await client.post("/check-keys", json={"keys": ["AIzaFree"]})

        assert response.status_code == 200
        assert response.json() == [
            {"key": "AIzaFree", "isPro": False, "error": "permission denied", "statusCode": 403}
        ]

    @pytest.mark.asyncio
    async def test_unreachable_google(self, client: AsyncClient, google_api) -> None:
        google_api({"AIzaDns": httpx.ConnectError})

        response = await client.post("/check-keys", json={"keys": ["AIzaDns"]})

        assert response.status_code == 200
        assert response.json() == [
            {
                "key": "AIzaDns",
                "isPro": False,
                "error": "Network error or unable to reach Google API.",
                "statusCode": "N/A",
            }
        ]

    @pytest.mark.asyncio
    async def test_mixed_batch_keeps_order(
        self, client: AsyncClient, google_api, gemini_ok, gemini_error
    ) -> None:
        google_api(
            {
                "AIzaOne": gemini_error(400, "API key not valid. Please pass a valid API key."),
                "AIzaTwo": gemini_ok(),
                "AIzaThree": gemini_error(429, "Resource has been exhausted"),
                "AIzaFour": httpx.ReadTimeout,
            }
        )
        keys = ["AIzaOne", "AIzaTwo", "AIzaThree", "AIzaFour"]

        response = await client.post("/check-keys", json={"keys": keys})

        assert response.status_code == 200
        data = response.json()
        assert [item["key"] for item in data] == keys
        assert [item["isPro"] for item in data] == [False, True, False, False]
        assert [item.get("statusCode") for item in data] == [400, None, 429, "N/A"]

    @pytest.mark.asyncio
    async def test_internal_fault_keeps_batch_alive(
        self, client: AsyncClient, google_api, gemini_ok
    ) -> None:
        """
        Given: Three keys where the middle item cannot be probed at all
        When: POST /check-keys
        Then: 200 with three results and the placeholder in the middle
        """
        google_api({"AIzaA": gemini_ok(), "AIzaC": gemini_ok()})

        response = await client.post("/check-keys", json={"keys": ["AIzaA", 42, "AIzaC"]})

        assert response.status_code == 200
        assert response.json() == [
            {"key": "AIzaA", "isPro": True},
            {
                "key": "Unknown Key",
                "isPro": False,
                "error": "An unexpected error occurred during check.",
                "statusCode": 500,
            },
            {"key": "AIzaC", "isPro": True},
        ]

    @pytest.mark.asyncio
    async def test_success_response_has_tracing_headers(
        self, client: AsyncClient, google_api, gemini_ok
    ) -> None:
        google_api({"AIzaPro": gemini_ok()})

        response = await client.post(
            "/check-keys",
            json={"keys": ["AIzaPro"]},
            headers={"X-Request-ID": "client-supplied-id"},
        )

        assert response.headers["X-Request-ID"] == "client-supplied-id"
        assert response.headers["X-API-Version"] == "1.0.0"
