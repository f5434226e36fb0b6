"""Tests for API key authentication middleware."""

from unittest.mock import patch

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from ssh_probe.middleware.auth import APIKeyMiddleware, _hash_key_for_logging


async def homepage(request: Request) -> PlainTextResponse:
    return PlainTextResponse("secret stuff")


async def health(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


def make_client(api_keys: list[str], enabled: bool = True) -> TestClient:
    """Starlette app behind APIKeyMiddleware."""
    app = Starlette(
        routes=[Route("/mcp", homepage), Route("/health", health)],
        middleware=[Middleware(APIKeyMiddleware, api_keys=api_keys, enabled=enabled)],
    )
    return TestClient(app)


class TestAPIKeyMiddleware:
    """Tests for HTTP API key checks."""

    def test_valid_key_passes(self) -> None:
        client = make_client(["key-1", "key-2"])
        response = client.get("/mcp", headers={"X-API-Key": "key-2"})

        assert response.status_code == 200
        assert response.text == "secret stuff"

    def test_missing_key_rejected(self) -> None:
        response = make_client(["key-1"]).get("/mcp")

        assert response.status_code == 401
        assert response.json() == {"error": "Missing API key"}

    def test_invalid_key_rejected(self) -> None:
        response = make_client(["key-1"]).get("/mcp", headers={"X-API-Key": "nope"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid API key"}

    def test_health_is_public(self) -> None:
        response = make_client(["key-1"]).get("/health")
        assert response.status_code == 200

    def test_disabled_allows_all(self) -> None:
        response = make_client(["key-1"], enabled=False).get("/mcp")
        assert response.status_code == 200

    def test_no_keys_allows_all(self) -> None:
        response = make_client([]).get("/mcp")
        assert response.status_code == 200


class TestAPIKeyLoggingSecurity:
    """API keys are never logged in plaintext."""

    def test_invalid_key_logged_as_hash(self) -> None:
        with patch("ssh_probe.middleware.auth.logger") as mock_logger:
            make_client(["key-1"]).get(
                "/mcp",
                headers={"X-API-Key": "attacker-key", "X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
            )

        mock_logger.warning.assert_called_once()
        logged = str(mock_logger.warning.call_args)
        assert "attacker-key" not in logged
        assert _hash_key_for_logging("attacker-key") in logged
        assert "203.0.113.9" in logged

    @pytest.mark.parametrize("key", ["a", "a" * 100])
    def test_hash_is_short_hex(self, key: str) -> None:
        digest = _hash_key_for_logging(key)
        assert len(digest) == 8
        int(digest, 16)
