"""Tests for the HTTP app: health check and API key protection."""

from pathlib import Path

import pytest
from starlette.testclient import TestClient

from ssh_probe.config import Config, HostKeyVerifier, Settings


def make_client(settings: Settings, tmp_path: Path) -> TestClient:
    """Test client for a fresh server's HTTP app."""
    from ssh_probe.server import create_server, http_middleware

    config = Config(
        settings=settings,
        host_keys=HostKeyVerifier(known_hosts_path=str(tmp_path / "known_hosts")),
    )
    server = create_server()
    return TestClient(server.http_app(middleware=http_middleware(config)))


class TestHealthCheck:
    """Tests for health check endpoint."""

    @pytest.fixture
    def client(self, tmp_path: Path) -> TestClient:
        return make_client(Settings(), tmp_path)

    def test_health_returns_ok(self, client: TestClient) -> None:
        """Health endpoint returns OK status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.text == "OK"

    def test_health_returns_plain_text(self, client: TestClient) -> None:
        """Health endpoint returns plain text content type."""
        response = client.get("/health")
        assert "text/plain" in response.headers["content-type"]


class TestHTTPAuth:
    """API keys guard everything except /health."""

    @pytest.fixture
    def client(self, tmp_path: Path) -> TestClient:
        return make_client(Settings(api_keys=["sekrit"]), tmp_path)

    def test_health_needs_no_key(self, client: TestClient) -> None:
        assert client.get("/health").status_code == 200

    def test_mcp_endpoint_needs_key(self, client: TestClient) -> None:
        response = client.post("/mcp", json={})
        assert response.status_code == 401
        assert response.json() == {"error": "Missing API key"}

    def test_mcp_endpoint_rejects_wrong_key(self, client: TestClient) -> None:
        response = client.post("/mcp", json={}, headers={"X-API-Key": "wrong"})
        assert response.status_code == 401


class TestHTTPMiddleware:
    """Tests for http_middleware."""

    def test_no_keys_means_no_middleware(self, tmp_path: Path) -> None:
        from ssh_probe.server import http_middleware

        config = Config(Settings(), HostKeyVerifier(str(tmp_path / "kh")))
        assert http_middleware(config) == []

    def test_auth_disabled_means_no_middleware(self, tmp_path: Path) -> None:
        from ssh_probe.server import http_middleware

        settings = Settings(api_keys=["k"], auth_enabled=False)
        config = Config(settings, HostKeyVerifier(str(tmp_path / "kh")))
        assert http_middleware(config) == []

    def test_keys_install_api_key_middleware(self, tmp_path: Path) -> None:
        from ssh_probe.middleware import APIKeyMiddleware
        from ssh_probe.server import http_middleware

        config = Config(Settings(api_keys=["k"]), HostKeyVerifier(str(tmp_path / "kh")))
        middleware = http_middleware(config)

        assert len(middleware) == 1
        assert middleware[0].cls is APIKeyMiddleware
        assert middleware[0].kwargs == {"api_keys": ["k"], "enabled": True}
