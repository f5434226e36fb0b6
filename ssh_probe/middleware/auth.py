"""API key authentication for the HTTP transport."""

import hashlib
import logging
import secrets
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Paths reachable without a key, for monitoring
PUBLIC_PATHS = frozenset({"/health"})


def _hash_key_for_logging(key: str) -> str:
    """First 8 hex chars of the key's SHA-256, safe to log."""
    return hashlib.sha256(key.encode()).hexdigest()[:8]


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Rejects HTTP requests without a valid X-API-Key header.

    Uses constant-time comparison to prevent timing attacks.
    """

    def __init__(self, app: Any, api_keys: list[str], enabled: bool = True):
        """Initialize auth middleware.

        Args:
            app: Wrapped ASGI application
            api_keys: List of valid API keys
            enabled: Whether to enforce authentication
        """
        super().__init__(app)
        self.api_keys = api_keys
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        if not self.enabled or not self.api_keys or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key")
        if not api_key:
            return JSONResponse(status_code=401, content={"error": "Missing API key"})

        if not self._validate_key(api_key):
            logger.warning(
                "Invalid API key attempt (hash: %s) from %s",
                _hash_key_for_logging(api_key),
                self._get_client_ip(request),
            )
            return JSONResponse(status_code=401, content={"error": "Invalid API key"})

        return await call_next(request)

    def _validate_key(self, provided_key: str) -> bool:
        return any(
            secrets.compare_digest(provided_key.encode(), valid_key.encode())
            for valid_key in self.api_keys
        )

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"
