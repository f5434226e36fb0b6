"""Logging middleware for tool calls and resource reads."""

import json
import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from ssh_probe.middleware.base import ProbeMiddleware

# Tool arguments whose values must never reach the logs
REDACTED_ARGUMENTS = frozenset({"password", "secret", "passphrase", "api_key"})
REDACTED = "***"

# Shown as user@host:port instead of key=value
TARGET_ARGUMENTS = ("user", "host", "port")


def redact_arguments(args: dict[str, Any] | None) -> dict[str, Any]:
    """Copy of tool arguments with credential values masked."""
    if not args:
        return {}
    return {
        key: REDACTED if key.lower() in REDACTED_ARGUMENTS and value else value
        for key, value in args.items()
    }


class LoggingMiddleware(ProbeMiddleware):
    """Logs MCP tool calls and resource reads with timing.

    A tool call produces a ">>>" line with the target and redacted
    arguments, then "<<<" (or "!!!" on exception) with a result summary
    and duration. Completions slower than ``slow_threshold_ms`` are
    logged as warnings.

    Example:
        >>> middleware = LoggingMiddleware(include_payloads=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Also log redacted arguments and results at DEBUG.
            max_payload_length: Maximum payload length before truncation.
            slow_threshold_ms: Threshold in ms for slow request warnings.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms

    def _truncate(self, data: Any) -> str:
        try:
            text = json.dumps(data, default=str)
        except (TypeError, ValueError):
            text = str(data)

        if len(text) > self.max_payload_length:
            return text[: self.max_payload_length] + "... [truncated]"
        return text

    def _describe_call(self, tool_name: str, args: dict[str, Any] | None) -> str:
        """Render 'name user@host:port (other=args)' with credentials masked."""
        args = redact_arguments(args)
        label = tool_name

        if "host" in args:
            user = args.get("user", "?")
            label = f"{label} {user}@{args['host']}:{args.get('port', 22)}"

        rest = []
        for key, value in args.items():
            if key in TARGET_ARGUMENTS:
                continue
            if isinstance(value, str) and len(value) > 50:
                value = value[:50] + "..."
            rest.append(f"{key}={value!r}")

        return f"{label} ({', '.join(rest)})" if rest else label

    def _elapsed(self, start: float) -> tuple[float, str]:
        """Duration in ms since start, and its display form."""
        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms >= self.slow_threshold_ms:
            return duration_ms, f"{duration_ms:.1f}ms SLOW!"
        return duration_ms, f"{duration_ms:.1f}ms"

    async def _timed(self, kind: str, label: str, context: MiddlewareContext, call_next: Any) -> Any:
        """Log entry, then exit or failure, around one handler call."""
        start = time.perf_counter()
        self.logger.info(">>> %s: %s", kind, label)

        try:
            result = await call_next(context)
        except Exception as e:
            _, duration = self._elapsed(start)
            self.logger.error(
                "!!! %s: %s -> %s: %s [%s]", kind, label, type(e).__name__, e, duration
            )
            raise

        duration_ms, duration = self._elapsed(start)
        level = logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        self.logger.log(
            level,
            "<<< %s: %s -> %s [%s]",
            kind,
            label,
            self._summarize_result(result),
            duration,
        )
        return result

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log tool calls with target, redacted arguments and timing."""
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)

        if self.include_payloads and args:
            self.logger.debug("    Args: %s", self._truncate(redact_arguments(args)))

        result = await self._timed("TOOL", self._describe_call(tool_name, args), context, call_next)

        if self.include_payloads and result is not None:
            self.logger.debug("    Result: %s", self._truncate(result))
        return result

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log resource reads with URI and timing."""
        uri = str(getattr(context.message, "uri", "unknown"))
        return await self._timed("RESOURCE", uri, context, call_next)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log other MCP methods at debug level."""
        method = context.method
        if method in ("tools/call", "resources/read"):
            return await call_next(context)

        start = time.perf_counter()
        self.logger.debug(">>> MCP: %s", method)
        result = await call_next(context)
        _, duration = self._elapsed(start)
        self.logger.debug("<<< MCP: %s [%s]", method, duration)
        return result

    def _summarize_result(self, result: Any) -> str:
        """Brief summary of a result for logging."""
        if result is None:
            return "null"
        if isinstance(result, str):
            lines = result.count("\n") + 1
            return f"{len(result)} chars, {lines} lines" if lines > 1 else f"{len(result)} chars"
        if isinstance(result, (list, tuple)):
            return f"{len(result)} items"
        if isinstance(result, dict):
            return f"{len(result)} keys"

        # ToolResult / ReadResourceResult
        content = getattr(result, "content", None) or getattr(result, "contents", None)
        if isinstance(content, (list, tuple)):
            return f"{len(content)} content item(s)"
        return type(result).__name__
