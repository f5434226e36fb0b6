"""Error handling middleware for MCP handlers."""

import logging
import traceback
from collections import Counter
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from ssh_probe.errors import ProbeError
from ssh_probe.middleware.base import ProbeMiddleware

ErrorCallback = Callable[[Exception, MiddlewareContext], None]

# Raised for bad input or an unusable target; no traceback needed
EXPECTED_ERRORS: tuple[type[Exception], ...] = (ProbeError, ValueError)


class ErrorHandlingMiddleware(ProbeMiddleware):
    """Logs and counts exceptions escaping MCP handlers, then re-raises.

    Tools report refused/timed-out probes and failed commands as text, so
    what reaches this layer is either an expected error (ProbeError,
    ValueError), logged as a warning, or a bug, logged as an error.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Append tracebacks of unexpected errors.
            error_callback: Optional callback called with (exception, context).
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._errors: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Error counts by exception type name."""
        return dict(self._errors)

    def reset_stats(self) -> None:
        self._errors.clear()

    def _describe(self, context: MiddlewareContext) -> str:
        """Method name, plus the tool or resource it targets."""
        name = getattr(context.message, "name", None) or getattr(context.message, "uri", None)
        if isinstance(name, str):
            return f"{context.method} [{name}]"
        return str(context.method)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Run the next handler, logging any exception before re-raising."""
        try:
            return await call_next(context)
        except Exception as e:
            error_type = type(e).__name__
            self._errors[error_type] += 1
            where = self._describe(context)

            if isinstance(e, EXPECTED_ERRORS):
                self.logger.warning("Error in %s: %s: %s", where, error_type, e)
            elif self.include_traceback:
                self.logger.error(
                    "Error in %s: %s: %s\n%s", where, error_type, e, traceback.format_exc()
                )
            else:
                self.logger.error("Error in %s: %s: %s", where, error_type, e)

            if self.error_callback:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)

            raise
