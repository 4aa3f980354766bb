"""
Exception handlers for FastAPI applications using neo-toolkit.

Translates every ``ToolkitError`` raised inside a route into the standard
JSON envelope with the status code from the HTTP mapping.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import ToolkitError, get_http_status_code
from ..http.responses import error_json

logger = logging.getLogger(__name__)


class ExceptionHandlerRegistry:
    """Registry for toolkit exception handlers."""

    def __init__(self, is_production: bool = True):
        """
        Initialize exception handler registry.

        Args:
            is_production: Hide messages of server-side errors (5xx) from clients
        """
        self.is_production = is_production

    def build_response(self, exc: ToolkitError, status_code: Optional[int] = None) -> JSONResponse:
        """Build the envelope response for a toolkit exception."""
        status_code = status_code or get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}", exc_info=exc)
            if self.is_production:
                return error_json("an unexpected error occurred", status_code=status_code)
        return error_json(exc, status_code=status_code)

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(ToolkitError)
        async def toolkit_exception_handler(request: Request, exc: ToolkitError):
            """Handle toolkit exceptions."""
            return self.build_response(exc)


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """
    Register toolkit exception handlers for a FastAPI application.

    Args:
        app: FastAPI application instance
        is_production: Hide messages of server-side errors from clients
    """
    registry = ExceptionHandlerRegistry(is_production)
    registry.register_handlers(app)
