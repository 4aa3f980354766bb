"""Base exceptions for neo-toolkit.

This module defines the root of the exception hierarchy. Every exception
carries an error code, a human-readable message and a details mapping so
that callers can turn it into an API response without inspecting strings.
"""

from typing import Any, Dict, Optional


class ToolkitError(Exception):
    """Base exception for all neo-toolkit errors.

    The message is always safe to show to the client that sent the request;
    anything more sensitive belongs in ``details`` or the exception chain.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the exception for structured responses and logs."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as get_mapped_status_code
    return get_mapped_status_code(exception)


def create_error_response(exception: ToolkitError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The neo-toolkit exception

    Returns:
        Error response dictionary
    """
    return {"error": exception.to_dict()}
