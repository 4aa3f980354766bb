"""HTTP status code mapping for exceptions.

Maps every neo-toolkit exception to the status code an API should answer
with. Subclasses without their own entry inherit the status of the nearest
mapped ancestor, and callers may override individual classes at runtime.
"""

from typing import Any, Dict, Optional, Type

from .base import ToolkitError
from .upload import (
    UploadError,
    PayloadTooLargeError,
    UnsupportedFileTypeError,
    UploadIOError,
    NoFilesUploadedError,
)
from .decoding import (
    JSONBodyError,
    BodyTooLargeError,
    DecodeTargetError,
)
from .misc import SlugifyError, StaticFileNotFoundError, RemoteRequestError


# Static HTTP status code mapping
HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    UploadError: 400,
    NoFilesUploadedError: 400,
    JSONBodyError: 400,
    SlugifyError: 400,

    # 404 Not Found
    StaticFileNotFoundError: 404,

    # 413 Payload Too Large
    PayloadTooLargeError: 413,
    BodyTooLargeError: 413,

    # 415 Unsupported Media Type
    UnsupportedFileTypeError: 415,

    # 500 Internal Server Error
    UploadIOError: 500,
    DecodeTargetError: 500,

    # 502 Bad Gateway
    RemoteRequestError: 502,

    # Default for ToolkitError
    ToolkitError: 500,
}


class HttpStatusMapper:
    """HTTP status code mapper with per-class overrides."""

    def __init__(self, overrides: Optional[Dict[Type[Exception], int]] = None):
        """Initialize with optional overrides.

        Args:
            overrides: Exception classes mapped to the status they should use
                instead of the default table
        """
        self._overrides = dict(overrides or {})
        self._cache: Dict[Type[Exception], int] = {}

    def get_status_code(self, exception: Exception) -> int:
        """Get HTTP status code for exception.

        Args:
            exception: The exception instance

        Returns:
            HTTP status code (cached per exception class)
        """
        exception_type = type(exception)

        if exception_type in self._cache:
            return self._cache[exception_type]

        status_code = 500
        for klass in exception_type.__mro__:
            if klass in self._overrides:
                status_code = self._overrides[klass]
                break
            if klass in HTTP_STATUS_MAP:
                status_code = HTTP_STATUS_MAP[klass]
                break

        self._cache[exception_type] = status_code
        return status_code

    def clear_cache(self) -> None:
        """Clear the status code cache."""
        self._cache.clear()

    def get_mapping_stats(self) -> Dict[str, Any]:
        """Get statistics about current mappings."""
        return {
            "cached_mappings": len(self._cache),
            "default_mappings": len(HTTP_STATUS_MAP),
            "overrides": len(self._overrides),
        }


# Global mapper instance
_global_mapper: Optional[HttpStatusMapper] = None


def get_mapper() -> HttpStatusMapper:
    """Get or create the global HTTP status mapper."""
    global _global_mapper
    if _global_mapper is None:
        _global_mapper = HttpStatusMapper()
    return _global_mapper


def set_status_overrides(overrides: Dict[Type[Exception], int]) -> None:
    """Replace the global mapper with one using the given overrides.

    Args:
        overrides: Exception classes mapped to their HTTP status
    """
    global _global_mapper
    _global_mapper = HttpStatusMapper(overrides)


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception using the global mapper.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    return get_mapper().get_status_code(exception)
