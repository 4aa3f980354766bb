"""Exceptions raised by the thin helpers: slugs, downloads, outbound requests."""

from typing import Optional

from .base import ToolkitError


class SlugifyError(ToolkitError):
    """Raised when a string cannot be turned into a non-empty slug."""

    def __init__(self, message: str, value: str):
        super().__init__(message=message, error_code="INVALID_SLUG_SOURCE", details={"value": value})
        self.value = value


class StaticFileNotFoundError(ToolkitError):
    """Raised when a download is requested for a file that is not servable."""

    def __init__(self, file_name: str):
        super().__init__(
            message=f"file {file_name} not found",
            error_code="STATIC_FILE_NOT_FOUND",
            details={"file_name": file_name},
        )
        self.file_name = file_name


class RemoteRequestError(ToolkitError):
    """Raised when a JSON payload cannot be delivered to a remote endpoint."""

    def __init__(self, uri: str, reason: Optional[str] = None):
        message = f"failed to call remote url {uri}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, error_code="REMOTE_REQUEST_FAILED", details={"uri": uri})
        self.uri = uri
