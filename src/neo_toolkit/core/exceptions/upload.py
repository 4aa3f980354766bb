"""Upload pipeline exceptions.

Each upload error can carry the files that were stored before the batch
was aborted, so callers decide whether a partial upload is acceptable.
"""

from typing import Any, Dict, Iterable, List, Optional

from .base import ToolkitError


class UploadError(ToolkitError):
    """Base class for failures while ingesting a multipart upload."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        uploaded_files: Optional[List[Any]] = None,
    ):
        super().__init__(message, error_code=error_code, details=details)
        self.uploaded_files: List[Any] = list(uploaded_files or [])


class PayloadTooLargeError(UploadError):
    """Raised when the multipart body exceeds the configured ceiling."""

    def __init__(self, limit: int, received: Optional[int] = None):
        details: Dict[str, Any] = {"limit_bytes": limit}
        if received is not None:
            details["received_bytes"] = received
        super().__init__(
            message=f"the uploaded file is too big, must be at most {limit} bytes",
            error_code="PAYLOAD_TOO_LARGE",
            details=details,
        )
        self.limit = limit


class UnsupportedFileTypeError(UploadError):
    """Raised when a sniffed content type is not on the allow-list."""

    def __init__(
        self,
        filename: str,
        content_type: str,
        allowed_types: Optional[Iterable[str]] = None,
    ):
        allowed = sorted(allowed_types or [])
        super().__init__(
            message=f"the uploaded file type {content_type} is not permitted",
            error_code="UNSUPPORTED_FILE_TYPE",
            details={
                "filename": filename,
                "content_type": content_type,
                "allowed_types": allowed,
            },
        )
        self.filename = filename
        self.content_type = content_type
        self.allowed_types = allowed


class UploadIOError(UploadError):
    """Raised when the request body, a part or the destination cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path else {}
        super().__init__(message=message, error_code="UPLOAD_IO_FAILURE", details=details)
        self.path = path


class NoFilesUploadedError(UploadError):
    """Raised when a single-file upload request carries no file part."""

    def __init__(self):
        super().__init__(message="no file was uploaded", error_code="NO_FILES_UPLOADED")
