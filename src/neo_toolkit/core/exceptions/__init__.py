"""Exceptions module for neo-toolkit.

This module provides the complete exception hierarchy, organized by the
pipeline that raises it.
"""

from .base import (
    ToolkitError,
    get_http_status_code,
    create_error_response,
)

from .upload import (
    UploadError,
    PayloadTooLargeError,
    UnsupportedFileTypeError,
    UploadIOError,
    NoFilesUploadedError,
)

from .decoding import (
    JSONBodyError,
    MalformedJSONError,
    UnexpectedEOFError,
    JSONTypeMismatchError,
    EmptyBodyError,
    UnknownFieldError,
    MissingFieldError,
    BodyTooLargeError,
    MultipleJSONValuesError,
    DecodeTargetError,
    UnclassifiedJSONError,
)

from .misc import (
    SlugifyError,
    StaticFileNotFoundError,
    RemoteRequestError,
)

from .http_mapping import (
    HTTP_STATUS_MAP,
    HttpStatusMapper,
    set_status_overrides,
)

__all__ = [
    # Base
    "ToolkitError",
    "get_http_status_code",
    "create_error_response",

    # Upload
    "UploadError",
    "PayloadTooLargeError",
    "UnsupportedFileTypeError",
    "UploadIOError",
    "NoFilesUploadedError",

    # JSON bodies
    "JSONBodyError",
    "MalformedJSONError",
    "UnexpectedEOFError",
    "JSONTypeMismatchError",
    "EmptyBodyError",
    "UnknownFieldError",
    "MissingFieldError",
    "BodyTooLargeError",
    "MultipleJSONValuesError",
    "DecodeTargetError",
    "UnclassifiedJSONError",

    # Helpers
    "SlugifyError",
    "StaticFileNotFoundError",
    "RemoteRequestError",

    # HTTP mapping
    "HTTP_STATUS_MAP",
    "HttpStatusMapper",
    "set_status_overrides",
]
