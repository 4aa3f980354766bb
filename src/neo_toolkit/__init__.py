"""Neo-Toolkit - request-handling helpers for NeoMultiTenant services.

This library provides multipart uploads validated by content sniffing,
strict JSON body decoding with a stable error taxonomy, JSON response
envelopes and a handful of small helpers (tokens, slugs, downloads).
"""

from .__version__ import __version__

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .config import (
    ToolkitSettings,
    get_settings,
    RANDOM_STRING_SOURCE,
)

from .core.exceptions import (
    # Base Exception
    ToolkitError,

    # Upload Exceptions
    UploadError,
    PayloadTooLargeError,
    UnsupportedFileTypeError,
    UploadIOError,
    NoFilesUploadedError,

    # JSON Body Exceptions
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

    # Helper Exceptions
    SlugifyError,
    StaticFileNotFoundError,
    RemoteRequestError,

    # Utility Functions
    get_http_status_code,
    create_error_response,
)

from .utils import random_string, slugify, create_dir_if_not_exist

from .files import (
    UploadedFile,
    UploadOptions,
    FileUploader,
    FileTypeValidator,
    detect_content_type,
    download_static_file,
)

from .http import (
    JSONBodyDecoder,
    ResponseEnvelope,
    read_json,
    write_json,
    error_json,
    success_json,
    push_json_to_remote,
)

from .toolkit import Toolkit

from .api import register_exception_handlers, get_toolkit

__all__ = [
    "__version__",
    "setup_logging",

    # Configuration
    "ToolkitSettings",
    "get_settings",
    "RANDOM_STRING_SOURCE",

    # Exceptions
    "ToolkitError",
    "UploadError",
    "PayloadTooLargeError",
    "UnsupportedFileTypeError",
    "UploadIOError",
    "NoFilesUploadedError",
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
    "SlugifyError",
    "StaticFileNotFoundError",
    "RemoteRequestError",
    "get_http_status_code",
    "create_error_response",

    # Utilities
    "random_string",
    "slugify",
    "create_dir_if_not_exist",

    # Files
    "UploadedFile",
    "UploadOptions",
    "FileUploader",
    "FileTypeValidator",
    "detect_content_type",
    "download_static_file",

    # HTTP
    "JSONBodyDecoder",
    "ResponseEnvelope",
    "read_json",
    "write_json",
    "error_json",
    "success_json",
    "push_json_to_remote",

    # Facade
    "Toolkit",

    # FastAPI integration
    "register_exception_handlers",
    "get_toolkit",
]
