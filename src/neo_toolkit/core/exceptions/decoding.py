"""JSON request body exceptions.

These are the only errors the JSON decoder raises. Low-level failures from
the json parser and from pydantic are translated into one of these classes
so that API clients always receive a stable, readable message.
"""

from typing import Any, Dict, Optional

from .base import ToolkitError


class JSONBodyError(ToolkitError):
    """Base class for a request body that could not be decoded."""
    pass


class MalformedJSONError(JSONBodyError):
    """Raised when the body is not syntactically valid JSON."""

    def __init__(self, offset: int):
        super().__init__(
            message=f"body contains badly-formed JSON (at character {offset})",
            error_code="MALFORMED_JSON",
            details={"offset": offset},
        )
        self.offset = offset


class UnexpectedEOFError(JSONBodyError):
    """Raised when the body ends in the middle of a JSON value."""

    def __init__(self):
        super().__init__(message="body contains badly-formed JSON", error_code="UNEXPECTED_EOF")


class JSONTypeMismatchError(JSONBodyError):
    """Raised when a JSON value has the wrong type for its target field."""

    def __init__(self, field: Optional[str] = None, offset: Optional[int] = None):
        if field:
            message = f'body contains incorrect JSON type for field "{field}"'
        else:
            message = f"body contains incorrect JSON type (at character {offset or 0})"
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if offset is not None:
            details["offset"] = offset
        super().__init__(message=message, error_code="JSON_TYPE_MISMATCH", details=details)
        self.field = field
        self.offset = offset


class EmptyBodyError(JSONBodyError):
    """Raised when the body is empty or only whitespace."""

    def __init__(self):
        super().__init__(message="body must not be empty", error_code="EMPTY_BODY")


class UnknownFieldError(JSONBodyError):
    """Raised when unknown fields are disallowed and the body contains one."""

    def __init__(self, key: str):
        super().__init__(
            message=f'body contains unknown key "{key}"',
            error_code="UNKNOWN_FIELD",
            details={"key": key},
        )
        self.key = key


class MissingFieldError(JSONBodyError):
    """Raised when a required field of the target model is absent."""

    def __init__(self, field: str):
        super().__init__(
            message=f'body is missing required field "{field}"',
            error_code="MISSING_FIELD",
            details={"field": field},
        )
        self.field = field


class BodyTooLargeError(JSONBodyError):
    """Raised when the body exceeds the configured JSON ceiling."""

    def __init__(self, limit: int):
        super().__init__(
            message=f"body must not be larger than {limit} bytes",
            error_code="BODY_TOO_LARGE",
            details={"limit_bytes": limit},
        )
        self.limit = limit


class MultipleJSONValuesError(JSONBodyError):
    """Raised when anything but whitespace follows the first JSON value."""

    def __init__(self):
        super().__init__(
            message="body must contain only one JSON value",
            error_code="MULTIPLE_JSON_VALUES",
        )


class DecodeTargetError(JSONBodyError):
    """Raised when the caller passes something that cannot be decoded into.

    This is a programming error on the server side, not a client error.
    """

    def __init__(self, target: Any, reason: Optional[str] = None):
        description = getattr(target, "__name__", repr(target))
        message = f"error unmarshalling JSON: cannot decode into {description}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, error_code="INVALID_DECODE_TARGET")
        self.target = target


class UnclassifiedJSONError(JSONBodyError):
    """Passthrough for validation failures that fit no other category."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, error_code="INVALID_JSON_BODY", details=details)
