"""HTTP helpers for neo-toolkit: JSON bodies in, JSON responses out."""

from .reader import declared_length, read_body, stream_with_limit
from .decoder import (
    JSONBodyDecoder,
    read_json,
    classify_syntax_error,
    classify_validation_error,
    find_unknown_key,
)
from .responses import ResponseEnvelope, write_json, error_json, success_json
from .remote import push_json_to_remote

__all__ = [
    # Body reading
    "declared_length",
    "read_body",
    "stream_with_limit",
    # Decoding
    "JSONBodyDecoder",
    "read_json",
    "classify_syntax_error",
    "classify_validation_error",
    "find_unknown_key",
    # Responses
    "ResponseEnvelope",
    "write_json",
    "error_json",
    "success_json",
    # Outbound
    "push_json_to_remote",
]
