"""JSON response helpers.

Every reply built here uses the same envelope::

    {"error": false, "message": "...", "data": ...}

``data`` is left out entirely when there is nothing to send.
"""

from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

T = TypeVar('T')


class ResponseEnvelope(BaseModel, Generic[T]):
    """Standard response envelope for success and failure replies."""
    error: bool = Field(default=False, description="Whether the request failed")
    message: str = Field(default="", description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Optional payload")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize the envelope, omitting ``data`` when absent."""
        payload: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.data is not None:
            payload["data"] = jsonable_encoder(self.data)
        return payload


def write_json(
    payload: Any,
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Build a JSON response.

    Args:
        payload: Envelope, pydantic model, dataclass or plain JSON-able value
        status_code: HTTP status code
        headers: Extra headers, added verbatim

    Returns:
        Response with ``Content-Type: application/json``
    """
    if isinstance(payload, ResponseEnvelope):
        content = payload.to_payload()
    else:
        content = jsonable_encoder(payload)
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )


def error_json(error: Union[Exception, str], status_code: int = 400) -> JSONResponse:
    """Wrap an exception in the standard envelope with ``error`` set.

    Args:
        error: The failure to report, or a message; its string form becomes the message
        status_code: HTTP status code, 400 unless given
    """
    return write_json(ResponseEnvelope(error=True, message=str(error)), status_code=status_code)


def success_json(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    """Build a success envelope response."""
    return write_json(ResponseEnvelope(error=False, message=message, data=data), status_code=status_code)
