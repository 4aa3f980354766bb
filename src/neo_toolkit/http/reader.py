"""Bounded request body reading.

Both pipelines refuse bodies above a configured ceiling. The declared
``Content-Length`` is checked first so oversized requests fail without
reading anything; the stream itself is counted as well because the header
may be absent or wrong.
"""

import logging
from typing import AsyncGenerator, Callable, List, Optional

from starlette.requests import ClientDisconnect, Request

from ..core.exceptions import BodyTooLargeError, UnexpectedEOFError

logger = logging.getLogger(__name__)

# Builds the exception raised when a body passes its limit: (limit, bytes seen)
LimitErrorFactory = Callable[[int, int], Exception]


def declared_length(request: Request) -> Optional[int]:
    """Return the ``Content-Length`` header as an int, or None when absent or invalid."""
    value = request.headers.get("content-length")
    if value is None:
        return None
    try:
        length = int(value)
    except ValueError:
        return None
    return length if length >= 0 else None


async def stream_with_limit(
    request: Request,
    limit: int,
    error_factory: LimitErrorFactory,
) -> AsyncGenerator[bytes, None]:
    """Yield body chunks, raising once more than ``limit`` bytes have arrived.

    Args:
        request: Incoming request whose body has not been consumed yet
        limit: Maximum number of body bytes
        error_factory: Builds the exception to raise on overflow
    """
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            logger.warning(f"Request body exceeded {limit} bytes on {request.url.path}")
            raise error_factory(limit, received)
        yield chunk


async def read_body(request: Request, limit: int) -> bytes:
    """Read a whole request body of at most ``limit`` bytes.

    Args:
        request: Incoming request
        limit: Maximum number of body bytes

    Returns:
        The body bytes

    Raises:
        BodyTooLargeError: If the declared or actual size exceeds the limit
        UnexpectedEOFError: If the client disconnects mid-body
    """
    length = declared_length(request)
    if length is not None and length > limit:
        logger.warning(f"Rejected body of declared size {length} (limit {limit}) on {request.url.path}")
        raise BodyTooLargeError(limit)

    chunks: List[bytes] = []
    try:
        async for chunk in stream_with_limit(request, limit, lambda max_bytes, _: BodyTooLargeError(max_bytes)):
            chunks.append(chunk)
    except ClientDisconnect as e:
        raise UnexpectedEOFError() from e
    return b"".join(chunks)
