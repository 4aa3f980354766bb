"""Outbound JSON delivery."""

import json
import logging
from typing import Any, Optional, Tuple

import httpx
from fastapi.encoders import jsonable_encoder

from ..config.constants import ContentTypes
from ..core.exceptions import RemoteRequestError

logger = logging.getLogger(__name__)


async def push_json_to_remote(
    uri: str,
    payload: Any,
    client: Optional[httpx.AsyncClient] = None,
    timeout_seconds: float = 30.0,
) -> Tuple[httpx.Response, int]:
    """POST ``payload`` as JSON to ``uri``.

    Args:
        uri: Target URL
        payload: Any value FastAPI can encode (models, dataclasses, dicts)
        client: Client to send with; a one-shot client is created and closed
            when omitted
        timeout_seconds: Timeout for the one-shot client

    Returns:
        The response and its status code. Non-2xx statuses are returned,
        not raised.

    Raises:
        RemoteRequestError: If the request could not be sent or answered
    """
    body = json.dumps(jsonable_encoder(payload), separators=(',', ':'))
    headers = {"Content-Type": ContentTypes.JSON}

    try:
        if client is not None:
            response = await client.post(uri, content=body, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=timeout_seconds) as one_shot:
                response = await one_shot.post(uri, content=body, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"Failed to push JSON to {uri}: {e}")
        raise RemoteRequestError(uri, str(e)) from e

    logger.debug(f"Pushed JSON to {uri}: status {response.status_code}")
    return response, response.status_code
