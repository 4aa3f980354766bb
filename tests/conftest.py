"""Pytest configuration and fixtures for neo-toolkit tests."""

import struct
import zlib
from typing import Callable, List, Optional, Tuple

import httpx
import pytest
from starlette.requests import Request

from neo_toolkit.config.settings import ToolkitSettings


def _png_chunk(tag: bytes, data: bytes) -> bytes:
    return (
        struct.pack(">I", len(data))
        + tag
        + data
        + struct.pack(">I", zlib.crc32(tag + data) & 0xFFFFFFFF)
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A valid 1x1 RGB PNG image."""
    header = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    pixels = zlib.compress(b"\x00\xff\x00\x00")
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", pixels)
        + _png_chunk(b"IEND", b"")
    )


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Bytes carrying a JPEG/JFIF signature."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64 + b"\xff\xd9"


@pytest.fixture
def make_settings() -> Callable[..., ToolkitSettings]:
    """Factory for settings that ignore any .env file in the working directory."""
    def factory(**overrides) -> ToolkitSettings:
        return ToolkitSettings(_env_file=None, **overrides)
    return factory


@pytest.fixture
def build_multipart() -> Callable[..., Tuple[bytes, str]]:
    """Encode files (and optional plain fields) as a multipart body.

    Returns the body and its Content-Type header (with boundary).
    """
    def factory(files: List[Tuple[str, Tuple[str, bytes, str]]], data: Optional[dict] = None) -> Tuple[bytes, str]:
        request = httpx.Request("POST", "http://testserver/upload", files=files, data=data)
        return request.read(), request.headers["content-type"]
    return factory


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a Starlette request around a raw body.

    Args (of the returned factory):
        body: Raw request body
        content_type: Content-Type header value
        content_length: Send a Content-Length header matching the body
        chunk_size: Deliver the body in chunks of this size
    """
    def factory(
        body: bytes,
        content_type: str = "application/json",
        content_length: bool = True,
        chunk_size: Optional[int] = None,
    ) -> Request:
        headers = [(b"content-type", content_type.encode("latin-1"))]
        if content_length:
            headers.append((b"content-length", str(len(body)).encode("latin-1")))

        size = chunk_size or max(len(body), 1)
        chunks = [body[i:i + size] for i in range(0, len(body), size)] or [b""]
        messages = [
            {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
            for index, chunk in enumerate(chunks)
        ]

        async def receive():
            if messages:
                return messages.pop(0)
            return {"type": "http.disconnect"}

        scope = {
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": "/upload",
            "query_string": b"",
            "headers": headers,
        }
        return Request(scope, receive)
    return factory


@pytest.fixture
def upload_dir(tmp_path):
    """Destination directory that does not exist yet."""
    return tmp_path / "uploads"
