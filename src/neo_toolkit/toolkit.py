"""Toolkit facade.

Binds one ``ToolkitSettings`` instance to every helper so a service can
hold a single object (or inject it with ``Depends(get_toolkit)``).
"""

from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar, Union

import httpx
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse

from .config.settings import ToolkitSettings, get_settings
from .files.download import download_static_file
from .files.models import UploadedFile, UploadOptions
from .files.uploader import create_file_uploader
from .http.decoder import read_json
from .http.remote import push_json_to_remote
from .http.responses import error_json, write_json
from .utils.filesystem import create_dir_if_not_exist
from .utils.slug import slugify
from .utils.tokens import random_string

T = TypeVar("T")


class Toolkit:
    """Request-handling helpers sharing one immutable configuration."""

    def __init__(self, settings: Optional[ToolkitSettings] = None):
        self.settings = settings or get_settings()
        self._uploader = create_file_uploader(self.settings)

    def random_string(self, length: int) -> str:
        return random_string(length)

    async def upload_files(
        self,
        request: Request,
        upload_dir: Union[str, Path],
        options: Optional[UploadOptions] = None,
    ) -> List[UploadedFile]:
        return await self._uploader.upload_files(request, upload_dir, options)

    async def upload_one_file(
        self,
        request: Request,
        upload_dir: Union[str, Path],
        options: Optional[UploadOptions] = None,
    ) -> UploadedFile:
        return await self._uploader.upload_one_file(request, upload_dir, options)

    def create_dir_if_not_exist(self, path: Union[str, Path]) -> Path:
        return create_dir_if_not_exist(path, mode=self.settings.directory_mode)

    def slugify(self, value: str) -> str:
        return slugify(value)

    def download_static_file(
        self,
        directory: Union[str, Path],
        file_name: str,
        display_name: str,
    ) -> FileResponse:
        return download_static_file(directory, file_name, display_name)

    async def read_json(self, request: Request, target: Type[T]) -> T:
        return await read_json(request, target, self.settings)

    def write_json(
        self,
        payload: Any,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
    ) -> JSONResponse:
        return write_json(payload, status_code=status_code, headers=headers)

    def error_json(self, error: Union[Exception, str], status_code: int = 400) -> JSONResponse:
        return error_json(error, status_code=status_code)

    async def push_json_to_remote(
        self,
        uri: str,
        payload: Any,
        client: Optional[httpx.AsyncClient] = None,
    ) -> Tuple[httpx.Response, int]:
        return await push_json_to_remote(
            uri,
            payload,
            client=client,
            timeout_seconds=self.settings.remote_timeout_seconds,
        )
