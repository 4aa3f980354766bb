"""Multipart upload orchestration.

ONLY multipart ingestion - parses a multipart request, validates every file
part by its sniffed content type and streams accepted parts into a
destination directory.

A batch stops at the first failure. Files stored before the failure are
kept on disk and attached to the raised error as ``uploaded_files``.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import ClientDisconnect, Request

from ..config.constants import ContentTypes
from ..config.settings import ToolkitSettings, get_settings
from ..core.exceptions import (
    NoFilesUploadedError,
    PayloadTooLargeError,
    UploadError,
    UploadIOError,
)
from ..http.reader import declared_length, stream_with_limit
from ..utils.filesystem import create_dir_if_not_exist, file_extension, safe_base_name
from ..utils.tokens import random_string
from .models import UploadedFile, UploadOptions
from .validator import SNIFF_LENGTH, FileTypeValidator, create_file_type_validator, media_type_essence

logger = logging.getLogger(__name__)


class FileUploader:
    """Stores the files of a multipart request in a local directory.

    Handles:
    - body size ceiling (declared and streamed)
    - destination directory creation
    - content sniffing against the configured allow-list
    - random renaming that keeps the original extension
    - cleanup of partially written files
    """

    def __init__(
        self,
        settings: Optional[ToolkitSettings] = None,
        validator: Optional[FileTypeValidator] = None,
    ):
        """Initialize file uploader.

        Args:
            settings: Limits and allow-list; environment settings when omitted
            validator: File type validator; built from the settings' allow-list
                when omitted
        """
        self._settings = settings or get_settings()
        self._validator = validator or create_file_type_validator(self._settings.allowed_content_types)

    async def upload_files(
        self,
        request: Request,
        upload_dir: Union[str, Path],
        options: Optional[UploadOptions] = None,
    ) -> List[UploadedFile]:
        """Store every file part of a multipart request.

        Args:
            request: Incoming multipart/form-data request
            upload_dir: Destination directory, created if missing
            options: Upload options; renaming is enabled by default

        Returns:
            One UploadedFile per file part, in the order the parts arrived

        Raises:
            PayloadTooLargeError: If the body exceeds the upload ceiling
            UnsupportedFileTypeError: If a file's sniffed type is not allowed
            UploadIOError: If the body, a part or a destination file cannot
                be read or written
        """
        options = options or UploadOptions()
        limit = self._settings.upload_limit

        self._check_request(request, limit)
        directory = create_dir_if_not_exist(upload_dir, mode=self._settings.directory_mode)
        form = await self._parse_form(request, limit)

        uploaded: List[UploadedFile] = []
        try:
            for field_name, value in form.multi_items():
                if not isinstance(value, UploadFile):
                    continue
                uploaded.append(await self._store_part(field_name, value, directory, options))
        except UploadError as e:
            e.uploaded_files = list(uploaded)
            logger.warning(
                f"Upload batch aborted after {len(uploaded)} file(s): {e.message}"
            )
            raise
        finally:
            await form.close()

        logger.info(f"Stored {len(uploaded)} uploaded file(s) in {directory}")
        return uploaded

    async def upload_one_file(
        self,
        request: Request,
        upload_dir: Union[str, Path],
        options: Optional[UploadOptions] = None,
    ) -> UploadedFile:
        """Store the files of a request and return the first one.

        Raises:
            NoFilesUploadedError: If the request carried no file part
            (plus everything ``upload_files`` raises)
        """
        files = await self.upload_files(request, upload_dir, options)
        if not files:
            raise NoFilesUploadedError()
        return files[0]

    def _check_request(self, request: Request, limit: int) -> None:
        """Reject non-multipart requests and oversized declared bodies before parsing."""
        content_type = request.headers.get("content-type", "")
        if media_type_essence(content_type) != ContentTypes.MULTIPART_FORM:
            raise UploadIOError(f"request Content-Type isn't {ContentTypes.MULTIPART_FORM}")

        length = declared_length(request)
        if length is not None and length > limit:
            logger.warning(f"Rejected multipart body of declared size {length} (limit {limit})")
            raise PayloadTooLargeError(limit, received=length)

    async def _parse_form(self, request: Request, limit: int) -> FormData:
        """Parse the multipart body while counting bytes against the ceiling."""
        parser = MultiPartParser(
            request.headers,
            stream_with_limit(request, limit, lambda max_bytes, seen: PayloadTooLargeError(max_bytes, seen)),
        )
        try:
            return await parser.parse()
        except MultiPartException as e:
            raise UploadIOError(f"could not parse multipart body: {e.message}") from e
        except ClientDisconnect as e:
            raise UploadIOError("client disconnected during upload") from e

    async def _store_part(
        self,
        field_name: str,
        upload: UploadFile,
        directory: Path,
        options: UploadOptions,
    ) -> UploadedFile:
        """Validate one file part and stream it to disk."""
        original_name = safe_base_name(upload.filename or "")

        try:
            head = await upload.read(SNIFF_LENGTH)
            # The sniffed bytes belong in the stored file too
            await upload.seek(0)
        except OSError as e:
            raise UploadIOError(f"could not read uploaded file {original_name!r}") from e

        content_type = self._validator.validate(original_name, head)
        logger.debug(f"Part {field_name!r}/{original_name!r} sniffed as {content_type}")

        stored_name = self._choose_stored_name(original_name, options.rename)
        destination = directory / stored_name
        size = await self._write_part(upload, destination)

        logger.debug(f"Wrote {size} bytes to {destination}")
        return UploadedFile(
            original_name=original_name,
            stored_name=stored_name,
            size_bytes=size,
            content_type=content_type,
            field_name=field_name,
        )

    def _choose_stored_name(self, original_name: str, rename: bool) -> str:
        """Pick the destination file name for an accepted part."""
        if rename:
            extension = file_extension(original_name)
            return f"{random_string(self._settings.rename_token_length)}{extension}"
        if not original_name:
            raise UploadIOError("uploaded file has no usable name")
        return original_name

    async def _write_part(self, upload: UploadFile, destination: Path) -> int:
        """Copy an upload into a new file, removing the file if the copy fails."""
        try:
            output = open(destination, "wb")
        except OSError as e:
            logger.error(f"Failed to create {destination}: {e}")
            raise UploadIOError(f"could not create file {destination.name}", path=str(destination)) from e

        try:
            with output:
                size = await self._copy(upload, output)
        except OSError as e:
            logger.error(f"Failed to write {destination}: {e}")
            self._discard(destination)
            raise UploadIOError(f"could not write file {destination.name}", path=str(destination)) from e
        return size

    async def _copy(self, upload: UploadFile, output: BinaryIO) -> int:
        size = 0
        while True:
            chunk = await upload.read(self._settings.upload_chunk_size)
            if not chunk:
                break
            output.write(chunk)
            size += len(chunk)
        return size

    @staticmethod
    def _discard(path: Path) -> None:
        """Remove a partially written file."""
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial upload {path}: {e}")


def create_file_uploader(settings: Optional[ToolkitSettings] = None) -> FileUploader:
    """Create file uploader."""
    return FileUploader(settings=settings)
