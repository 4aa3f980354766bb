"""Static file downloads."""

import logging
from pathlib import Path
from typing import Union

from starlette.responses import FileResponse

from ..core.exceptions import StaticFileNotFoundError

logger = logging.getLogger(__name__)


def download_static_file(
    directory: Union[str, Path],
    file_name: str,
    display_name: str,
) -> FileResponse:
    """Serve a file from ``directory`` as an attachment.

    The browser is told to save the file as ``display_name`` through
    ``Content-Disposition: attachment; filename="<display_name>"``.

    Args:
        directory: Base directory files are served from
        file_name: Name of the file relative to ``directory``
        display_name: Name the client should save the file under

    Returns:
        Streaming file response

    Raises:
        StaticFileNotFoundError: If the file does not exist or resolves
            outside ``directory``
    """
    base = Path(directory).resolve()
    path = (base / file_name).resolve()

    if base != path and base not in path.parents:
        logger.warning(f"Refused download of {file_name!r} outside {base}")
        raise StaticFileNotFoundError(file_name)
    if not path.is_file():
        raise StaticFileNotFoundError(file_name)

    return FileResponse(
        path,
        headers={"Content-Disposition": f'attachment; filename="{display_name}"'},
    )
