"""Filesystem helpers for neo-toolkit."""

import logging
import os
from pathlib import Path
from typing import Union

from ..config.constants import UploadDefaults
from ..core.exceptions import UploadIOError

logger = logging.getLogger(__name__)


def create_dir_if_not_exist(path: Union[str, Path], mode: int = UploadDefaults.DIRECTORY_MODE) -> Path:
    """
    Create a directory and its parents if they do not exist yet.

    An existing directory is not an error, so the call is safe to repeat.

    Args:
        path: Directory to create
        mode: Permission bits for newly created directories

    Returns:
        The directory as a Path

    Raises:
        UploadIOError: If the directory cannot be created, or the path exists
            and is not a directory
    """
    directory = Path(path)
    try:
        os.makedirs(directory, mode=mode, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory {directory}: {e}")
        raise UploadIOError(f"could not create directory {directory}", path=str(directory)) from e
    return directory


def safe_base_name(filename: str) -> str:
    """
    Reduce a client-supplied filename to its final path component.

    Both ``/`` and ``\\`` are treated as separators because browsers on
    different platforms send either.

    Args:
        filename: Untrusted filename from a multipart part

    Returns:
        The base name, or an empty string if nothing usable remains
    """
    name = filename.replace('\\', '/').rsplit('/', 1)[-1]
    if name in ('.', '..'):
        return ''
    return name


def file_extension(filename: str) -> str:
    """
    Return the extension of a filename, from its last dot onward.

    A name whose only dot is the leading one, such as ``.htaccess``, is all
    extension. A name without a dot has none.
    """
    index = filename.rfind('.')
    if index < 0:
        return ''
    return filename[index:]
