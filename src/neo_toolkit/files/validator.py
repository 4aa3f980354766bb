"""File type validator.

ONLY file type validation - decides whether an uploaded file may be stored,
based on the content type libmagic detects from its leading bytes rather
than the type the client declared.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

import magic

from ..config.constants import ContentTypes, UploadDefaults
from ..core.exceptions import UnsupportedFileTypeError

logger = logging.getLogger(__name__)

# Only this many leading bytes are examined
SNIFF_LENGTH = UploadDefaults.SNIFF_LENGTH


def detect_content_type(data: bytes) -> str:
    """Detect the MIME type of ``data`` from its leading bytes.

    Args:
        data: File content; only the first 512 bytes are examined

    Returns:
        The MIME type reported by libmagic, ``application/octet-stream``
        when it cannot tell
    """
    try:
        return magic.from_buffer(bytes(data[:SNIFF_LENGTH]), mime=True)
    except magic.MagicException as e:
        logger.warning(f"Content type detection failed: {e}")
        return ContentTypes.OCTET_STREAM


def media_type_essence(content_type: str) -> str:
    """Strip parameters from a content type (``text/plain; charset=utf-8`` -> ``text/plain``)."""
    return content_type.split(';', 1)[0].strip().lower()


@dataclass(frozen=True)
class FileTypeValidatorConfig:
    """Configuration for file type validator."""

    # Allowed content types; empty means allow all
    allowed_types: FrozenSet[str] = field(default_factory=frozenset)


class FileTypeValidator:
    """File type validation service.

    An allow-list entry matches a sniffed type case-insensitively, either
    exactly (``text/plain; charset=utf-8``) or by its essence
    (``text/plain``).
    """

    def __init__(self, config: Optional[FileTypeValidatorConfig] = None):
        """Initialize file type validator.

        Args:
            config: Validator configuration
        """
        self._config = config or FileTypeValidatorConfig()
        self._allowed = frozenset(item.strip().lower() for item in self._config.allowed_types)

    @property
    def allowed_types(self) -> FrozenSet[str]:
        return self._allowed

    def is_allowed(self, content_type: str) -> bool:
        """Check a sniffed content type against the allow-list."""
        if not self._allowed:
            return True
        normalized = content_type.strip().lower()
        return normalized in self._allowed or media_type_essence(normalized) in self._allowed

    def validate(self, filename: str, head: bytes) -> str:
        """Sniff and validate a file from its first bytes.

        Args:
            filename: Original filename, used for error reporting only
            head: Leading bytes of the file (up to 512 are examined)

        Returns:
            The sniffed content type

        Raises:
            UnsupportedFileTypeError: If the sniffed type is not allowed
        """
        content_type = detect_content_type(head)
        if not self.is_allowed(content_type):
            logger.warning(f"Rejected upload {filename!r}: sniffed type {content_type} is not allowed")
            raise UnsupportedFileTypeError(filename, content_type, self._allowed)
        return content_type


def create_file_type_validator(allowed_types: Optional[Iterable[str]] = None) -> FileTypeValidator:
    """Create a file type validator for the given allow-list."""
    return FileTypeValidator(FileTypeValidatorConfig(allowed_types=frozenset(allowed_types or ())))
