"""File handling for neo-toolkit.

Multipart uploads validated by content sniffing, and static downloads.
"""

from .models import UploadedFile, UploadOptions
from .validator import (
    detect_content_type,
    media_type_essence,
    FileTypeValidator,
    FileTypeValidatorConfig,
    create_file_type_validator,
)
from .uploader import FileUploader, create_file_uploader
from .download import download_static_file

__all__ = [
    # Models
    "UploadedFile",
    "UploadOptions",
    # Detection
    "detect_content_type",
    "media_type_essence",
    # Validation
    "FileTypeValidator",
    "FileTypeValidatorConfig",
    "create_file_type_validator",
    # Uploads
    "FileUploader",
    "create_file_uploader",
    # Downloads
    "download_static_file",
]
