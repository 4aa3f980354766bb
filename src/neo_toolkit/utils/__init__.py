"""Utilities module for neo-toolkit.

Small helpers used by the upload and JSON pipelines and exposed for
services that need them directly.
"""

from .tokens import random_string
from .slug import slugify
from .filesystem import create_dir_if_not_exist, file_extension, safe_base_name

__all__ = [
    # Tokens
    "random_string",
    # Slugs
    "slugify",
    # Filesystem
    "create_dir_if_not_exist",
    "safe_base_name",
    "file_extension",
]
