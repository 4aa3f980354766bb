"""Upload result and option models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadOptions:
    """Options for a single upload call."""

    # Store files under a random name that keeps the original extension
    rename: bool = True


@dataclass(frozen=True)
class UploadedFile:
    """One file stored by the upload pipeline."""

    original_name: str
    stored_name: str
    size_bytes: int
    content_type: str = ""
    field_name: str = ""
