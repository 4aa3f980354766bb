"""Settings for neo-toolkit.

A single ``ToolkitSettings`` instance is shared by every request handled
by a service. It is frozen after construction, so concurrent requests can
read it without coordination.
"""

from functools import lru_cache
from typing import Optional, Set

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import SizeLimits, UploadDefaults


class ToolkitSettings(BaseSettings):
    """Limits and policies for uploads and JSON bodies.

    Values are read from ``TOOLKIT_*`` environment variables (and an optional
    ``.env`` file) unless passed explicitly. Collections such as
    ``TOOLKIT_ALLOWED_CONTENT_TYPES`` are given as JSON, e.g.
    ``'["image/png", "image/jpeg"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Upload Configuration
    max_upload_bytes: Optional[int] = Field(default=None, gt=0)
    allowed_content_types: Set[str] = Field(default_factory=set)
    rename_token_length: int = Field(default=UploadDefaults.RENAME_TOKEN_LENGTH, ge=1)
    upload_chunk_size: int = Field(default=UploadDefaults.CHUNK_SIZE, gt=0)
    directory_mode: int = Field(default=UploadDefaults.DIRECTORY_MODE)

    # JSON Configuration
    max_json_bytes: Optional[int] = Field(default=None, gt=0)
    allow_unknown_json_fields: bool = False
    strict_json_types: bool = True

    # Outbound Requests
    remote_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("allowed_content_types")
    @classmethod
    def normalize_content_types(cls, value: Set[str]) -> Set[str]:
        """Store allow-list entries lower-cased and stripped."""
        return {item.strip().lower() for item in value if item.strip()}

    @property
    def upload_limit(self) -> int:
        """Effective multipart body ceiling."""
        return self.max_upload_bytes or SizeLimits.DEFAULT_MAX_UPLOAD_BYTES

    @property
    def json_limit(self) -> int:
        """Effective JSON body ceiling.

        The JSON ceiling wins when set, then an explicitly configured upload
        ceiling, then 1 MiB.
        """
        if self.max_json_bytes:
            return self.max_json_bytes
        if self.max_upload_bytes:
            return self.max_upload_bytes
        return SizeLimits.DEFAULT_MAX_JSON_BYTES


@lru_cache()
def get_settings() -> ToolkitSettings:
    """Get cached settings built from the environment."""
    return ToolkitSettings()
