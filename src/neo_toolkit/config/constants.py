"""Constants shared across neo-toolkit.

All values here are immutable and safe to read from concurrent requests.
"""

# Alphabet for random tokens and renamed uploads (54 symbols)
RANDOM_STRING_SOURCE = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_+"


class SizeLimits:
    """Default body ceilings in bytes."""
    KIB = 1024
    MIB = 1024 * 1024
    GIB = 1024 * 1024 * 1024

    DEFAULT_MAX_UPLOAD_BYTES = GIB
    DEFAULT_MAX_JSON_BYTES = MIB


class UploadDefaults:
    """Defaults for the multipart upload pipeline."""
    SNIFF_LENGTH = 512
    RENAME_TOKEN_LENGTH = 25
    CHUNK_SIZE = 64 * 1024
    DIRECTORY_MODE = 0o755


class ContentTypes:
    """Content types the toolkit emits."""
    JSON = "application/json"
    OCTET_STREAM = "application/octet-stream"
    MULTIPART_FORM = "multipart/form-data"
