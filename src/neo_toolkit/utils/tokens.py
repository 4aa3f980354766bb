"""Random token generation for neo-toolkit."""

import secrets

from ..config.constants import RANDOM_STRING_SOURCE


def random_string(length: int) -> str:
    """
    Generate a cryptographically random string.

    Every character is drawn independently from ``RANDOM_STRING_SOURCE``
    using the operating system CSPRNG, so concurrent callers need no locking.

    Args:
        length: Number of characters to generate

    Returns:
        Random string of exactly ``length`` characters

    Raises:
        ValueError: If length is negative
    """
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return ''.join(secrets.choice(RANDOM_STRING_SOURCE) for _ in range(length))
