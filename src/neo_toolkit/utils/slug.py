"""Slug generation for neo-toolkit."""

import re

from ..core.exceptions import SlugifyError

# Anything outside lower-case ASCII letters and digits separates words
SLUG_SEPARATOR_PATTERN = re.compile(r'[^a-z\d]+')


def slugify(value: str) -> str:
    """
    Turn a string into a URL-safe slug.

    Non-ASCII characters are dropped rather than transliterated, so a string
    written only in another script has no slug.

    Args:
        value: Source string

    Returns:
        Lower-case slug such as ``hello-there-123``

    Raises:
        SlugifyError: If the input is empty or produces an empty slug
    """
    if value == "":
        raise SlugifyError("empty string not permitted", value)

    slug = SLUG_SEPARATOR_PATTERN.sub('-', value.lower()).strip('-')
    if not slug:
        raise SlugifyError("after removing characters, slug is zero length", value)

    return slug
