"""URL-safe slugs for organization names."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Convert a display name to a URL-safe slug.

    Lower-cases the input, collapses every run of characters outside
    ``[a-z0-9]`` to a single dash and trims dashes at both ends.

    Examples:
        >>> slugify("Acme Corp!!")
        'acme-corp'
        >>> slugify("  A   B  ")
        'a-b'
        >>> slugify("")
        ''
    """
    return _NON_ALPHANUMERIC.sub("-", text.lower()).strip("-")
