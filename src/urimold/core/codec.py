"""Percent-encoding codec used by expansion and extraction."""

import re
from urllib.parse import quote, unquote

# RFC 3986 reserved characters. Unreserved characters are always safe in quote().
RESERVED = ":/?#[]@!$&'()*+,;="

_PCT_TRIPLET = re.compile(r"(%[0-9A-Fa-f]{2})")


def encode(value: str, reserved: bool = False) -> str:
    """Percent-encode a value for inclusion in a URI.

    Args:
        value: Unencoded text.
        reserved: Keep reserved characters and existing pct-encoded triplets
            as they are (``+`` and ``#`` expansion). Otherwise only unreserved
            characters pass through.

    Returns:
        The UTF-8 percent-encoded text.
    """
    if not reserved:
        return quote(value, safe="")

    # Odd indices hold pct-encoded triplets, which pass through untouched.
    parts = _PCT_TRIPLET.split(value)
    return "".join(
        part if index % 2 else quote(part, safe=RESERVED)
        for index, part in enumerate(parts)
    )


def decode(value: str) -> str:
    """Decode percent-encoded UTF-8 text."""
    return unquote(value)
