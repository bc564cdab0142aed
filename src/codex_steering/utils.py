"""Utility functions for codex-steering."""

import codecs
from typing import Any

# Unicode White_Space. str.isspace() also accepts U+001C..U+001F, which are not.
WHITE_SPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000"
)


def is_blank(text: str) -> bool:
    """True if ``text`` is empty or only Unicode White_Space characters."""
    return not text.strip(WHITE_SPACE)


def salvage_utf8_prefix(data: bytes) -> str | None:
    """Decode UTF-8, tolerating only a multi-byte character cut off at the end.

    Used for reads that stopped at the byte budget, where the last character
    may have been split. Any other invalid byte anywhere in ``data`` makes the
    whole buffer undecodable.

    Args:
        data: Raw bytes read from a steering file

    Returns:
        The decoded text (without the incomplete trailing sequence), or None

    Examples:
        >>> salvage_utf8_prefix("héllo".encode()[:2])
        'h'
        >>> salvage_utf8_prefix(b"ok")
        'ok'
        >>> salvage_utf8_prefix(b"\\xff ok") is None
        True
    """
    # A non-final incremental decode buffers an incomplete trailing sequence
    # instead of raising, and still raises for invalid bytes.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        return decoder.decode(data, final=False)
    except UnicodeDecodeError:
        return None


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge settings dictionaries, overlay winning on conflicts.

    Nested dictionaries merge key by key; anything else in ``overlay``
    replaces the value in ``base``. Neither input is modified.

    Examples:
        >>> deep_merge({"steering": {"enabled": True, "doc_max_bytes": 100}}, {"steering": {"enabled": False}})
        {'steering': {'enabled': False, 'doc_max_bytes': 100}}
    """
    result = base.copy()

    for key, value in overlay.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
