"""Format checks for caller-supplied tenant and customer ids.

Used by the principal dependency so malformed header values are rejected
before any store is touched.
"""

import re

IDENTIFIER_MAX_LENGTH = 64
_IDENTIFIER_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(IDENTIFIER_MAX_LENGTH) + r"}$"
)


def is_valid_identifier_format(value: str | None) -> bool:
    """Return True if value is a CUID/UUID-style id (alphanumeric, hyphen, underscore)."""
    if not value or len(value) > IDENTIFIER_MAX_LENGTH:
        return False
    return bool(_IDENTIFIER_RE.fullmatch(value))
