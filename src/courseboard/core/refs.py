"""Record reference parsing.

Registrations point at their course through a reference string (usually a
record URL) whose trailing token is the course's record id: 24 hex digits.
"""

import re

RECORD_ID_LENGTH = 24

_TRAILING_RECORD_ID = re.compile(rf"([a-f0-9]{{{RECORD_ID_LENGTH}}})\Z", re.IGNORECASE)


def extract_record_id(ref: str | None) -> str | None:
    """Extract the record id embedded at the end of a reference string.

    Args:
        ref: Reference string, e.g. ``".../records/5f3c...9a1b"``. May be None.

    Returns:
        The trailing 24-hex-digit token as written, or None when the
        reference is absent or does not end with such a token.

    Examples:
        >>> extract_record_id("https://host/apps/a1/records/0123456789abcdef01234567")
        '0123456789abcdef01234567'
        >>> extract_record_id("not-a-ref") is None
        True
    """
    if not ref:
        return None
    match = _TRAILING_RECORD_ID.search(ref)
    if match is None:
        return None
    return match.group(1)
