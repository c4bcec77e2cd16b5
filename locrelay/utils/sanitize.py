"""
Text sanitization for outbound email fields.
"""

import re
from typing import Any

_LINE_BREAKS = re.compile(r"[\r\n]+")

SUBJECT_MAX = 200
BODY_MAX = 10000
FROM_NAME_MAX = 120
ADDRESS_MAX = 254
REPLY_TO_MAX = ADDRESS_MAX
DEFAULT_MAX = 5000


def safe_str(value: Any, max_length: int = DEFAULT_MAX) -> str:
    """
    Make a value safe to place in an email header or body.

    Every run of CR/LF characters becomes a single space (prevents header
    injection), then the result is cut to max_length characters.

    Args:
        value: Any value; None becomes ""
        max_length: Maximum length of the returned string

    Returns:
        Single-line string of at most max_length characters
    """
    if value is None:
        return ""
    return _LINE_BREAKS.sub(" ", str(value))[:max_length]
