"""
AgentDesk Backend - Input Sanitizer
=====================================

What:  Cleans untrusted string input before it is bound into SQL or stored.
How:   1. Strip all HTML markup with nh3 (tags removed, <script>/<style>
          contents dropped, text kept)
       2. Trim leading/trailing whitespace
       3. Remove every ' " ` and ; character
Who:   Used by the validation pipeline (payload values) and by AgentService
       (path parameters).

Contract:
    - Non-string values pass through unchanged
    - Never raises; the worst case is an empty string
    - nh3 escapes bare `&`, `<` and `>` in text as HTML entities. `&amp;` is
      turned back into `&`; `&lt;` and `&gt;` stay escaped (their semicolon is
      then removed by step 3), so no `<` or `>` reaches the database
"""

from typing import Any, Dict

import nh3

# Characters removed from every sanitized string
STRIPPED_CHARACTERS = "'\"`;"

_STRIP_TABLE = str.maketrans("", "", STRIPPED_CHARACTERS)


def strip_markup(value: str) -> str:
    """Removes every HTML tag, keeping only text content."""
    return nh3.clean(value, tags=set(), attributes={}).replace("&amp;", "&")


def sanitize(value: Any) -> Any:
    """
    Sanitize a single input value.

    Examples:
        >>> sanitize("  A007 ")
        'A007'
        >>> sanitize("<b>O'Brien</b>;")
        'OBrien'
        >>> sanitize(0.15)
        0.15
    """
    if not isinstance(value, str):
        return value
    return strip_markup(value).strip().translate(_STRIP_TABLE)


def sanitize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `payload` with every value passed through sanitize()."""
    return {key: sanitize(value) for key, value in payload.items()}
