"""Text cleanup applied to user supplied bodies before storage."""

from __future__ import annotations

import re
from typing import Final

_SCRIPT_BLOCK: Final[re.Pattern[str]] = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
)
_INLINE_HANDLER_DOUBLE: Final[re.Pattern[str]] = re.compile(r'on\w+="[^"]*"', re.IGNORECASE)
_INLINE_HANDLER_SINGLE: Final[re.Pattern[str]] = re.compile(r"on\w+='[^']*'", re.IGNORECASE)


def sanitize_html(text: str) -> str:
    """Strip ``<script>`` blocks and inline ``on*=`` event handlers."""

    cleaned = _SCRIPT_BLOCK.sub("", text)
    cleaned = _INLINE_HANDLER_DOUBLE.sub("", cleaned)
    return _INLINE_HANDLER_SINGLE.sub("", cleaned)


__all__ = ["sanitize_html"]
