"""Text sanitization for customer/runner chat."""

import html
import re

_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_text(value: str | None, max_length: int = 1000) -> str | None:
    """Collapse whitespace, trim, cap length and HTML-escape chat text.

    Returns an empty string when nothing but whitespace was sent; callers
    treat that as a missing message.
    """
    if value is None:
        return None
    collapsed = _WHITESPACE_RUN.sub(" ", value).strip()[:max_length]
    return html.escape(collapsed, quote=True)
