"""Sanitizers used before values reach rendered HTML."""

from __future__ import annotations

import html


def sanitize_text(value: object | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def escape_html(value: object | None, max_len: int = 20000) -> str:
    """Escape user-supplied text before rendering in web surfaces."""
    return html.escape(sanitize_text(value, max_len=max_len), quote=True)


def parse_page(value: str | None) -> int:
    """1-based page number from a query string value; anything unusable is page 1."""
    try:
        page = int(sanitize_text(value))
    except ValueError:
        return 1
    return page if page >= 1 else 1
