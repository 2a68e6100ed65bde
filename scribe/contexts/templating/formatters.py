"""
Field formatters shared by the section renderers.

URL helpers work on raw user text; escaping for the target dialect happens
afterwards, in the renderer.
"""

import re
from typing import Callable, Iterable, List, Optional

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_WWW_RE = re.compile(r"^www\.", re.IGNORECASE)


def clean_url_for_display(url: Optional[str]) -> str:
    """
    Shorten a URL for display: drop the scheme, a leading "www." and one trailing slash.

    Examples:
        >>> clean_url_for_display("https://www.github.com/jake/")
        'github.com/jake'
    """
    if not url:
        return ""
    cleaned = _SCHEME_RE.sub("", url)
    cleaned = _WWW_RE.sub("", cleaned)
    if cleaned.endswith("/"):
        cleaned = cleaned[:-1]
    return cleaned


def format_url_for_href(url: Optional[str]) -> str:
    """
    Make a URL absolute by prepending https:// unless it already has an http(s) scheme.

    Examples:
        >>> format_url_for_href("linkedin.com/in/jake")
        'https://linkedin.com/in/jake'
        >>> format_url_for_href("HTTP://example.com")
        'HTTP://example.com'
    """
    if not url:
        return ""
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def filter_blank_entries(items: Iterable[Optional[str]]) -> List[str]:
    """Drop empty and whitespace-only entries, keeping order."""
    return [item for item in items if not is_blank(item)]


def format_bullet(bullet: Optional[str], escape: Callable[[str], str]) -> str:
    """Trim and escape one bullet; blank bullets become the empty string."""
    if is_blank(bullet):
        return ""
    return escape(bullet.strip())


def format_skill_items(items: Iterable[Optional[str]], escape: Callable[[str], str]) -> str:
    """Escape non-blank skill items and join them with ", "."""
    return ", ".join(escape(item) for item in filter_blank_entries(items))
