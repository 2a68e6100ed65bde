"""
Markup escaping for user text.

Each escaper is a single pass over the input: a replacement is never scanned
again, so a backslash introduced by one substitution cannot be escaped a
second time. Escaping is total (any string in, markup-safe string out) but not
idempotent; escape each value exactly once for the slot it lands in.

The safety predicates only detect; they never transform. Deciding what to do
with unsafe input is up to the caller.
"""

import re
from typing import Iterable, Optional

from scribe.contexts.templating.markup_patterns import (
    LATEX_ESCAPES,
    LATEX_UNSAFE_PATTERNS,
    LATEX_URL_ESCAPES,
    TYPST_SPECIAL_CHARACTERS,
    TYPST_UNSAFE_PATTERNS,
    TYPST_URL_SPECIAL_CHARACTERS,
)


def _char_class(characters: Iterable[str]) -> str:
    return "[" + "".join(re.escape(ch) for ch in characters) + "]"


_LATEX_RE = re.compile(_char_class(LATEX_ESCAPES))
_LATEX_URL_RE = re.compile(_char_class(LATEX_URL_ESCAPES))

# Either a list/heading/enumeration marker at the start of a line, or a special character
_TYPST_RE = re.compile(
    r"^([ \t]*)(?:(\d+)\.|([-+=]))|(" + _char_class(TYPST_SPECIAL_CHARACTERS) + ")",
    re.MULTILINE,
)
_TYPST_URL_RE = re.compile(_char_class(TYPST_URL_SPECIAL_CHARACTERS))


def _unsafe_regex(patterns: Iterable[str]) -> "re.Pattern[str]":
    return re.compile("|".join(re.escape(p) for p in patterns), re.IGNORECASE)


_LATEX_UNSAFE_RE = _unsafe_regex(LATEX_UNSAFE_PATTERNS)
_TYPST_UNSAFE_RE = _unsafe_regex(TYPST_UNSAFE_PATTERNS)


def escape_latex(text: Optional[str]) -> str:
    """
    Escape text for a LaTeX text slot.

    Examples:
        >>> escape_latex("R&D 100%")
        'R\\\\&D 100\\\\%'
        >>> escape_latex(None)
        ''
    """
    if not text:
        return ""
    return _LATEX_RE.sub(lambda m: LATEX_ESCAPES[m.group(0)], text)


def escape_latex_url(url: Optional[str]) -> str:
    """Escape a URL for a LaTeX \\href target (only %, # and ~)."""
    if not url:
        return ""
    return _LATEX_URL_RE.sub(lambda m: LATEX_URL_ESCAPES[m.group(0)], url)


def _escape_typst_match(match: "re.Match[str]") -> str:
    indent, number, marker, special = match.groups()
    if special is not None:
        return "\\" + special
    if number is not None:
        return f"{indent}{number}\\."
    return f"{indent}\\{marker}"


def escape_typst(text: Optional[str]) -> str:
    """
    Escape text for Typst markup.

    Special characters are backslash-prefixed; a list, heading or enumeration
    marker at the start of a line is escaped so it stays literal text.
    """
    if not text:
        return ""
    return _TYPST_RE.sub(_escape_typst_match, text)


def escape_typst_url(url: Optional[str]) -> str:
    """Escape a URL for use inside a Typst string literal."""
    if not url:
        return ""
    return _TYPST_URL_RE.sub(lambda m: "\\" + m.group(0), url)


def is_safe_latex_input(text: Optional[str]) -> bool:
    """False when text contains a LaTeX command that reads, writes or redefines."""
    if not text:
        return True
    return _LATEX_UNSAFE_RE.search(text) is None


def is_safe_typst_input(text: Optional[str]) -> bool:
    """False when text contains a Typst import, include, eval, file read or plugin load."""
    if not text:
        return True
    return _TYPST_UNSAFE_RE.search(text) is None
