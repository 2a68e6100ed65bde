"""Unit tests for field formatters (URLs, bullets, skill items)."""

import pytest

from scribe.contexts.templating.escaping import escape_latex, escape_typst
from scribe.contexts.templating.formatters import (
    clean_url_for_display,
    filter_blank_entries,
    format_bullet,
    format_skill_items,
    format_url_for_href,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.github.com/jake/", "github.com/jake"),
        ("http://example.org", "example.org"),
        ("linkedin.com/in/jake", "linkedin.com/in/jake"),
        ("HTTPS://WWW.Example.org", "Example.org"),
        ("example.org//", "example.org/"),
        ("", ""),
        (None, ""),
    ],
)
def test_clean_url_for_display(url, expected):
    """Test scheme, leading www. and one trailing slash are removed."""
    assert clean_url_for_display(url) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "url, expected",
    [
        ("github.com/jake", "https://github.com/jake"),
        ("http://example.org", "http://example.org"),
        ("https://example.org", "https://example.org"),
        ("HTTPS://example.org", "HTTPS://example.org"),
        ("", ""),
    ],
)
def test_format_url_for_href(url, expected):
    """Test https:// is prepended only when no http(s) scheme is present."""
    assert format_url_for_href(url) == expected


@pytest.mark.unit
def test_filter_blank_entries():
    """Test empty and whitespace-only entries are dropped and order kept."""
    assert filter_blank_entries(["b", "", "  ", "a", None, "\t"]) == ["b", "a"]
    assert filter_blank_entries([]) == []


@pytest.mark.unit
def test_format_bullet():
    """Test bullets are trimmed then escaped; blank bullets become empty."""
    assert format_bullet("  Cut costs 50% & more  ", escape_latex) == r"Cut costs 50\% \& more"
    assert format_bullet("   ", escape_latex) == ""
    assert format_bullet(None, escape_latex) == ""


@pytest.mark.unit
def test_format_skill_items():
    """Test skill items are filtered, escaped and comma-joined."""
    assert format_skill_items(["Python", " ", "C#", ""], escape_latex) == r"Python, C\#"
    assert format_skill_items(["C#", "F#"], escape_typst) == r"C\#, F\#"
    assert format_skill_items(["", "  "], escape_latex) == ""
