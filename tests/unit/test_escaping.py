"""
Unit tests for markup escaping.

Tests escapers and safety predicates in scribe.contexts.templating.escaping.
"""

import pytest

from scribe.contexts.templating.escaping import (
    escape_latex,
    escape_latex_url,
    escape_typst,
    escape_typst_url,
    is_safe_latex_input,
    is_safe_typst_input,
)


class TestEscapeLatex:
    """Tests for escape_latex function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("R&D 100%", r"R\&D 100\%"),
            ("snake_case", r"snake\_case"),
            ("$5 #1", r"\$5 \#1"),
            ("{x}", r"\{x\}"),
            ("~^", r"\textasciitilde{}\textasciicircum{}"),
            ("Plain text, no specials.", "Plain text, no specials."),
        ],
    )
    def test_special_characters(self, text, expected):
        """Test each special character maps to its LaTeX form."""
        assert escape_latex(text) == expected

    @pytest.mark.unit
    def test_backslash_is_single_pass(self):
        """Test braces introduced by the backslash replacement are not escaped again."""
        assert escape_latex("a\\b") == r"a\textbackslash{}b"

    @pytest.mark.unit
    def test_empty_and_none(self):
        """Test None and empty input produce empty output."""
        assert escape_latex(None) == ""
        assert escape_latex("") == ""

    @pytest.mark.unit
    def test_not_idempotent(self):
        """Test escaping twice double-escapes (callers escape exactly once)."""
        once = escape_latex("&")
        assert once == r"\&"
        assert escape_latex(once) == r"\textbackslash{}\&"


class TestEscapeLatexUrl:
    """Tests for escape_latex_url function."""

    @pytest.mark.unit
    def test_only_url_characters_escaped(self):
        """Test %, # and ~ are escaped and everything else is left alone."""
        url = "https://example.org/a%20b_c#frag~user"
        assert escape_latex_url(url) == r"https://example.org/a\%20b_c\#frag\~{}user"

    @pytest.mark.unit
    def test_empty(self):
        assert escape_latex_url(None) == ""


class TestEscapeTypst:
    """Tests for escape_typst function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("C# & *bold*", r"C\# & \*bold\*"),
            ("jake@su.edu", r"jake\@su.edu"),
            ("client/server", r"client\/server"),
            ("$5 <tag> [x] `code` ~", r"\$5 \<tag\> \[x\] \`code\` \~"),
            ("snake_case", r"snake\_case"),
            ("a\\b", r"a\\b"),
        ],
    )
    def test_special_characters(self, text, expected):
        """Test each special character is backslash-prefixed."""
        assert escape_typst(text) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("- item", r"\- item"),
            ("+ item", r"\+ item"),
            ("= Heading", r"\= Heading"),
            ("1. First", r"1\. First"),
            ("  - indented", r"  \- indented"),
            ("line\n- second", "line\n\\- second"),
        ],
    )
    def test_line_start_markers(self, text, expected):
        """Test list, heading and enumeration markers at line start stay literal."""
        assert escape_typst(text) == expected

    @pytest.mark.unit
    def test_markers_mid_line_untouched(self):
        """Test markers that are not at the start of a line are not escaped."""
        assert escape_typst("C++ - 2 = 1. done") == "C++ - 2 = 1. done"

    @pytest.mark.unit
    def test_empty_and_none(self):
        assert escape_typst(None) == ""
        assert escape_typst("") == ""


@pytest.mark.unit
def test_escape_typst_url():
    """Test only backslash and double quote are escaped inside a string literal."""
    assert escape_typst_url('https://example.org/"q"') == 'https://example.org/\\"q\\"'
    assert escape_typst_url("a\\b") == "a\\\\b"
    assert escape_typst_url("https://example.org/#a_b") == "https://example.org/#a_b"
    assert escape_typst_url(None) == ""


class TestSafetyPredicates:
    """Tests for is_safe_latex_input and is_safe_typst_input."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            r"\input{/etc/passwd}",
            r"\include{secret}",
            r"\immediate\write18{rm -rf /}",
            r"\def\x{y}",
            r"\newcommand{\foo}{bar}",
            r"\renewcommand{\foo}{bar}",
            r"\catcode`\@=11",
            r"\openin5=file",
            r"\special{ps: x}",
        ],
    )
    def test_latex_unsafe(self, text):
        """Test commands that read, write or redefine are detected."""
        assert is_safe_latex_input(text) is False

    @pytest.mark.unit
    def test_latex_case_insensitive(self):
        """Test detection ignores case."""
        assert is_safe_latex_input(r"\INPUT{x}") is False

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["Built APIs", r"\textbf{bold}", "100% & more", None, ""])
    def test_latex_safe(self, text):
        assert is_safe_latex_input(text) is True

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        ['#import "x.typ"', '#include "x.typ"', "#eval(code)", 'read("/etc/passwd")', 'plugin("x.wasm")'],
    )
    def test_typst_unsafe(self, text):
        assert is_safe_typst_input(text) is False

    @pytest.mark.unit
    def test_typst_case_insensitive(self):
        assert is_safe_typst_input('#IMPORT "x"') is False

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["C# developer", "#emph", "Read the docs", None])
    def test_typst_safe(self, text):
        assert is_safe_typst_input(text) is True

    @pytest.mark.unit
    def test_predicate_does_not_transform(self):
        """Test the predicate leaves its input unchanged."""
        text = r"\input{x}"
        is_safe_latex_input(text)
        assert text == r"\input{x}"
