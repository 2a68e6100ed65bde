"""
Unit tests for the assembler, renderer registry and renderer selection.
"""

import pytest

from scribe.contexts.editing import default_resume, update_entry, update_header
from scribe.contexts.templating import (
    LatexRenderer,
    RendererRegistry,
    TemplateRenderError,
    TypstRenderer,
    UnknownDialectError,
    assemble,
    available_dialects,
    get_renderer,
)
from scribe.contexts.templating.renderer_base import iter_text_fields

SKELETON = (
    "BEGIN\n{{HEADER_SECTION}}\n{{EDUCATION_SECTION}}\n"
    "{{EXPERIENCE_SECTION}}\n{{PROJECTS_SECTION}}\n{{SKILLS_SECTION}}\nEND"
)

FRAGMENTS = {
    "header": "H",
    "education": "E",
    "experience": "X",
    "projects": "P",
    "skills": "S",
}


class TestAssemble:
    """Tests for assemble function."""

    @pytest.mark.unit
    def test_substitutes_every_placeholder(self):
        assert assemble(SKELETON, FRAGMENTS) == "BEGIN\nH\nE\nX\nP\nS\nEND"

    @pytest.mark.unit
    def test_fragments_not_rescanned(self):
        """Test placeholder-like text inside a fragment survives verbatim."""
        fragments = {**FRAGMENTS, "header": "{{SKILLS_SECTION}}", "education": "{{ not a token }}"}
        result = assemble(SKELETON, fragments)
        assert result == "BEGIN\n{{SKILLS_SECTION}}\n{{ not a token }}\nX\nP\nS\nEND"

    @pytest.mark.unit
    def test_empty_fragments(self):
        fragments = {section: "" for section in FRAGMENTS}
        assert assemble(SKELETON, fragments) == "BEGIN\n\n\n\n\n\nEND"

    @pytest.mark.unit
    def test_missing_placeholder(self):
        """Test a skeleton without a placeholder is a template error."""
        skeleton = SKELETON.replace("{{SKILLS_SECTION}}", "")
        with pytest.raises(TemplateRenderError, match="SKILLS_SECTION"):
            assemble(skeleton, FRAGMENTS)

    @pytest.mark.unit
    def test_repeated_placeholder(self):
        skeleton = SKELETON + "{{HEADER_SECTION}}"
        with pytest.raises(TemplateRenderError, match="found 2"):
            assemble(skeleton, FRAGMENTS)

    @pytest.mark.unit
    def test_missing_fragment(self):
        fragments = {k: v for k, v in FRAGMENTS.items() if k != "projects"}
        with pytest.raises(TemplateRenderError, match="Missing section fragments: projects"):
            assemble(SKELETON, fragments)


@pytest.mark.unit
def test_iter_text_fields():
    """Test user text is yielded with JSON field paths; ids and formatting skipped."""
    data = {
        "header": {"name": "Jake"},
        "education": [{"id": "abc", "school": "SU"}],
        "skills": [{"id": "def", "items": ["Python", "Go"]}],
        "formatting": {"marginLeft": 0.5},
    }
    assert list(iter_text_fields(data)) == [
        ("header.name", "Jake"),
        ("education.0.school", "SU"),
        ("skills.0.items.0", "Python"),
        ("skills.0.items.1", "Go"),
    ]


class TestFindUnsafeFields:
    """Tests for MarkupRenderer.find_unsafe_fields."""

    @pytest.mark.unit
    def test_clean_document(self):
        document = default_resume()
        assert LatexRenderer().find_unsafe_fields(document) == []
        assert TypstRenderer().find_unsafe_fields(document) == []

    @pytest.mark.unit
    def test_latex_injection_reported_by_path(self):
        document = default_resume()
        entry_id = document.experience[0].id
        document = update_entry(document, "experience", entry_id, bullets=["ok", r"\input{/etc/passwd}"])
        assert LatexRenderer().find_unsafe_fields(document) == ["experience.0.bullets.1"]
        # Patterns are per dialect
        assert TypstRenderer().find_unsafe_fields(document) == []

    @pytest.mark.unit
    def test_typst_injection_reported_by_path(self):
        document = update_header(default_resume(), name='#import "evil.typ"')
        assert TypstRenderer().find_unsafe_fields(document) == ["header.name"]


class TestRendererRegistry:
    """Tests for renderer registration and lookup."""

    @pytest.mark.unit
    def test_bundled_dialects(self):
        assert available_dialects() == ["latex", "typst"]
        assert RendererRegistry.get("latex") is LatexRenderer
        assert RendererRegistry.get("typst") is TypstRenderer

    @pytest.mark.unit
    def test_unknown_dialect(self):
        with pytest.raises(UnknownDialectError) as exc_info:
            RendererRegistry.get("html")
        assert str(exc_info.value) == "Renderer 'html' not found. Available: latex, typst"
        assert isinstance(exc_info.value, KeyError)

    @pytest.mark.unit
    def test_get_renderer(self):
        renderer = get_renderer("typst")
        assert isinstance(renderer, TypstRenderer)
        assert renderer.file_extension == "typ"
        assert renderer.template_name == "jake"

    @pytest.mark.unit
    def test_get_renderer_unknown(self):
        with pytest.raises(UnknownDialectError):
            get_renderer("markdown")
