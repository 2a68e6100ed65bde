"""Unit tests for TemplateRegistry class."""

import pytest
from pathlib import Path
from jinja2 import TemplateNotFound

from scribe.contexts.templating.exceptions import TemplateRenderError
from scribe.contexts.templating.markup_patterns import SECTION_PLACEHOLDERS
from scribe.contexts.templating.template_registry import TemplateRegistry


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
@pytest.mark.parametrize("extension", ["tex", "typ"])
def test_get_template_jake(extension):
    """Test loading both dialect skeletons of the jake template."""
    registry = TemplateRegistry()
    template = registry.get_template("jake", extension)

    assert template is not None
    assert registry.is_cached("jake", extension)


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    # First load
    template1 = registry.get_template("jake", "tex")
    assert registry.is_cached("jake", "tex")

    # Second load should return same object from cache
    template2 = registry.get_template("jake", "tex")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent_template", "tex")


@pytest.mark.unit
def test_get_template_path():
    """Test getting template file path."""
    registry = TemplateRegistry()
    path = registry.get_template_path("jake", "tex")

    assert isinstance(path, Path)
    assert path.name == "template.tex.jinja"
    assert "jake" in str(path)


@pytest.mark.unit
def test_clear_cache():
    """Test clearing the template cache."""
    registry = TemplateRegistry()
    registry.get_template("jake", "typ")
    assert registry.is_cached("jake", "typ")

    registry.clear_cache()
    assert not registry.is_cached("jake", "typ")
    assert registry._cache == {}


@pytest.mark.unit
def test_custom_templates_path(tmp_path):
    """Test custom delimiters fill preamble values and leave placeholders alone."""
    template_dir = tmp_path / "mini"
    template_dir.mkdir()
    (template_dir / "template.tex.jinja").write_text(
        "<# comment #>size=<<< font_size >>> {{HEADER_SECTION}} {#1}", encoding="utf-8"
    )

    registry = TemplateRegistry(templates_path=tmp_path)
    result = registry.render_skeleton("mini", "tex", {"font_size": "11pt"})

    assert result == "size=11pt {{HEADER_SECTION}} {#1}"


@pytest.mark.unit
def test_render_skeleton_keeps_placeholders():
    """Test every section placeholder survives Jinja rendering of the bundled skeletons."""
    from scribe.contexts.templating import LatexRenderer, TypstRenderer
    from scribe.contexts.editing import default_resume

    for renderer in (LatexRenderer(), TypstRenderer()):
        skeleton = renderer.render_skeleton(default_resume())
        for token in SECTION_PLACEHOLDERS.values():
            assert skeleton.count(token) == 1


@pytest.mark.unit
def test_render_skeleton_missing_value():
    """Test StrictUndefined turns a missing preamble value into TemplateRenderError."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateRenderError) as exc_info:
        registry.render_skeleton("jake", "tex", {})

    assert exc_info.value.template_name == "jake"
    assert exc_info.value.original_error is not None


@pytest.mark.unit
def test_get_template_source():
    """Test raw template source is returned unrendered."""
    registry = TemplateRegistry()
    source = registry.get_template_source("jake", "tex")

    assert "<<< font_size >>>" in source
    assert "{{HEADER_SECTION}}" in source
