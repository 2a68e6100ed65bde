"""Unit tests for formatting preset loading and application."""

import pytest

from scribe.contexts.editing import PresetNotFoundError, default_resume
from scribe.contexts.editing.presets import apply_presets, load_formatting_presets


@pytest.mark.unit
def test_load_formatting_presets_flattened():
    """Test category.name is flattened to category_name."""
    presets = load_formatting_presets()

    assert {"spacing_tight", "spacing_relaxed", "margins_narrow", "margins_wide", "typography_compact"} <= set(presets)
    assert presets["margins_narrow"]["marginLeft"] == 0.3


@pytest.mark.unit
def test_apply_single_preset():
    document = default_resume()
    updated = apply_presets(document, ["margins_narrow"])

    resolved = updated.resolved_formatting()
    assert resolved["margin_left"] == 0.3
    assert resolved["margin_bottom"] == 0.3
    assert document.formatting is None


@pytest.mark.unit
def test_later_presets_override_earlier():
    updated = apply_presets(default_resume(), ["margins_narrow", "margins_wide"])
    assert updated.resolved_formatting()["margin_left"] == 0.75


@pytest.mark.unit
def test_presets_compose():
    """Test presets touching different settings combine."""
    updated = apply_presets(default_resume(), ["spacing_tight", "margins_narrow"])

    resolved = updated.resolved_formatting()
    assert resolved["item_spacing"] == -3
    assert resolved["margin_left"] == 0.3
    assert resolved["base_font_size"] == 11


@pytest.mark.unit
def test_unknown_preset():
    """Test an unknown name fails before any preset is applied."""
    with pytest.raises(PresetNotFoundError) as exc_info:
        apply_presets(default_resume(), ["margins_narrow", "margins_huge"])

    assert exc_info.value.preset_name == "margins_huge"
    assert "Available:" in str(exc_info.value)
    assert isinstance(exc_info.value, KeyError)


@pytest.mark.unit
def test_no_presets_returns_same_document():
    document = default_resume()
    assert apply_presets(document, []) is document


@pytest.mark.unit
def test_custom_config_path(tmp_path):
    config = tmp_path / "presets.yaml"
    config.write_text("custom:\n  roomy:\n    listIndent: 0.3\n    gridWidth: 100\n", encoding="utf-8")

    updated = apply_presets(default_resume(), ["custom_roomy"], config_path=config)

    resolved = updated.resolved_formatting()
    assert resolved["list_indent"] == 0.3
    assert resolved["grid_width"] == 100
