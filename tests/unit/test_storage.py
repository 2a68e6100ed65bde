"""Unit tests for resume import/export (JSON and YAML)."""

import json

import pytest

from scribe.contexts.editing import (
    InvalidResumeFormatError,
    ResumeValidationError,
    default_resume,
    update_formatting,
)
from scribe.contexts.editing.storage import load_resume, read_resume_data, save_resume


@pytest.mark.unit
@pytest.mark.parametrize("filename", ["resume.json", "resume.yaml", "resume.yml"])
def test_save_and_load(tmp_path, filename):
    """Test a saved document loads back unchanged, ids included."""
    document = update_formatting(default_resume(), marginLeft=0.4)
    path = save_resume(document, tmp_path / filename)

    assert path.exists()
    assert load_resume(path) == document


@pytest.mark.unit
def test_json_uses_camel_case(tmp_path):
    path = save_resume(default_resume(), tmp_path / "out" / "resume.json")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert "techStack" in data["projects"][0]
    assert "tech_stack" not in data["projects"][0]
    # Unset optional values are omitted
    assert "website" not in data["header"]
    assert "formatting" not in data


@pytest.mark.unit
def test_yaml_interpolation_not_resolved(tmp_path):
    """Test ${...} in resume text stays literal."""
    path = tmp_path / "resume.yaml"
    path.write_text(
        "header:\n"
        "  name: Jake Ryan\n"
        "education:\n"
        "  - id: edu1\n"
        "    school: 'Cost ${HOME} University'\n"
        "    degree: B.A.\n",
        encoding="utf-8",
    )

    data = read_resume_data(path)
    assert data["education"][0]["school"] == "Cost ${HOME} University"


@pytest.mark.unit
def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_resume_data(tmp_path / "nope.json")


@pytest.mark.unit
def test_missing_required_keys(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text(json.dumps({"header": {"name": "Jake"}}), encoding="utf-8")

    with pytest.raises(InvalidResumeFormatError, match="education"):
        read_resume_data(path)


@pytest.mark.unit
def test_not_an_object(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(InvalidResumeFormatError):
        read_resume_data(path)


@pytest.mark.unit
def test_malformed_json(tmp_path):
    path = tmp_path / "resume.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InvalidResumeFormatError, match="not valid JSON"):
        read_resume_data(path)


@pytest.mark.unit
def test_load_invalid_resume(tmp_path):
    data = default_resume().to_data()
    data["header"]["name"] = ""
    path = save_resume(data, tmp_path / "resume.json")

    with pytest.raises(ResumeValidationError):
        load_resume(path)
