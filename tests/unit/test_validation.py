"""
Unit tests for resume validation.

Validation collects every issue with its dot-joined JSON field path.
"""

import pytest

from scribe.contexts.editing import (
    ResumeDocument,
    ResumeValidationError,
    ValidationIssue,
    default_resume,
    get_field_error,
    parse_resume,
    validate_resume,
)
from scribe.contexts.editing.defaults import Limits, get_default_resume_data
from scribe.contexts.editing.validation import measure_size


@pytest.fixture
def data():
    return get_default_resume_data()


@pytest.mark.unit
def test_sample_resume_is_valid(data):
    result = validate_resume(data)

    assert result.is_valid
    assert result.errors == []
    assert isinstance(result.document, ResumeDocument)
    assert result.document.header.name == "Jake Ryan"


@pytest.mark.unit
def test_document_input_accepted():
    """Test an existing document validates like its data."""
    assert validate_resume(default_resume()).is_valid


@pytest.mark.unit
def test_snake_case_keys_accepted(data):
    data["projects"][0]["tech_stack"] = data["projects"][0].pop("techStack")
    result = validate_resume(data)
    assert result.is_valid
    assert result.document.projects[0].tech_stack == "Python, Flask, React, PostgreSQL, Docker"


class TestRequiredFields:
    """Tests for required-field checks."""

    @pytest.mark.unit
    def test_blank_name(self, data):
        """Test whitespace-only names are rejected after trimming."""
        data["header"]["name"] = "   "
        result = validate_resume(data)

        assert not result.is_valid
        assert ValidationIssue("header.name", "Name is required") in result.errors

    @pytest.mark.unit
    def test_collects_multiple_errors(self, data):
        """Test every issue is reported at once with its field path."""
        data["education"][0]["school"] = ""
        data["education"][1]["degree"] = " "
        data["experience"][2]["role"] = ""
        result = validate_resume(data)

        assert get_field_error(result.errors, "education.0.school") == "School is required"
        assert get_field_error(result.errors, "education.1.degree") == "Degree is required"
        assert get_field_error(result.errors, "experience.2.role") == "Role is required"
        assert len(result.errors) == 3

    @pytest.mark.unit
    def test_missing_header(self, data):
        del data["header"]
        result = validate_resume(data)
        assert get_field_error(result.errors, "header") == "Header is required"

    @pytest.mark.unit
    def test_education_needs_one_entry(self, data):
        data["education"] = []
        result = validate_resume(data)
        assert get_field_error(result.errors, "education") == "At least one education entry is required"


class TestEmail:
    """Tests for email validation."""

    @pytest.mark.unit
    def test_invalid_email(self, data):
        data["header"]["email"] = "not-an-email"
        result = validate_resume(data)
        assert result.errors == [ValidationIssue("header.email", "Invalid email address")]

    @pytest.mark.unit
    @pytest.mark.parametrize("email", ["", None])
    def test_empty_email_allowed(self, data, email):
        data["header"]["email"] = email
        assert validate_resume(data).is_valid


class TestLimits:
    """Tests for field and collection ceilings."""

    @pytest.mark.unit
    def test_name_too_long(self, data):
        data["header"]["name"] = "x" * (Limits.MAX_NAME_LENGTH + 1)
        result = validate_resume(data)
        assert get_field_error(result.errors, "header.name") is not None

    @pytest.mark.unit
    def test_bullet_too_long(self, data):
        data["experience"][0]["bullets"][1] = "x" * (Limits.MAX_BULLET_LENGTH + 1)
        result = validate_resume(data)
        assert get_field_error(result.errors, "experience.0.bullets.1") is not None

    @pytest.mark.unit
    def test_too_many_bullets(self, data):
        data["experience"][0]["bullets"] = ["Did a thing"] * (Limits.MAX_BULLETS_PER_SECTION + 1)
        result = validate_resume(data)
        assert get_field_error(result.errors, "experience.0.bullets") is not None

    @pytest.mark.unit
    def test_too_many_skills(self, data):
        data["skills"][0]["items"] = ["Skill"] * (Limits.MAX_SKILLS_PER_CATEGORY + 1)
        result = validate_resume(data)
        assert get_field_error(result.errors, "skills.0.items") is not None

    @pytest.mark.unit
    def test_too_many_education_entries(self, data):
        entry = data["education"][0]
        data["education"] = [dict(entry, id=f"edu{i}") for i in range(Limits.MAX_EDUCATION_ENTRIES + 1)]
        result = validate_resume(data)
        assert get_field_error(result.errors, "education") is not None

    @pytest.mark.unit
    def test_total_size(self, data):
        """Test oversized data is rejected with measured and limit sizes."""
        data["projects"][0]["bullets"] = ["x" * 400] * 150
        assert measure_size(data) > Limits.MAX_TOTAL_SIZE_BYTES

        result = validate_resume(data)

        assert not result.is_valid
        assert len(result.errors) == 1
        issue = result.errors[0]
        assert issue.field == "root"
        assert issue.message.startswith("Resume data exceeds maximum size (")
        assert issue.message.endswith("KB > 50KB)")

    @pytest.mark.unit
    def test_formatting_out_of_range(self, data):
        """Test formatting bounds are reported under the JSON field name."""
        data["formatting"] = {"marginLeft": 3, "baseFontSize": 11}
        result = validate_resume(data)
        assert [issue.field for issue in result.errors] == ["formatting.marginLeft"]


@pytest.mark.unit
def test_duplicate_ids(data):
    """Test identifiers must be unique within a section."""
    data["education"][1]["id"] = data["education"][0]["id"]
    result = validate_resume(data)

    assert not result.is_valid
    assert get_field_error(result.errors, "education.1.id").startswith("Duplicate id")


@pytest.mark.unit
def test_non_object_data():
    result = validate_resume(["not", "a", "resume"])
    assert result.errors == [ValidationIssue("root", "Resume data must be an object")]


@pytest.mark.unit
def test_parse_resume_raises(data):
    """Test parse_resume raises with every issue attached."""
    data["header"]["name"] = ""
    data["education"][0]["school"] = ""

    with pytest.raises(ResumeValidationError) as exc_info:
        parse_resume(data)

    assert len(exc_info.value.errors) == 2
    assert "header.name: Name is required" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.unit
def test_get_field_error_missing():
    assert get_field_error([ValidationIssue("header.name", "Name is required")], "header.email") is None
