"""
Resume document data model.

Pydantic models for the structured resume that the editor produces and the
renderers consume. Models are frozen: every edit builds a new document (see
operations.py). JSON field names are camelCase (techStack, marginLeft, ...),
Python attribute names are snake_case; both are accepted on input.
"""

from typing import Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated

from scribe.contexts.editing.defaults import FORMATTING_SPECS, Limits, generate_id, get_default_formatting


def _required(label: str) -> AfterValidator:
    """Validator rejecting values that are empty after trimming."""

    def check(value: str) -> str:
        if not value.strip():
            raise ValueError(f"{label} is required")
        return value

    return AfterValidator(check)


FieldText = Annotated[str, StringConstraints(max_length=Limits.MAX_FIELD_LENGTH)]
BulletText = Annotated[str, StringConstraints(max_length=Limits.MAX_BULLET_LENGTH)]
EntryId = Annotated[str, StringConstraints(min_length=1)]


class ResumeModel(BaseModel):
    """Base for all resume models: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ContactInfo(ResumeModel):
    """Header block: name plus optional contact items."""

    name: Annotated[str, StringConstraints(max_length=Limits.MAX_NAME_LENGTH), _required("Name")]
    phone: Optional[FieldText] = None
    email: Optional[FieldText] = None
    linkedin: Optional[FieldText] = None
    github: Optional[FieldText] = None
    website: Optional[FieldText] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        # Empty string is allowed and means "no email"
        if not value:
            return value
        try:
            validate_email(value)
        except PydanticCustomError:
            raise ValueError("Invalid email address")
        return value


class EducationEntry(ResumeModel):
    id: EntryId = Field(default_factory=generate_id)
    school: Annotated[FieldText, _required("School")]
    location: FieldText = ""
    degree: Annotated[FieldText, _required("Degree")]
    dates: FieldText = ""
    extra: Optional[FieldText] = None


class ExperienceEntry(ResumeModel):
    """
    One job.

    Note the field naming: ``organization`` is rendered as the bold heading
    (paired with dates) and ``role`` as the italic subheading (paired with
    location). The sample resume relies on this mapping.
    """

    id: EntryId = Field(default_factory=generate_id)
    organization: Annotated[FieldText, _required("Organization")]
    location: FieldText = ""
    role: Annotated[FieldText, _required("Role")]
    dates: FieldText = ""
    bullets: List[BulletText] = Field(
        default_factory=list, max_length=Limits.MAX_BULLETS_PER_SECTION
    )


class ProjectEntry(ResumeModel):
    id: EntryId = Field(default_factory=generate_id)
    name: Annotated[FieldText, _required("Project name")]
    tech_stack: FieldText = ""
    dates: FieldText = ""
    bullets: List[BulletText] = Field(
        default_factory=list, max_length=Limits.MAX_BULLETS_PER_SECTION
    )


class SkillCategory(ResumeModel):
    id: EntryId = Field(default_factory=generate_id)
    name: Annotated[FieldText, _required("Category name")]
    items: List[FieldText] = Field(
        default_factory=list, max_length=Limits.MAX_SKILLS_PER_CATEGORY
    )


def _setting(name: str) -> Any:
    spec = FORMATTING_SPECS[name]
    return Field(default=None, ge=spec.minimum, le=spec.maximum, description=spec.label)


class FormattingSettings(ResumeModel):
    """
    Layout overrides. Every field is optional; unset fields fall back to the
    defaults in FORMATTING_SPECS.
    """

    margin_left: Optional[float] = _setting("margin_left")
    margin_right: Optional[float] = _setting("margin_right")
    margin_top: Optional[float] = _setting("margin_top")
    margin_bottom: Optional[float] = _setting("margin_bottom")
    base_font_size: Optional[float] = _setting("base_font_size")
    par_leading: Optional[float] = _setting("par_leading")
    name_font_size: Optional[float] = _setting("name_font_size")
    name_spacing: Optional[float] = _setting("name_spacing")
    contact_font_size: Optional[float] = _setting("contact_font_size")
    contact_spacing: Optional[float] = _setting("contact_spacing")
    section_font_size: Optional[float] = _setting("section_font_size")
    section_space_before: Optional[float] = _setting("section_space_before")
    section_space_after_1: Optional[float] = _setting("section_space_after_1")
    section_space_after_2: Optional[float] = _setting("section_space_after_2")
    subheading_space_before: Optional[float] = _setting("subheading_space_before")
    subheading_space_after: Optional[float] = _setting("subheading_space_after")
    item_font_size: Optional[float] = _setting("item_font_size")
    item_spacing: Optional[float] = _setting("item_spacing")
    block_space_after: Optional[float] = _setting("block_space_after")
    list_indent: Optional[float] = _setting("list_indent")
    grid_width: Optional[float] = _setting("grid_width")

    def resolved(self) -> Dict[str, float]:
        """
        Get every setting with defaults filled in.

        Returns:
            Dict mapping snake_case field name to its effective value
        """
        values = get_default_formatting()
        values.update({name: value for name, value in self.model_dump().items() if value is not None})
        return values


class ResumeDocument(ResumeModel):
    """The full resume: header, four ordered sections, optional formatting."""

    header: ContactInfo
    education: List[EducationEntry] = Field(
        min_length=1, max_length=Limits.MAX_EDUCATION_ENTRIES
    )
    experience: List[ExperienceEntry] = Field(
        default_factory=list, max_length=Limits.MAX_EXPERIENCE_ENTRIES
    )
    projects: List[ProjectEntry] = Field(
        default_factory=list, max_length=Limits.MAX_PROJECT_ENTRIES
    )
    skills: List[SkillCategory] = Field(
        default_factory=list, max_length=Limits.MAX_SKILL_CATEGORIES
    )
    formatting: Optional[FormattingSettings] = None

    def to_data(self) -> Dict[str, Any]:
        """Serialize to JSON-shaped data with camelCase keys (unset values omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def resolved_formatting(self) -> Dict[str, float]:
        """Effective formatting values (defaults when no overrides are set)."""
        return (self.formatting or FormattingSettings()).resolved()


# Section name -> entry model, for the generic edit operations
SECTION_ENTRY_TYPES = {
    "education": EducationEntry,
    "experience": ExperienceEntry,
    "projects": ProjectEntry,
    "skills": SkillCategory,
}


# Blank entries are drafts: built without validation so the editor can hold
# them while the user fills in required fields.


def create_empty_education() -> EducationEntry:
    """Blank education entry with a fresh id."""
    return EducationEntry.model_construct(
        id=generate_id(), school="", location="", degree="", dates=""
    )


def create_empty_experience() -> ExperienceEntry:
    return ExperienceEntry.model_construct(
        id=generate_id(), organization="", location="", role="", dates="", bullets=[""]
    )


def create_empty_project() -> ProjectEntry:
    return ProjectEntry.model_construct(
        id=generate_id(), name="", tech_stack="", dates="", bullets=[""]
    )


def create_empty_skill_category() -> SkillCategory:
    return SkillCategory.model_construct(id=generate_id(), name="", items=[""])


EMPTY_ENTRY_FACTORIES = {
    "education": create_empty_education,
    "experience": create_empty_experience,
    "projects": create_empty_project,
    "skills": create_empty_skill_category,
}
