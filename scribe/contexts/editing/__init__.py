"""
Editing Context

Responsibilities:
- Defines the resume document model (header, education, experience, projects, skills, formatting)
- Validates raw resume data and reports every issue with its field path
- Applies immutable edits and named formatting presets
- Imports and exports resume files (JSON, YAML)

Owns: Resume data shape, limits, validation, sample resume
Never: Produces markup or talks to a compiler
"""

from scribe.contexts.editing.exceptions import (
    InvalidResumeFormatError,
    PresetNotFoundError,
    ResumeValidationError,
)
from scribe.contexts.editing.operations import (
    add_entry,
    default_resume,
    move_entry,
    remove_entry,
    reset_formatting,
    update_entry,
    update_formatting,
    update_header,
)
from scribe.contexts.editing.resume_document import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    FormattingSettings,
    ProjectEntry,
    ResumeDocument,
    SkillCategory,
    create_empty_education,
    create_empty_experience,
    create_empty_project,
    create_empty_skill_category,
)
from scribe.contexts.editing.validation import (
    ValidationIssue,
    ValidationResult,
    get_field_error,
    parse_resume,
    validate_resume,
)

__all__ = [
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "FormattingSettings",
    "InvalidResumeFormatError",
    "PresetNotFoundError",
    "ProjectEntry",
    "ResumeDocument",
    "ResumeValidationError",
    "SkillCategory",
    "ValidationIssue",
    "ValidationResult",
    "add_entry",
    "create_empty_education",
    "create_empty_experience",
    "create_empty_project",
    "create_empty_skill_category",
    "default_resume",
    "get_field_error",
    "move_entry",
    "parse_resume",
    "remove_entry",
    "reset_formatting",
    "update_entry",
    "update_formatting",
    "update_header",
    "validate_resume",
]
