"""
Resume validation.

Checks raw resume data against the ResumeDocument schema and the document-level
limits (total size, unique entry ids). Errors are collected, not raised, so the
editor can show every problem at once next to the offending field.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from scribe.contexts.editing.defaults import Limits
from scribe.contexts.editing.exceptions import ResumeValidationError
from scribe.contexts.editing.logger import _log_debug
from scribe.contexts.editing.resume_document import SECTION_ENTRY_TYPES, ResumeDocument

ROOT_FIELD = "root"

# Friendlier messages for pydantic error types, keyed by (field path, error type)
_MESSAGE_OVERRIDES = {
    ("education", "too_short"): "At least one education entry is required",
    ("header", "missing"): "Header is required",
    ("education", "missing"): "Education is required",
}


@dataclass(frozen=True)
class ValidationIssue:
    """One validation failure: dot-joined field path and human-readable message."""
    field: str
    message: str


@dataclass
class ValidationResult:
    """
    Outcome of validating resume data.

    Attributes:
        is_valid: True when no issues were found
        errors: Every issue found, in schema order
        document: Parsed document (only when valid)
    """
    is_valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    document: Optional[ResumeDocument] = None


def measure_size(data: Dict[str, Any]) -> int:
    """Size in bytes of the compact JSON serialization of resume data."""
    return len(json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def _issue_from_error(error: Dict[str, Any]) -> ValidationIssue:
    path = ".".join(str(part) for part in error["loc"]) or ROOT_FIELD

    override = _MESSAGE_OVERRIDES.get((path, error["type"]))
    if override:
        return ValidationIssue(path, override)

    # Messages raised by our own validators come through without pydantic's prefix
    if error["type"] == "value_error" and "error" in error.get("ctx", {}):
        return ValidationIssue(path, str(error["ctx"]["error"]))

    return ValidationIssue(path, error["msg"])


def _duplicate_id_issues(data: Dict[str, Any]) -> List[ValidationIssue]:
    issues = []
    for section in SECTION_ENTRY_TYPES:
        entries = data.get(section)
        if not isinstance(entries, list):
            continue
        seen = set()
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                continue
            entry_id = entry.get("id")
            if entry_id is None:
                continue
            if entry_id in seen:
                issues.append(
                    ValidationIssue(f"{section}.{index}.id", f"Duplicate id '{entry_id}' in {section}")
                )
            seen.add(entry_id)
    return issues


def validate_resume(data: Union[Dict[str, Any], ResumeDocument]) -> ValidationResult:
    """
    Validate resume data, collecting every issue.

    The size ceiling is checked first; oversized data is rejected without
    schema validation.

    Args:
        data: JSON-shaped resume data (camelCase or snake_case keys) or a document

    Returns:
        ValidationResult with the parsed document when valid
    """
    if isinstance(data, ResumeDocument):
        data = data.to_data()

    if not isinstance(data, dict):
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(ROOT_FIELD, "Resume data must be an object")],
        )

    try:
        size = measure_size(data)
    except (TypeError, ValueError) as e:
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(ROOT_FIELD, f"Resume data must be JSON-serializable: {e}")],
        )

    if size > Limits.MAX_TOTAL_SIZE_BYTES:
        message = (
            f"Resume data exceeds maximum size "
            f"({round(size / 1024)}KB > {round(Limits.MAX_TOTAL_SIZE_BYTES / 1000)}KB)"
        )
        _log_debug(message)
        return ValidationResult(is_valid=False, errors=[ValidationIssue(ROOT_FIELD, message)])

    issues: List[ValidationIssue] = []
    document = None
    try:
        document = ResumeDocument.model_validate(data)
    except ValidationError as e:
        issues.extend(_issue_from_error(error) for error in e.errors())

    issues.extend(_duplicate_id_issues(data))

    if issues:
        _log_debug(f"Validation found {len(issues)} issue(s)")
        return ValidationResult(is_valid=False, errors=issues)

    return ValidationResult(is_valid=True, errors=[], document=document)


def parse_resume(data: Union[Dict[str, Any], ResumeDocument]) -> ResumeDocument:
    """
    Validate resume data and return the document, raising on failure.

    Raises:
        ResumeValidationError: If any validation issue is found
    """
    result = validate_resume(data)
    if not result.is_valid:
        raise ResumeValidationError("Resume data is invalid", errors=result.errors)
    return result.document


def get_field_error(errors: List[ValidationIssue], field_path: str) -> Optional[str]:
    """
    Get the first error message for an exact field path.

    Args:
        errors: Issues from a ValidationResult
        field_path: Dot-joined path, e.g. "education.0.school"

    Returns:
        Message, or None when the field has no error
    """
    for issue in errors:
        if issue.field == field_path:
            return issue.message
    return None
