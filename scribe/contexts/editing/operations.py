"""
Immutable edit operations on resume documents.

Every operation returns a new ResumeDocument and leaves its input untouched.
Entries are addressed by section name ("education", "experience", "projects",
"skills") and entry id. Operations do not run full validation (drafts may have
blank required fields); validate before rendering.
"""

from typing import Any, Dict, List, Optional

from scribe.contexts.editing.defaults import Limits, get_default_resume_data
from scribe.contexts.editing.logger import _log_debug
from scribe.contexts.editing.resume_document import (
    EMPTY_ENTRY_FACTORIES,
    SECTION_ENTRY_TYPES,
    ContactInfo,
    FormattingSettings,
    ResumeDocument,
    ResumeModel,
)

SECTION_LIMITS = {
    "education": Limits.MAX_EDUCATION_ENTRIES,
    "experience": Limits.MAX_EXPERIENCE_ENTRIES,
    "projects": Limits.MAX_PROJECT_ENTRIES,
    "skills": Limits.MAX_SKILL_CATEGORIES,
}


def _entries(document: ResumeDocument, section: str) -> List[Any]:
    if section not in SECTION_ENTRY_TYPES:
        raise KeyError(
            f"Unknown section '{section}'. Available: {', '.join(SECTION_ENTRY_TYPES)}"
        )
    return list(getattr(document, section))


def _find_index(entries: List[Any], entry_id: str, section: str) -> int:
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    raise KeyError(f"No entry with id '{entry_id}' in {section}")


def _field_names(changes: Dict[str, Any], model: type) -> Dict[str, Any]:
    """Map camelCase aliases in ``changes`` to attribute names; reject unknown keys."""
    by_alias = {info.alias: name for name, info in model.model_fields.items() if info.alias}
    updates = {}
    for key, value in changes.items():
        name = by_alias.get(key, key)
        if name not in model.model_fields:
            raise KeyError(f"{model.__name__} has no field '{key}'")
        updates[name] = value
    return updates


def add_entry(
    document: ResumeDocument, section: str, entry: Optional[ResumeModel] = None
) -> ResumeDocument:
    """
    Append an entry to a section.

    Args:
        document: Source document
        section: Section name
        entry: Entry to append (a blank draft with a fresh id when omitted)

    Returns:
        New document with the entry appended

    Raises:
        KeyError: If the section is unknown
        ValueError: If the section is already at its entry limit
    """
    entries = _entries(document, section)
    limit = SECTION_LIMITS[section]
    if len(entries) >= limit:
        raise ValueError(f"Cannot add more than {limit} entries to {section}")

    if entry is None:
        entry = EMPTY_ENTRY_FACTORIES[section]()
    _log_debug(f"Adding {section} entry {entry.id}")
    return document.model_copy(update={section: entries + [entry]})


def remove_entry(document: ResumeDocument, section: str, entry_id: str) -> ResumeDocument:
    """Remove the entry with ``entry_id`` from a section."""
    entries = _entries(document, section)
    index = _find_index(entries, entry_id, section)
    del entries[index]
    _log_debug(f"Removed {section} entry {entry_id}")
    return document.model_copy(update={section: entries})


def update_entry(
    document: ResumeDocument, section: str, entry_id: str, **changes: Any
) -> ResumeDocument:
    """
    Replace fields of one entry.

    Field names may be given as attributes (tech_stack) or JSON names (techStack).
    The entry keeps its id.

    Example:
        doc = update_entry(doc, "projects", project_id, techStack="Python, Flask")
    """
    entries = _entries(document, section)
    index = _find_index(entries, entry_id, section)
    updates = _field_names(changes, SECTION_ENTRY_TYPES[section])
    updates.pop("id", None)
    entries[index] = entries[index].model_copy(update=updates)
    return document.model_copy(update={section: entries})


def move_entry(
    document: ResumeDocument, section: str, entry_id: str, new_index: int
) -> ResumeDocument:
    """
    Move an entry to ``new_index`` (clamped to the section bounds).

    Returns:
        New document with the section reordered
    """
    entries = _entries(document, section)
    index = _find_index(entries, entry_id, section)
    entry = entries.pop(index)
    new_index = max(0, min(new_index, len(entries)))
    entries.insert(new_index, entry)
    return document.model_copy(update={section: entries})


def update_header(document: ResumeDocument, **changes: Any) -> ResumeDocument:
    """Replace fields of the contact header."""
    updates = _field_names(changes, ContactInfo)
    return document.model_copy(update={"header": document.header.model_copy(update=updates)})


def update_formatting(document: ResumeDocument, **changes: Any) -> ResumeDocument:
    """
    Override formatting values, keeping other overrides.

    Values are checked against their bounds.

    Raises:
        pydantic.ValidationError: If a value is out of range
        KeyError: If a setting name is unknown
    """
    updates = _field_names(changes, FormattingSettings)
    current = document.formatting.model_dump() if document.formatting else {}
    merged = {**current, **updates}
    formatting = FormattingSettings.model_validate(merged)
    return document.model_copy(update={"formatting": formatting})


def reset_formatting(document: ResumeDocument) -> ResumeDocument:
    """Drop all formatting overrides (every setting back to its default)."""
    return document.model_copy(update={"formatting": None})


def default_resume() -> ResumeDocument:
    """The sample resume as a validated document, with fresh ids."""
    return ResumeDocument.model_validate(get_default_resume_data())
