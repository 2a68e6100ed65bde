"""
Typst renderer for Jake's resume template.

Generates section fragments as calls to the helper functions defined in the
Typst template (#resume-subheading, #resume-items, ...), with user text
escaped for Typst markup. Also serializes the document as a Typst dictionary
literal for compilers that inline it into the template's data slot.
"""

import re
from typing import Any, Dict, List, Optional

from scribe.contexts.editing.resume_document import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeDocument,
    SkillCategory,
)
from scribe.contexts.templating.escaping import escape_typst, escape_typst_url, is_safe_typst_input
from scribe.contexts.templating.formatters import (
    clean_url_for_display,
    filter_blank_entries,
    format_bullet,
    format_skill_items,
    format_url_for_href,
    is_blank,
)
from scribe.contexts.templating.markup_patterns import TypstCommands
from scribe.contexts.templating.renderer_base import MarkupRenderer, RendererRegistry
from scribe.utils.text_processing import format_number

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_STRING_ESCAPE_RE = re.compile(r'[\\"\n\r\t]')


def to_typst_string(text: str) -> str:
    """Quote text as a Typst string literal."""
    return '"' + _STRING_ESCAPE_RE.sub(lambda m: _STRING_ESCAPES[m.group(0)], text) + '"'


def to_typst_value(value: Any) -> str:
    """
    Convert a JSON-shaped Python value to Typst literal syntax.

    Arrays always carry a trailing comma so a single element stays an array;
    the empty array is "()" and the empty dictionary "(:)".

    Examples:
        >>> to_typst_value({"items": ["Python"], "extra": None})
        '(items: ("Python",), extra: none)'
        >>> to_typst_value([])
        '()'
    """
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return to_typst_string(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return "()"
        return "(" + ", ".join(to_typst_value(item) for item in value) + ",)"
    if isinstance(value, dict):
        if not value:
            return "(:)"
        entries = []
        for key, item in value.items():
            key = str(key)
            key_text = key if _IDENTIFIER_RE.match(key) else to_typst_string(key)
            entries.append(f"{key_text}: {to_typst_value(item)}")
        return "(" + ", ".join(entries) + ")"
    return "none"


def _optional(value: Optional[str]) -> Optional[str]:
    return None if is_blank(value) else value


@RendererRegistry.register("typst")
class TypstRenderer(MarkupRenderer):
    name = "typst"
    file_extension = "typ"

    def escape(self, text: Optional[str]) -> str:
        return escape_typst(text)

    def escape_url(self, url: Optional[str]) -> str:
        return escape_typst_url(url)

    def is_safe_input(self, text: Optional[str]) -> bool:
        return is_safe_typst_input(text)

    def template_context(self, formatting: Dict[str, float]) -> Dict[str, str]:
        # Units live in the template; every setting is passed as a bare number
        return {name: format_number(value) for name, value in formatting.items()}

    def _content(self, text: Optional[str]) -> str:
        return f"[{self.escape(text)}]"

    def _link(self, href: str, text: str) -> str:
        return f'#link("{self.escape_url(href)}")[#underline[{self.escape(text)}]]'

    def render_header(self, header: ContactInfo) -> str:
        items = []

        if not is_blank(header.phone):
            items.append(self.escape(header.phone.strip()))

        if not is_blank(header.email):
            email = header.email.strip()
            items.append(self._link(f"mailto:{email}", email))

        for url in (header.linkedin, header.github, header.website):
            if not is_blank(url):
                url = url.strip()
                items.append(self._link(format_url_for_href(url), clean_url_for_display(url)))

        lines = [f"{TypstCommands.NAME}{self._content(header.name)}"]
        if items:
            lines.append(f"{TypstCommands.CONTACTS}[{TypstCommands.SEPARATOR.join(items)}]")
        return "\n".join(lines)

    def _render_bullets(self, bullets: List[str]) -> str:
        valid = filter_blank_entries(bullets)
        if not valid:
            return ""
        return TypstCommands.ITEMS + "".join(
            f"[{format_bullet(bullet, self.escape)}]" for bullet in valid
        )

    def _render_education_entry(self, entry: EducationEntry) -> str:
        lines = [
            TypstCommands.SUBHEADING
            + self._content(entry.school)
            + self._content(entry.location)
            + self._content(entry.degree)
            + self._content(entry.dates)
        ]
        extra = self._render_bullets([entry.extra or ""])
        if extra:
            lines.append(extra)
        return "\n".join(lines)

    def render_education(self, education: List[EducationEntry]) -> str:
        return "\n".join(self._render_education_entry(entry) for entry in education)

    def _render_experience_entry(self, entry: ExperienceEntry) -> str:
        lines = [
            TypstCommands.SUBHEADING
            + self._content(entry.organization)
            + self._content(entry.dates)
            + self._content(entry.role)
            + self._content(entry.location)
        ]
        bullets = self._render_bullets(entry.bullets)
        if bullets:
            lines.append(bullets)
        return "\n".join(lines)

    def render_experience(self, experience: List[ExperienceEntry]) -> str:
        if not experience:
            return ""
        lines = [f"{TypstCommands.SECTION_HEADING}[Experience]"]
        lines.extend(self._render_experience_entry(entry) for entry in experience)
        return "\n".join(lines)

    def _render_project_entry(self, entry: ProjectEntry) -> str:
        title = f"#strong[{self.escape(entry.name)}]"
        if not is_blank(entry.tech_stack):
            title += f"{TypstCommands.SEPARATOR}#emph[{self.escape(entry.tech_stack)}]"

        lines = [f"{TypstCommands.PROJECT_HEADING}[{title}]{self._content(entry.dates)}"]
        bullets = self._render_bullets(entry.bullets)
        if bullets:
            lines.append(bullets)
        return "\n".join(lines)

    def render_projects(self, projects: List[ProjectEntry]) -> str:
        if not projects:
            return ""
        lines = [f"{TypstCommands.SECTION_HEADING}[Projects]"]
        lines.extend(self._render_project_entry(entry) for entry in projects)
        return "\n".join(lines)

    def render_skills(self, skills: List[SkillCategory]) -> str:
        skill_lines = [
            TypstCommands.SKILL_LINE
            + self._content(category.name)
            + f"[{format_skill_items(category.items, self.escape)}]"
            for category in skills
            if filter_blank_entries(category.items)
        ]
        if not skill_lines:
            return ""
        return "\n".join([f"{TypstCommands.SECTION_HEADING}[Technical Skills]", *skill_lines])

    def serialize_data(self, document: ResumeDocument) -> str:
        """
        Serialize a document as a Typst dictionary literal.

        Blank bullets and skill items are dropped; blank optional contact
        fields become none.
        """
        header = document.header
        data = {
            "header": {
                "name": header.name,
                "phone": _optional(header.phone),
                "email": _optional(header.email),
                "linkedin": _optional(header.linkedin),
                "github": _optional(header.github),
                "website": _optional(header.website),
            },
            "education": [
                {
                    "school": entry.school,
                    "location": entry.location,
                    "degree": entry.degree,
                    "dates": entry.dates,
                    "extra": _optional(entry.extra),
                }
                for entry in document.education
            ],
            "experience": [
                {
                    "organization": entry.organization,
                    "location": entry.location,
                    "role": entry.role,
                    "dates": entry.dates,
                    "bullets": filter_blank_entries(entry.bullets),
                }
                for entry in document.experience
            ],
            "projects": [
                {
                    "name": entry.name,
                    "techStack": entry.tech_stack,
                    "dates": entry.dates,
                    "bullets": filter_blank_entries(entry.bullets),
                }
                for entry in document.projects
            ],
            "skills": [
                {"name": category.name, "items": filter_blank_entries(category.items)}
                for category in document.skills
            ],
        }
        return to_typst_value(data)

    def compile_data(self, document: ResumeDocument) -> Optional[str]:
        return self.serialize_data(document)
