"""
Markup renderer interface.

A renderer turns a validated ResumeDocument into markup for one dialect. Each
section renderer is a pure function of its section data; the assembler
substitutes the five fragments into the dialect's skeleton. Variants register
themselves by dialect name with RendererRegistry.
"""

import re
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple, Type

from scribe.contexts.editing.resume_document import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeDocument,
    SkillCategory,
)
from scribe.contexts.templating.exceptions import TemplateRenderError, UnknownDialectError
from scribe.contexts.templating.logger import log_markup_generated
from scribe.contexts.templating.markup_patterns import SECTION_PLACEHOLDERS
from scribe.contexts.templating.template_registry import DEFAULT_TEMPLATE, TemplateRegistry

_PLACEHOLDER_RE = re.compile("|".join(re.escape(token) for token in SECTION_PLACEHOLDERS.values()))

# Keys that never hold user text
_NON_TEXT_KEYS = {"id", "formatting"}


def assemble(skeleton: str, fragments: Dict[str, str]) -> str:
    """
    Substitute section fragments into a skeleton.

    Every placeholder is replaced in one pass over the skeleton, so fragment
    text (which may itself contain braces or placeholder-like text) is never
    scanned again. No escaping or validation happens here.

    Args:
        skeleton: Template text with each section placeholder exactly once
        fragments: Section name ("header", "education", ...) -> markup fragment

    Returns:
        Complete markup document

    Raises:
        TemplateRenderError: If a placeholder is missing or repeated, or a fragment is missing
    """
    for token in SECTION_PLACEHOLDERS.values():
        count = skeleton.count(token)
        if count != 1:
            raise TemplateRenderError(f"Template must contain {token} exactly once (found {count})")

    missing = [section for section in SECTION_PLACEHOLDERS if section not in fragments]
    if missing:
        raise TemplateRenderError(f"Missing section fragments: {', '.join(missing)}")

    by_token = {token: fragments[section] for section, token in SECTION_PLACEHOLDERS.items()}
    return _PLACEHOLDER_RE.sub(lambda m: by_token[m.group(0)], skeleton)


def iter_text_fields(data: object, prefix: str = "") -> Iterator[Tuple[str, str]]:
    """
    Yield (dot-joined field path, value) for every user text value in resume data.

    Paths use JSON field names, matching validation error paths.
    """
    if isinstance(data, dict):
        for key, value in data.items():
            if key in _NON_TEXT_KEYS:
                continue
            yield from iter_text_fields(value, f"{prefix}.{key}" if prefix else key)
    elif isinstance(data, list):
        for index, value in enumerate(data):
            yield from iter_text_fields(value, f"{prefix}.{index}")
    elif isinstance(data, str):
        yield prefix, data


class MarkupRenderer(ABC):
    """
    Base class for dialect renderers.

    Attributes:
        name: Dialect name used for registry lookup
        file_extension: Markup file extension without dot
        template_name: Template directory under the registry's templates path
    """

    name: str = ""
    file_extension: str = ""

    def __init__(
        self,
        template_name: str = DEFAULT_TEMPLATE,
        registry: Optional[TemplateRegistry] = None,
    ):
        self.template_name = template_name
        self.registry = registry or TemplateRegistry()

    # Escaping

    @abstractmethod
    def escape(self, text: Optional[str]) -> str: ...

    @abstractmethod
    def escape_url(self, url: Optional[str]) -> str: ...

    @abstractmethod
    def is_safe_input(self, text: Optional[str]) -> bool: ...

    # Section renderers

    @abstractmethod
    def render_header(self, header: ContactInfo) -> str: ...

    @abstractmethod
    def render_education(self, education: List[EducationEntry]) -> str: ...

    @abstractmethod
    def render_experience(self, experience: List[ExperienceEntry]) -> str: ...

    @abstractmethod
    def render_projects(self, projects: List[ProjectEntry]) -> str: ...

    @abstractmethod
    def render_skills(self, skills: List[SkillCategory]) -> str: ...

    @abstractmethod
    def template_context(self, formatting: Dict[str, float]) -> Dict[str, str]:
        """Preamble values for the skeleton, from resolved formatting settings."""

    # Document-level operations

    def assemble(self, skeleton: str, fragments: Dict[str, str]) -> str:
        return assemble(skeleton, fragments)

    def render_skeleton(self, document: ResumeDocument) -> str:
        """Render the skeleton with the document's formatting applied to the preamble."""
        context = self.template_context(document.resolved_formatting())
        return self.registry.render_skeleton(self.template_name, self.file_extension, context)

    def template_source(self) -> str:
        return self.registry.get_template_source(self.template_name, self.file_extension)

    def render_sections(self, document: ResumeDocument) -> Dict[str, str]:
        return {
            "header": self.render_header(document.header),
            "education": self.render_education(document.education),
            "experience": self.render_experience(document.experience),
            "projects": self.render_projects(document.projects),
            "skills": self.render_skills(document.skills),
        }

    def render(self, document: ResumeDocument) -> str:
        """
        Render a validated document to a complete markup document.

        Deterministic: the same document always yields the same markup.
        """
        markup = self.assemble(self.render_skeleton(document), self.render_sections(document))
        log_markup_generated(self.name, self.template_name, markup)
        return markup

    def compile_data(self, document: ResumeDocument) -> Optional[str]:
        """Structured data handed to the compiler alongside the markup (none by default)."""
        return None

    def find_unsafe_fields(self, document: ResumeDocument) -> List[str]:
        """Field paths whose text fails this dialect's safety check."""
        return [
            path
            for path, value in iter_text_fields(document.to_data())
            if not self.is_safe_input(value)
        ]


_registry: Dict[str, Type[MarkupRenderer]] = {}


class RendererRegistry:
    @staticmethod
    def register(name: str):
        def decorator(cls: Type[MarkupRenderer]) -> Type[MarkupRenderer]:
            _registry[name] = cls
            return cls

        return decorator

    @staticmethod
    def get(name: str) -> Type[MarkupRenderer]:
        if name not in _registry:
            raise UnknownDialectError(name, available=list(_registry))
        return _registry[name]

    @staticmethod
    def list_names() -> List[str]:
        return sorted(_registry.keys())
