"""
LaTeX renderer for Jake's resume template.

Generates the five section fragments as LaTeX using the commands defined in the
template preamble (\\resumeSubheading, \\resumeItem, ...).
"""

from typing import Dict, List, Optional

from scribe.contexts.editing.resume_document import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SkillCategory,
)
from scribe.contexts.templating.escaping import escape_latex, escape_latex_url, is_safe_latex_input
from scribe.contexts.templating.formatters import (
    clean_url_for_display,
    filter_blank_entries,
    format_bullet,
    format_skill_items,
    format_url_for_href,
    is_blank,
)
from scribe.contexts.templating.markup_patterns import LatexCommands
from scribe.contexts.templating.renderer_base import MarkupRenderer, RendererRegistry
from scribe.utils.text_processing import format_number

# article class only offers these base sizes
LATEX_FONT_SIZES = (10, 11, 12)


def snap_font_size(size: float) -> int:
    """Nearest base font size the article class supports (ties go to the smaller)."""
    return min(LATEX_FONT_SIZES, key=lambda option: abs(option - size))


@RendererRegistry.register("latex")
class LatexRenderer(MarkupRenderer):
    name = "latex"
    file_extension = "tex"

    def escape(self, text: Optional[str]) -> str:
        return escape_latex(text)

    def escape_url(self, url: Optional[str]) -> str:
        return escape_latex_url(url)

    def is_safe_input(self, text: Optional[str]) -> bool:
        return is_safe_latex_input(text)

    def template_context(self, formatting: Dict[str, float]) -> Dict[str, str]:
        """
        Convert formatting settings to preamble lengths.

        fullpage leaves 1in margins and a matching text block, so each margin
        is applied as an offset from 1in and the text block grows by whatever
        the margins give up.
        """
        margin_left = formatting["margin_left"]
        margin_right = formatting["margin_right"]
        margin_top = formatting["margin_top"]
        margin_bottom = formatting["margin_bottom"]

        def inches(value: float) -> str:
            return f"{format_number(value)}in"

        def points(value: float) -> str:
            return f"{format_number(value)}pt"

        return {
            "font_size": f"{snap_font_size(formatting['base_font_size'])}pt",
            "odd_side_margin": inches(margin_left - 1),
            "even_side_margin": inches(margin_left - 1),
            "text_width": inches(2 - margin_left - margin_right),
            "top_margin": inches(margin_top - 1),
            "text_height": inches(2 - margin_top - margin_bottom),
            "section_space_before": points(formatting["section_space_before"]),
            "section_space_after": points(formatting["section_space_after_1"]),
            "subheading_space_before": points(formatting["subheading_space_before"]),
            "subheading_space_after": points(formatting["subheading_space_after"]),
            "item_spacing": points(formatting["item_spacing"]),
            "block_space_after": points(formatting["block_space_after"]),
            "list_indent": inches(formatting["list_indent"]),
            "grid_width": format_number(formatting["grid_width"] / 100),
        }

    # Header

    def _link(self, href: str, text: str) -> str:
        return f"\\href{{{self.escape_url(href)}}}{{\\underline{{{self.escape(text)}}}}}"

    def render_header(self, header: ContactInfo) -> str:
        items = []

        if not is_blank(header.phone):
            items.append(f"\\small {self.escape(header.phone.strip())}")

        if not is_blank(header.email):
            email = header.email.strip()
            items.append(self._link(f"mailto:{email}", email))

        for url in (header.linkedin, header.github, header.website):
            if not is_blank(url):
                url = url.strip()
                items.append(self._link(format_url_for_href(url), clean_url_for_display(url)))

        lines = [
            LatexCommands.BEGIN_CENTER,
            f"    \\textbf{{\\Huge \\scshape {self.escape(header.name)}}} \\\\ \\vspace{{1pt}}",
        ]
        if items:
            lines.append(f"    {LatexCommands.SEPARATOR.join(items)}")
        lines.append(LatexCommands.END_CENTER)

        return "\n".join(lines)

    # Entries

    def _render_bullets(self, bullets: List[str]) -> str:
        """Item list block, or "" when every bullet is blank."""
        valid = filter_blank_entries(bullets)
        if not valid:
            return ""

        lines = [f"          {LatexCommands.ITEM_LIST_START}"]
        lines.extend(
            f"            {LatexCommands.ITEM}{{{format_bullet(bullet, self.escape)}}}"
            for bullet in valid
        )
        lines.append(f"          {LatexCommands.ITEM_LIST_END}")
        return "\n".join(lines)

    def _render_education_entry(self, entry: EducationEntry) -> str:
        lines = [
            f"    {LatexCommands.SUBHEADING}",
            f"      {{{self.escape(entry.school)}}}{{{self.escape(entry.location)}}}",
            f"      {{{self.escape(entry.degree)}}}{{{self.escape(entry.dates)}}}",
        ]
        extra = self._render_bullets([entry.extra or ""])
        if extra:
            lines.append(extra)
        return "\n".join(lines)

    def render_education(self, education: List[EducationEntry]) -> str:
        return "\n".join(self._render_education_entry(entry) for entry in education)

    def _render_experience_entry(self, entry: ExperienceEntry) -> str:
        lines = [
            f"    {LatexCommands.SUBHEADING}",
            f"      {{{self.escape(entry.organization)}}}{{{self.escape(entry.dates)}}}",
            f"      {{{self.escape(entry.role)}}}{{{self.escape(entry.location)}}}",
        ]
        bullets = self._render_bullets(entry.bullets)
        if bullets:
            lines.append(bullets)
        return "\n".join(lines)

    def render_experience(self, experience: List[ExperienceEntry]) -> str:
        if not experience:
            return ""

        lines = [
            LatexCommands.SECTION_EXPERIENCE,
            f"  {LatexCommands.SUBHEADING_LIST_START}",
            *(self._render_experience_entry(entry) for entry in experience),
            f"  {LatexCommands.SUBHEADING_LIST_END}",
        ]
        return "\n".join(lines)

    def _render_project_entry(self, entry: ProjectEntry) -> str:
        title = f"\\textbf{{{self.escape(entry.name)}}}"
        if not is_blank(entry.tech_stack):
            title += f"{LatexCommands.SEPARATOR}\\emph{{{self.escape(entry.tech_stack)}}}"

        lines = [
            f"    {LatexCommands.PROJECT_HEADING}",
            f"      {{{title}}}{{{self.escape(entry.dates)}}}",
        ]
        bullets = self._render_bullets(entry.bullets)
        if bullets:
            lines.append(bullets)
        return "\n".join(lines)

    def render_projects(self, projects: List[ProjectEntry]) -> str:
        if not projects:
            return ""

        lines = [
            LatexCommands.SECTION_PROJECTS,
            f"    {LatexCommands.SUBHEADING_LIST_START}",
            *(self._render_project_entry(entry) for entry in projects),
            f"    {LatexCommands.SUBHEADING_LIST_END}",
        ]
        return "\n".join(lines)

    # Skills

    def render_skills(self, skills: List[SkillCategory]) -> str:
        skill_lines = [
            f"\\textbf{{{self.escape(category.name)}}}{{: {format_skill_items(category.items, self.escape)}}} \\\\"
            for category in skills
            if filter_blank_entries(category.items)
        ]
        if not skill_lines:
            return ""

        lines = [
            LatexCommands.SECTION_SKILLS,
            f" {LatexCommands.SKILL_LIST_START}",
            "    \\small{\\item{",
            *(f"     {line}" for line in skill_lines),
            "    }}",
            f" {LatexCommands.SKILL_LIST_END}",
        ]
        return "\n".join(lines)
