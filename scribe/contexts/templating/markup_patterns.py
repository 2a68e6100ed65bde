"""
Markup Pattern Constants

Centralized markup strings used for resume generation in both dialects.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Placeholders:
    """
    Insertion points in a template skeleton.

    Each appears exactly once in every skeleton and is replaced by one section fragment.
    """
    HEADER: str = "{{HEADER_SECTION}}"
    EDUCATION: str = "{{EDUCATION_SECTION}}"
    EXPERIENCE: str = "{{EXPERIENCE_SECTION}}"
    PROJECTS: str = "{{PROJECTS_SECTION}}"
    SKILLS: str = "{{SKILLS_SECTION}}"

    # Matches any placeholder token, capturing the section key
    TOKEN_REGEX: str = r"\{\{([A-Z]+)_SECTION\}\}"


# Placeholder tokens in section order, keyed by fragment name
SECTION_PLACEHOLDERS: Dict[str, str] = {
    "header": Placeholders.HEADER,
    "education": Placeholders.EDUCATION,
    "experience": Placeholders.EXPERIENCE,
    "projects": Placeholders.PROJECTS,
    "skills": Placeholders.SKILLS,
}


@dataclass(frozen=True)
class LatexCommands:
    """
    Commands defined by the LaTeX template preamble.

    Used for generating section fragments.
    """
    SECTION_EXPERIENCE: str = r"\section{Experience}"
    SECTION_PROJECTS: str = r"\section{Projects}"
    SECTION_SKILLS: str = r"\section{Technical Skills}"

    SUBHEADING: str = r"\resumeSubheading"
    PROJECT_HEADING: str = r"\resumeProjectHeading"
    ITEM: str = r"\resumeItem"
    SUBHEADING_LIST_START: str = r"\resumeSubHeadingListStart"
    SUBHEADING_LIST_END: str = r"\resumeSubHeadingListEnd"
    ITEM_LIST_START: str = r"\resumeItemListStart"
    ITEM_LIST_END: str = r"\resumeItemListEnd"

    BEGIN_CENTER: str = r"\begin{center}"
    END_CENTER: str = r"\end{center}"
    SKILL_LIST_START: str = r"\resumeSkillListStart"
    SKILL_LIST_END: str = r"\resumeSkillListEnd"

    SEPARATOR: str = " $|$ "


@dataclass(frozen=True)
class TypstCommands:
    """
    Functions defined by the Typst template preamble.

    Used for generating section fragments.
    """
    SECTION_HEADING: str = "#section-heading"
    SUBHEADING: str = "#resume-subheading"
    PROJECT_HEADING: str = "#resume-project-heading"
    ITEMS: str = "#resume-items"
    NAME: str = "#resume-name"
    CONTACTS: str = "#resume-contacts"
    SKILL_LINE: str = "#resume-skill-line"

    SEPARATOR: str = " | "

    # Slot replaced by the serialized document dictionary
    DATA_SLOT: str = '"__RESUME_DATA__"'


# Single-character substitutions for LaTeX text (applied in one pass)
LATEX_ESCAPES: Dict[str, str] = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "&": r"\&",
    "#": r"\#",
    "%": r"\%",
    "_": r"\_",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

# Characters that would break a LaTeX \href argument
LATEX_URL_ESCAPES: Dict[str, str] = {
    "%": r"\%",
    "#": r"\#",
    "~": r"\~{}",
}

# Characters with markup meaning in Typst text; each is backslash-prefixed
TYPST_SPECIAL_CHARACTERS: str = "\\#$*_`<>@[]~/"

# Characters that would end a Typst string literal early
TYPST_URL_SPECIAL_CHARACTERS: str = '\\"'

# Input that can read files, write files, or redefine commands when compiled
LATEX_UNSAFE_PATTERNS: Tuple[str, ...] = (
    "\\input{",
    "\\include{",
    "\\write",
    "\\immediate",
    "\\openout",
    "\\closeout",
    "\\newwrite",
    "\\special{",
    "\\catcode",
    "\\def",
    "\\newcommand",
    "\\renewcommand",
    "\\openin",
    "\\read",
)

TYPST_UNSAFE_PATTERNS: Tuple[str, ...] = (
    "#import",
    "#include",
    "#eval",
    "read(",
    "plugin(",
)
