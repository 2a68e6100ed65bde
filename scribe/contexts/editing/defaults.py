"""
Default values and limits for SCRIBE resume documents.

Provides shared defaults used by:
- resume_document.py (field ceilings and formatting bounds)
- validation.py (document size ceiling)
- templating renderers (resolved formatting values for template preambles)
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Limits:
    """
    Size and count ceilings for resume data.

    Keep generated markup (and the compile request carrying it) bounded.
    """
    MAX_NAME_LENGTH: int = 100
    MAX_FIELD_LENGTH: int = 200
    MAX_BULLET_LENGTH: int = 500
    MAX_BULLETS_PER_SECTION: int = 10
    MAX_EDUCATION_ENTRIES: int = 5
    MAX_EXPERIENCE_ENTRIES: int = 10
    MAX_PROJECT_ENTRIES: int = 10
    MAX_SKILL_CATEGORIES: int = 10
    MAX_SKILLS_PER_CATEGORY: int = 20
    MAX_TOTAL_SIZE_BYTES: int = 50000


@dataclass(frozen=True)
class FormattingSpec:
    """Default, bounds, and unit for one numeric layout setting."""
    label: str
    default: float
    minimum: float
    maximum: float
    unit: str


# Layout settings exposed to the editor, keyed by model field name
FORMATTING_SPECS: Dict[str, FormattingSpec] = {
    # Page margins
    "margin_left": FormattingSpec("Left Margin", 0.5, 0.1, 1.5, "in"),
    "margin_right": FormattingSpec("Right Margin", 0.5, 0.1, 1.5, "in"),
    "margin_top": FormattingSpec("Top Margin", 0.5, 0.1, 1.5, "in"),
    "margin_bottom": FormattingSpec("Bottom Margin", 0.5, 0.1, 1.5, "in"),
    # Typography
    "base_font_size": FormattingSpec("Base Font Size", 11, 8, 14, "pt"),
    "par_leading": FormattingSpec("Paragraph Leading", 0.65, 0.3, 1.2, "em"),
    # Header (name & contact)
    "name_font_size": FormattingSpec("Name Font Size", 26, 16, 36, "pt"),
    "name_spacing": FormattingSpec("Name Spacing", 1, 0, 10, "pt"),
    "contact_font_size": FormattingSpec("Contact Font Size", 10, 8, 14, "pt"),
    "contact_spacing": FormattingSpec("Contact Spacing", 0.3, 0, 1, "em"),
    # Section headers
    "section_font_size": FormattingSpec("Section Font Size", 12, 10, 16, "pt"),
    "section_space_before": FormattingSpec("Section Space Before", -4, -10, 5, "pt"),
    "section_space_after_1": FormattingSpec("Section Space After (1)", -5, -10, 5, "pt"),
    "section_space_after_2": FormattingSpec("Section Space After (2)", -5, -10, 5, "pt"),
    # Subheadings (experience/education/projects)
    "subheading_space_before": FormattingSpec("Subheading Space Before", -2, -10, 5, "pt"),
    "subheading_space_after": FormattingSpec("Subheading Space After", -7, -10, 5, "pt"),
    # Items & bullets
    "item_font_size": FormattingSpec("Item Font Size", 10, 8, 14, "pt"),
    "item_spacing": FormattingSpec("Item Spacing", -2, -10, 5, "pt"),
    "block_space_after": FormattingSpec("Block Space After", -5, -10, 5, "pt"),
    # Layout
    "list_indent": FormattingSpec("List Indent", 0.15, 0, 0.5, "in"),
    "grid_width": FormattingSpec("Grid Width", 97, 85, 100, "%"),
}


def get_default_formatting() -> Dict[str, float]:
    """
    Get every formatting value at its default.

    Returns:
        Dict mapping formatting field name to its default value
    """
    return {name: spec.default for name, spec in FORMATTING_SPECS.items()}


def generate_id() -> str:
    """Create a fresh entry identifier (random, never reused within a session)."""
    return uuid.uuid4().hex[:12]


def get_default_resume_data() -> Dict[str, Any]:
    """
    Get the sample resume (Jake's example from the sb2nov template) as raw data.

    Every call assigns fresh identifiers.

    Returns:
        JSON-shaped resume dict with camelCase keys
    """
    return {
        "header": {
            "name": "Jake Ryan",
            "phone": "123-456-7890",
            "email": "jake@su.edu",
            "linkedin": "linkedin.com/in/jake",
            "github": "github.com/jake",
        },
        "education": [
            {
                "id": generate_id(),
                "school": "Southwestern University",
                "location": "Georgetown, TX",
                "degree": "Bachelor of Arts in Computer Science, Minor in Business",
                "dates": "Aug. 2018 -- May 2021",
            },
            {
                "id": generate_id(),
                "school": "Blinn College",
                "location": "Bryan, TX",
                "degree": "Associate's in Liberal Arts",
                "dates": "Aug. 2014 -- May 2018",
            },
        ],
        "experience": [
            {
                "id": generate_id(),
                "organization": "Undergraduate Research Assistant",
                "location": "Georgetown, TX",
                "role": "Texas A&M University",
                "dates": "June 2020 -- Present",
                "bullets": [
                    "Developed a REST API using FastAPI and PostgreSQL to store data from learning management systems",
                    "Developed a full-stack web application using Flask, React, PostgreSQL and Docker to analyze GitHub data",
                    "Explored ways to visualize GitHub collaboration in a classroom setting",
                ],
            },
            {
                "id": generate_id(),
                "organization": "Information Technology Support Specialist",
                "location": "Georgetown, TX",
                "role": "Southwestern University",
                "dates": "Sep. 2018 -- Present",
                "bullets": [
                    "Communicate with managers to set up campus computers used on campus",
                    "Assess and troubleshoot computer problems brought by students, faculty and staff",
                    "Maintain upkeep of computers, classroom equipment, and 200 printers across campus",
                ],
            },
            {
                "id": generate_id(),
                "organization": "Artificial Intelligence Research Assistant",
                "location": "Georgetown, TX",
                "role": "Southwestern University",
                "dates": "May 2019 -- July 2019",
                "bullets": [
                    "Explored methods to generate video game dungeons based off of The Legend of Zelda",
                    "Developed a game in Java to test the generated dungeons",
                    "Contributed 50K+ lines of code to an established codebase via Git",
                    "Conducted a human subject study to determine which video game dungeon generation technique is enjoyable",
                    "Wrote an 8-page paper and gave multiple presentations on-campus",
                    "Presented virtually to the World Conference on Computational Intelligence",
                ],
            },
        ],
        "projects": [
            {
                "id": generate_id(),
                "name": "Gitlytics",
                "techStack": "Python, Flask, React, PostgreSQL, Docker",
                "dates": "June 2020 -- Present",
                "bullets": [
                    "Developed a full-stack web application using with Flask serving a REST API with React as the frontend",
                    "Implemented GitHub OAuth to get data from user's repositories",
                    "Visualized GitHub data to show collaboration",
                    "Used Celery and Redis for asynchronous tasks",
                ],
            },
            {
                "id": generate_id(),
                "name": "Simple Paintball",
                "techStack": "Spigot API, Java, Maven, TravisCI, Git",
                "dates": "May 2018 -- May 2020",
                "bullets": [
                    "Developed a Minecraft server plugin to entertain kids during free time for a previous job",
                    "Published plugin to websites gaining 2K+ downloads and an average 4.5/5-star review",
                    "Implemented continuous delivery using TravisCI to build the plugin upon new a release",
                    "Collaborated with Minecraft server administrators to suggest features and get feedback about the plugin",
                ],
            },
        ],
        "skills": [
            {
                "id": generate_id(),
                "name": "Languages",
                "items": ["Java", "Python", "C/C++", "SQL (Postgres)", "JavaScript", "HTML/CSS", "R"],
            },
            {
                "id": generate_id(),
                "name": "Frameworks",
                "items": ["React", "Node.js", "Flask", "JUnit", "WordPress", "Material-UI", "FastAPI"],
            },
            {
                "id": generate_id(),
                "name": "Developer Tools",
                "items": [
                    "Git",
                    "Docker",
                    "TravisCI",
                    "Google Cloud Platform",
                    "VS Code",
                    "Visual Studio",
                    "PyCharm",
                    "IntelliJ",
                    "Eclipse",
                ],
            },
            {
                "id": generate_id(),
                "name": "Libraries",
                "items": ["pandas", "NumPy", "Matplotlib"],
            },
        ],
    }
