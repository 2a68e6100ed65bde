"""
Template Registry

Loads and caches the Jinja2 document skeletons used for markup generation.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError, TemplateNotFound

from scribe.contexts.templating.exceptions import TemplateRenderError
from scribe.contexts.templating.logger import log_template_loaded

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", Path(__file__).parent / "templates"))
DEFAULT_TEMPLATE = "jake"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 document skeletons.

    Templates are stored in {templates_path}/{template_name}/template.{tex|typ}.jinja
    and use custom delimiters to avoid conflicts with LaTeX and Typst syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Jinja only fills in preamble values (margins, spacing, font sizes). The
    section placeholders ({{HEADER_SECTION}}, ...) are plain text to Jinja and
    pass through untouched for the assembler.
    """

    def __init__(self, templates_path: Optional[Path] = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for template directories. Defaults to
                           TEMPLATES_PATH from environment (the bundled templates)
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Preserve whitespace (markup is whitespace-sensitive)
            trim_blocks=False,
            lstrip_blocks=False,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def _relative_path(self, template_name: str, extension: str) -> str:
        return f"{template_name}/template.{extension}.jinja"

    def get_template(self, template_name: str, extension: str) -> Template:
        """
        Get a template, loading and caching it if necessary.

        Args:
            template_name: Template directory name (e.g., 'jake')
            extension: Dialect extension without dot ('tex' or 'typ')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        key = self._relative_path(template_name, extension)
        if key in self._cache:
            return self._cache[key]

        try:
            template = self.env.get_template(key)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{template_name}' at {self.templates_path / key}"
            ) from e

        self._cache[key] = template
        log_template_loaded(key, self.templates_path / key)
        return template

    def get_template_path(self, template_name: str, extension: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / self._relative_path(template_name, extension)

    def get_template_source(self, template_name: str, extension: str) -> str:
        """
        Get the raw template source.

        Used as part of the render cache key, so editing a template invalidates
        cached PDFs.
        """
        template_path = self.get_template_path(template_name, extension)
        if not template_path.exists():
            raise TemplateNotFound(f"Template not found: {template_path}")
        return template_path.read_text(encoding="utf-8")

    def render_skeleton(self, template_name: str, extension: str, context: Dict[str, Any]) -> str:
        """
        Render a template's preamble values, leaving the section placeholders in place.

        Args:
            template_name: Template directory name
            extension: Dialect extension without dot
            context: Preamble values

        Returns:
            Skeleton text containing the five section placeholders

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            template = self.get_template(template_name, extension)
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render template '{template_name}'",
                template_name=template_name,
                template_path=self.get_template_path(template_name, extension),
                original_error=e,
            ) from e

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str, extension: str) -> bool:
        return self._relative_path(template_name, extension) in self._cache
