"""Templating errors. These signal broken templates or renderer bugs, never bad user data."""

from pathlib import Path
from typing import List, Optional


class TemplateRenderError(Exception):
    """
    A skeleton failed to render or assemble.

    Attributes:
        message: Error description
        template_name: Template directory name, when a template was involved
        template_path: Template file that failed
        original_error: Underlying Jinja2 error, if any
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        detail = message
        if template_path:
            detail += f" [{template_name or template_path.parent.name}: {template_path}]"
        if original_error:
            detail += f" ({type(original_error).__name__}: {original_error})"
        super().__init__(detail)


class UnknownDialectError(KeyError):
    """No renderer is registered under the requested dialect name."""

    def __init__(self, dialect: str, available: Optional[List[str]] = None):
        self.dialect = dialect
        self.available = sorted(available or [])
        super().__init__(f"Renderer '{dialect}' not found. Available: {', '.join(self.available)}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]
