"""
Renderer selection by markup dialect.

Importing this module registers every bundled renderer with RendererRegistry.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from scribe.contexts.templating.latex_renderer import LatexRenderer
from scribe.contexts.templating.renderer_base import MarkupRenderer, RendererRegistry
from scribe.contexts.templating.template_registry import DEFAULT_TEMPLATE, TemplateRegistry
from scribe.contexts.templating.typst_renderer import TypstRenderer

load_dotenv()
DEFAULT_DIALECT = os.getenv("SCRIBE_DIALECT", LatexRenderer.name)


def get_renderer(
    dialect: Optional[str] = None,
    template_name: str = DEFAULT_TEMPLATE,
    templates_path: Optional[Path] = None,
) -> MarkupRenderer:
    """
    Create the renderer for a markup dialect.

    Args:
        dialect: "latex" or "typst" (defaults to SCRIBE_DIALECT, else "latex")
        template_name: Template directory name
        templates_path: Optional override for the templates directory

    Returns:
        Renderer instance

    Raises:
        UnknownDialectError: If no renderer is registered for the dialect
    """
    renderer_cls = RendererRegistry.get(dialect or DEFAULT_DIALECT)
    registry = TemplateRegistry(templates_path) if templates_path else None
    return renderer_cls(template_name=template_name, registry=registry)


def available_dialects() -> list:
    return RendererRegistry.list_names()


__all__ = ["LatexRenderer", "TypstRenderer", "available_dialects", "get_renderer"]
