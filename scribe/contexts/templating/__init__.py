"""
Templating Context

Responsibilities:
- Escapes user text for LaTeX and Typst markup
- Formats fields (URLs, bullets, skill lists) for display
- Renders each resume section to a markup fragment
- Loads document skeletons and assembles fragments into complete markup

Owns: Escaping rules, markup fragments, document templates
Never: Validates user data or runs a compiler
"""

from scribe.contexts.templating.dialects import available_dialects, get_renderer
from scribe.contexts.templating.exceptions import TemplateRenderError, UnknownDialectError
from scribe.contexts.templating.latex_renderer import LatexRenderer
from scribe.contexts.templating.renderer_base import MarkupRenderer, RendererRegistry, assemble
from scribe.contexts.templating.template_registry import TemplateRegistry
from scribe.contexts.templating.typst_renderer import TypstRenderer

__all__ = [
    # Renderer selection
    "get_renderer",
    "available_dialects",
    "RendererRegistry",
    # Renderers
    "MarkupRenderer",
    "LatexRenderer",
    "TypstRenderer",
    "assemble",
    # Templates
    "TemplateRegistry",
    # Errors
    "TemplateRenderError",
    "UnknownDialectError",
]
