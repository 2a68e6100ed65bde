"""
Render pipeline: resume data in, markup and PDF bytes out.

validate -> safety check -> render markup -> cache lookup -> compile -> cache store.

render_resume() reports every outcome as a RenderResult and never raises;
generate_markup() is the strict variant for callers that only need markup.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from scribe.contexts.editing.resume_document import ResumeDocument
from scribe.contexts.editing.validation import ValidationIssue, parse_resume, validate_resume
from scribe.contexts.rendering.compiler import Compiler
from scribe.contexts.rendering.logger import (
    _log_error,
    _log_warning,
    log_cache_hit,
    log_render_start,
)
from scribe.contexts.rendering.render_cache import RenderCache, cache_key
from scribe.contexts.templating.dialects import get_renderer
from scribe.contexts.templating.exceptions import TemplateRenderError
from scribe.contexts.templating.logger import log_unsafe_fields
from scribe.contexts.templating.renderer_base import MarkupRenderer

UNSAFE_INPUT_MESSAGE = "Contains disallowed markup commands"

ResumeInput = Union[Dict[str, Any], ResumeDocument]


@dataclass
class RenderResult:
    """
    Outcome of a render request.

    Attributes:
        success: True when markup (and PDF, if a compiler was given) was produced
        markup: Generated markup (None if validation failed)
        pdf_bytes: Compiled PDF (None without a compiler or on failure)
        errors: Validation issues with field paths
        message: Human-readable summary, or the compiler diagnostic on failure
        cached: True when the PDF came from the render cache
        page_count: Pages in the PDF, when known
    """

    success: bool
    markup: Optional[str] = None
    pdf_bytes: Optional[bytes] = None
    errors: List[ValidationIssue] = field(default_factory=list)
    message: str = ""
    cached: bool = False
    page_count: Optional[int] = None


def render_resume(
    data: ResumeInput,
    renderer: Optional[MarkupRenderer] = None,
    compiler: Optional[Compiler] = None,
    cache: Optional[RenderCache] = None,
    reject_unsafe: bool = True,
) -> RenderResult:
    """
    Validate, render, and optionally compile a resume.

    Args:
        data: JSON-shaped resume data or a ResumeDocument
        renderer: Markup renderer (defaults to the configured dialect)
        compiler: Compiler backend; markup only when None
        cache: Render cache consulted before compiling
        reject_unsafe: Reject text matching the dialect's injection patterns

    Returns:
        RenderResult; a failed result never carries a PDF
    """
    renderer = renderer or get_renderer()
    log_render_start(renderer.name, compiler.name if compiler else "")

    validation = validate_resume(data)
    if not validation.is_valid:
        return RenderResult(
            success=False,
            errors=validation.errors,
            message=f"Validation failed with {len(validation.errors)} error(s)",
        )
    document = validation.document

    if reject_unsafe:
        unsafe = renderer.find_unsafe_fields(document)
        if unsafe:
            log_unsafe_fields(renderer.name, unsafe)
            return RenderResult(
                success=False,
                errors=[ValidationIssue(path, UNSAFE_INPUT_MESSAGE) for path in unsafe],
                message=f"Unsafe input in {len(unsafe)} field(s)",
            )

    try:
        markup = renderer.render(document)
    except TemplateRenderError as e:
        _log_error(f"Template rendering failed: {e.message}")
        return RenderResult(success=False, message=str(e))

    if compiler is None:
        return RenderResult(success=True, markup=markup, message="Markup generated")

    if compiler.dialect != renderer.name:
        message = f"Compiler '{compiler.name}' expects {compiler.dialect} markup, got {renderer.name}"
        _log_warning(message)
        return RenderResult(success=False, markup=markup, message=message)

    key = None
    if cache is not None:
        key = cache_key(renderer.template_source(), document.to_json())
        hit = cache.get(key)
        if hit is not None:
            log_cache_hit(key)
            return RenderResult(
                success=True,
                markup=markup,
                pdf_bytes=hit.pdf_bytes,
                message="PDF served from cache",
                cached=True,
                page_count=hit.page_count,
            )

    compiled = compiler.compile(markup, renderer.compile_data(document))
    if not compiled.success:
        return RenderResult(
            success=False,
            markup=markup,
            message=compiled.diagnostic or "; ".join(compiled.errors) or "Compilation failed",
        )

    if cache is not None:
        cache.put(key, compiled)

    return RenderResult(
        success=True,
        markup=markup,
        pdf_bytes=compiled.pdf_bytes,
        message="PDF compiled",
        page_count=compiled.page_count,
    )


def generate_markup(data: ResumeInput, dialect: Optional[str] = None) -> str:
    """
    Render resume data to markup, raising on invalid data.

    Args:
        data: JSON-shaped resume data or a ResumeDocument
        dialect: "latex" or "typst" (defaults to SCRIBE_DIALECT)

    Returns:
        Complete markup document

    Raises:
        ResumeValidationError: If the data fails validation
        UnknownDialectError: If the dialect has no renderer
    """
    document = parse_resume(data)
    return get_renderer(dialect).render(document)
