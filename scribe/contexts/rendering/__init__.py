"""
Rendering Context

Responsibilities:
- Runs the render pipeline (validate, render markup, compile)
- Compiles markup to PDF through a remote service or a local engine
- Caches compiled PDFs per template and resume data
- Discards stale results in live-preview sessions

Owns: Compiler backends, render cache, render sessions
Never: Modifies template content or resume data
"""

from scribe.contexts.rendering.compiler import (
    CompilationResult,
    Compiler,
    CompilerRegistry,
    LocalLatexCompiler,
    LocalTypstCompiler,
    RemoteLatexCompiler,
    get_compiler,
)
from scribe.contexts.rendering.pipeline import RenderResult, generate_markup, render_resume
from scribe.contexts.rendering.render_cache import RenderCache, cache_key
from scribe.contexts.rendering.session import RenderSession

__all__ = [
    # Pipeline
    "render_resume",
    "generate_markup",
    "RenderResult",
    # Compilers
    "Compiler",
    "CompilerRegistry",
    "CompilationResult",
    "RemoteLatexCompiler",
    "LocalLatexCompiler",
    "LocalTypstCompiler",
    "get_compiler",
    # Caching and sessions
    "RenderCache",
    "cache_key",
    "RenderSession",
]
