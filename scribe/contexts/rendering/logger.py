"""
Rendering context logger.

Records are bound to the ``render`` context. Compiler output can be long and
multi-line, so it is written raw (no per-line timestamp) and only to the log
file's DEBUG level.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from scribe.utils.logger import get_context_logger, setup_logger

load_dotenv()

_logger = get_context_logger("render")

_log_info = _logger.info
_log_success = _logger.success
_log_warning = _logger.warning
_log_error = _logger.error
_log_debug = _logger.debug

# How many errors/warnings to list per result before summarizing
ERROR_LIMIT = 5
WARNING_LIMIT = 3


def setup_rendering_logger(log_dir: Path, compiler_name: str = "") -> Path:
    """
    Configure logging for a compile run.

    Returns:
        Path to log file (LOGS_PATH/render_<timestamp>/render.log from the CLI)
    """
    return setup_logger(
        "render",
        log_dir,
        extra_provenance={
            "Compiler": compiler_name or os.getenv("SCRIBE_COMPILER") or "dialect default",
            "LaTeX service": os.getenv("LATEX_SERVICE_URL", "default"),
        },
    )


def _log_limited(log, label: str, items, limit: int) -> None:
    for i, item in enumerate(items[:limit], 1):
        log(f"  {label} {i}: {item}")
    if len(items) > limit:
        log(f"  ... and {len(items) - limit} more {label.lower()}s")


def log_compilation_start(compiler_name: str, markup_length: int, num_passes: int = 1) -> None:
    passes = "" if num_passes == 1 else f", {num_passes} passes"
    _log_info(f"Compiling with {compiler_name} ({markup_length} chars{passes})")


def log_compilation_result(compiler_name: str, result, verbose: bool = False) -> None:
    """
    Log a CompilationResult: summary line, errors, warnings, then raw diagnostic.

    Args:
        compiler_name: Compiler backend name
        result: CompilationResult from Compiler.compile()
        verbose: List twice as many errors and warnings and always dump the diagnostic
    """
    scale = 2 if verbose else 1
    if result.success:
        pages = "" if result.page_count is None else f", {result.page_count} page(s)"
        _log_success(
            f"{compiler_name}: {len(result.pdf_bytes or b'')} bytes{pages} in {result.elapsed_s:.2f}s"
        )
    else:
        _log_error(f"{compiler_name}: compilation failed after {result.elapsed_s:.2f}s")
        _log_limited(_log_error, "Error", result.errors, ERROR_LIMIT * scale)

    _log_limited(_log_debug, "Warning", result.warnings, WARNING_LIMIT * scale)

    if result.diagnostic and (verbose or not result.success):
        _logger.opt(raw=True).debug(f"--- {compiler_name} output ---\n{result.diagnostic}\n--- end ---\n")


def log_render_start(dialect: str, compiler_name: str) -> None:
    _log_debug(f"Render requested: dialect={dialect}, compiler={compiler_name or 'none'}")


def log_cache_hit(key: str) -> None:
    _log_debug(f"Render cache hit: {key[:12]}")


def log_stale_result(token: int, latest: int) -> None:
    """A result for an older generation token is dropped, never applied."""
    _log_debug(f"Discarding stale render result (generation {token}, latest {latest})")
