"""
Templating context logger.

Records are bound to the ``template`` context.
"""

from pathlib import Path
from typing import List

from scribe.utils.logger import get_context_logger, setup_logger

_logger = get_context_logger("template")

_log_warning = _logger.warning
_log_debug = _logger.debug


def setup_templating_logger(log_dir: Path, dialect: str = "latex", console_level: str = "INFO") -> Path:
    """
    Configure logging for a markup generation run.

    Args:
        log_dir: Directory for this session's log file
        dialect: Markup dialect recorded in the provenance header
        console_level: Minimum console level; "ERROR" when markup goes to stdout

    Returns:
        Path to log file
    """
    return setup_logger(
        "template",
        log_dir,
        extra_provenance={"Dialect": dialect},
        console_level=console_level,
    )


def log_template_loaded(key: str, source_path: Path) -> None:
    _log_debug(f"Loaded template {key} from {source_path}")


def log_markup_generated(dialect: str, template_name: str, markup: str) -> None:
    _log_debug(
        f"Generated {dialect} markup from '{template_name}': "
        f"{len(markup)} chars, {markup.count(chr(10)) + 1} lines"
    )


def log_unsafe_fields(dialect: str, field_paths: List[str]) -> None:
    _log_warning(f"Rejected {len(field_paths)} field(s) with unsafe {dialect} input: {', '.join(field_paths)}")
