"""
Editing context logger.

Records are bound to the ``edit`` context. Editing modules import the helpers
below rather than configuring loguru themselves.
"""

from pathlib import Path
from typing import List

from scribe.utils.logger import get_context_logger, setup_logger

_logger = get_context_logger("edit")

_log_info = _logger.info
_log_success = _logger.success
_log_warning = _logger.warning
_log_debug = _logger.debug


def setup_editing_logger(log_dir: Path, operation: str = "edit") -> Path:
    """
    Configure logging for an editing command.

    Args:
        log_dir: Directory for this session's log file
        operation: Operation name for provenance ("init", "validate", ...)

    Returns:
        Path to log file
    """
    return setup_logger("edit", log_dir, extra_provenance={"Operation": operation})


def log_validation_result(source: str, error_count: int) -> None:
    if error_count == 0:
        _log_success(f"Validated {source}")
    else:
        _log_warning(f"Validation failed for {source}: {error_count} error(s)")


def log_document_saved(output_path: Path) -> None:
    _log_success(f"Saved resume to {output_path}")


def log_presets_applied(preset_names: List[str]) -> None:
    """Presets are listed in the order they were applied."""
    _log_info(f"Applied formatting presets: {' -> '.join(preset_names)}")
