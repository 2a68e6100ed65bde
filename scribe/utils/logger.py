"""
Loguru configuration shared by all contexts.

Each context binds its own name (``edit``, ``template``, ``render``) and the
sink formats print it as a ``[context]`` prefix. Contexts expose thin wrappers
in contexts/{context}/logger.py; modules import from there.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

_PREFIX = "[{extra[context]}]"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | " + _PREFIX + " {message}"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | "
    "<cyan>" + _PREFIX + "</cyan> <level>{message}</level>"
)


def get_context_logger(context: str):
    """Logger bound to a context name; its records carry the [context] prefix."""
    return logger.bind(context=context)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Send logs to ``log_dir/<context_name>.log`` (DEBUG) and stderr.

    Replaces any previously configured sinks, so the most recent call wins.
    Console output goes to stderr so command output on stdout stays clean.

    Args:
        context_name: Context identifier, also the default prefix for unbound records
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Compiler": "remote-latex"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.configure(extra={"context": context_name})

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def provenance_lines(extra_context: Optional[Dict[str, str]] = None) -> List[str]:
    """Script, command line, working directory and interpreter, plus extra pairs."""
    lines = [
        f"Script: {sys.argv[0]}",
        f"Command: {' '.join(sys.argv)}",
        f"Working directory: {Path.cwd()}",
        f"Python: {sys.version.split()[0]}",
    ]
    lines.extend(f"{key}: {value}" for key, value in (extra_context or {}).items())
    return lines


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    rule = "=" * 80
    logger.info(rule)
    for line in provenance_lines(extra_context):
        logger.info(line)
    logger.info(rule)
