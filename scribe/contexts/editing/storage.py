"""
Resume import/export.

Reads and writes resume documents as JSON or YAML (by file suffix). Imported
files must look like a resume (a mapping with 'header' and 'education') before
they reach validation.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from omegaconf import OmegaConf

from scribe.contexts.editing.exceptions import InvalidResumeFormatError
from scribe.contexts.editing.logger import _log_debug, log_document_saved
from scribe.contexts.editing.resume_document import ResumeDocument
from scribe.contexts.editing.validation import parse_resume

YAML_SUFFIXES = {".yaml", ".yml"}
REQUIRED_KEYS = ("header", "education")


def read_resume_data(path: Path) -> Dict[str, Any]:
    """
    Read raw resume data from a JSON or YAML file.

    Args:
        path: Resume file (.json, .yaml or .yml)

    Returns:
        JSON-shaped resume dict (not yet validated)

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidResumeFormatError: If the file is not a resume document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    if path.suffix.lower() in YAML_SUFFIXES:
        # Resume text may contain "${"; never resolve interpolations
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    else:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidResumeFormatError(f"{path.name} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidResumeFormatError(f"{path.name} does not contain a resume object")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise InvalidResumeFormatError(
            f"Invalid resume format: {path.name} is missing {', '.join(missing)}"
        )

    _log_debug(f"Read resume data from {path}")
    return data


def load_resume(path: Path) -> ResumeDocument:
    """
    Load and validate a resume document.

    Raises:
        InvalidResumeFormatError: If the file is not a resume document
        ResumeValidationError: If the data fails validation
    """
    return parse_resume(read_resume_data(path))


def save_resume(document: Union[ResumeDocument, Dict[str, Any]], path: Path) -> Path:
    """
    Write a resume document as JSON or YAML (chosen by suffix).

    Args:
        document: Document or JSON-shaped data to write
        path: Output path; parent directories are created

    Returns:
        Path written
    """
    path = Path(path)
    data = document.to_data() if isinstance(document, ResumeDocument) else document
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() in YAML_SUFFIXES:
        OmegaConf.save(OmegaConf.create(data), path)
    else:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    log_document_saved(path)
    return path
