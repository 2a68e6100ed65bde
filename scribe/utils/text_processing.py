"""
Small text helpers for CLI output, layout values and file names.
"""

import re


def truncate_display(text: str, max_len: int) -> str:
    """Cut text to max_len characters, ending in "..." when shortened."""
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def format_number(value: float) -> str:
    """
    Format a layout number without trailing zeros.

    Example:
        >>> format_number(-0.5)
        '-0.5'
        >>> format_number(1.0)
        '1'
    """
    formatted = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if formatted in ("", "-0") else formatted


def to_filename_stem(name: str, suffix: str = "Resume") -> str:
    """
    Build a download-friendly file stem from a person's name.

    Whitespace runs become underscores, mirroring the editor's download naming.

    Example:
        >>> to_filename_stem("Jake Ryan")
        'Jake_Ryan_Resume'
    """
    stem = re.sub(r"\s+", "_", name.strip())
    stem = re.sub(r"[^\w\-]", "", stem)
    return f"{stem}_{suffix}" if stem else suffix
