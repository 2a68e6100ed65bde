"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time as a filesystem-safe session stamp.

    Returns:
        Timestamp like "20251114_123456", used for log directory names

    Examples:
        now()
        # "20251114_123456"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
