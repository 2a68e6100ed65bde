"""Custom exceptions for the editing context."""

from typing import List, Optional


class ResumeValidationError(ValueError):
    """
    Exception raised when resume data fails validation.

    Attributes:
        message: Error description
        errors: Collected ValidationIssue objects (field path + message)
    """

    def __init__(self, message: str, errors: Optional[List] = None):
        self.message = message
        self.errors = list(errors or [])

        parts = [message]
        for issue in self.errors[:10]:
            parts.append(f"  {issue.field}: {issue.message}")
        if len(self.errors) > 10:
            parts.append(f"  ... and {len(self.errors) - 10} more")

        super().__init__("\n".join(parts))


class InvalidResumeFormatError(ValueError):
    """
    Exception raised when an imported file is not a resume document.

    Raised before validation when the top-level structure is wrong
    (not a mapping, or missing the 'header' / 'education' keys).
    """

    pass


class PresetNotFoundError(KeyError):
    """Exception raised when a formatting preset name is not defined."""

    def __init__(self, preset_name: str, available: Optional[List[str]] = None):
        self.preset_name = preset_name
        self.available = sorted(available or [])
        message = f"Formatting preset '{preset_name}' not found"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
