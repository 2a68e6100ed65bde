"""
Shared utilities for SCRIBE.

Common functionality used across contexts:
- Logger setup with provenance
- PDF inspection
- Text helpers
- Timestamps
"""

from scribe.utils.timestamp import now

__all__ = ["now"]
