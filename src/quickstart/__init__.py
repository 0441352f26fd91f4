"""
Blob Storage quickstart routine.
"""

from src.quickstart.runner import (
    CLEANUP_PROMPT,
    MISSING_CONNECTION_STRING_MESSAGE,
    QuickstartOptions,
    QuickstartRunner,
)

__all__ = [
    "CLEANUP_PROMPT",
    "MISSING_CONNECTION_STRING_MESSAGE",
    "QuickstartOptions",
    "QuickstartRunner",
]
