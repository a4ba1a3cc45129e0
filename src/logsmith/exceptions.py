"""
Exceptions raised by logsmith.

Failures from the underlying logging facade are never wrapped; they propagate
as raised.
"""

from typing import Optional


class LogsmithError(Exception):
    """Base exception for all logsmith errors."""


class CallerOffsetError(LogsmithError, ValueError):
    """Raised when caller resolution is asked to look a negative number of frames back."""

    def __init__(self, offset: int, message: Optional[str] = None):
        self.offset = offset
        super().__init__(message or f"caller resolution requires an offset >= 0, got {offset}")


class ConfigurationError(LogsmithError):
    """Raised when logging configuration cannot be loaded or validated."""

    def __init__(self, message: str, help_text: Optional[str] = None):
        self.message = message
        self.help_text = help_text
        super().__init__(message)

    def __str__(self) -> str:
        if self.help_text:
            return f"{self.message}\n\nHelp: {self.help_text}"
        return self.message
