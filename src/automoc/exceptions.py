"""Custom exceptions for automoc."""


class AutoMOCError(Exception):
    """Base exception for automoc."""


class ConfigError(AutoMOCError):
    """Raised when configuration is missing or invalid."""


class NoteError(AutoMOCError):
    """Raised when the active note is missing or is not a markdown note."""


class ReadError(AutoMOCError):
    """Raised when a note's content cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Cannot read note {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
