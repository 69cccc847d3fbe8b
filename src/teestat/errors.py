"""Custom exceptions for teestat with structured error information."""


class TeeStatError(Exception):
    """Base exception for all teestat errors.

    Provides structured error information with actionable messages.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class DemoFileNotFoundError(TeeStatError):
    """Raised when a demo or snapshot dump cannot be found."""

    def __init__(self, path: str):
        message = f"Demo file not found: {path}"
        details = {
            "path": path,
            "suggested_action": "Verify the file path exists and is accessible",
        }
        super().__init__(message, details)


class InvalidDemoFormatError(TeeStatError):
    """Raised when a path cannot be read as a snapshot source at all."""

    def __init__(self, path: str, reason: str = None):
        base_message = f"Invalid demo format: {path}"
        if reason:
            message = f"{base_message} ({reason})"
        else:
            message = base_message

        details = {
            "path": path,
            "reason": reason,
            "suggested_action": (
                "Ensure the file is a decoded snapshot dump supported by the "
                "selected adapter"
            ),
        }
        super().__init__(message, details)


class DemoIOError(TeeStatError):
    """Raised when there's an I/O error reading a demo file."""

    def __init__(self, path: str, original_error: Exception):
        message = f"I/O error reading demo: {path} ({str(original_error)})"
        details = {
            "path": path,
            "original_error": str(original_error),
            "error_type": type(original_error).__name__,
            "suggested_action": "Check file permissions and disk space",
        }
        super().__init__(message, details)
