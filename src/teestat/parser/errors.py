"""Custom exceptions for parser layer."""

from ..errors import TeeStatError


class ParserError(TeeStatError):
    """Base exception for all parser-related errors."""

    def __init__(self, message: str, path: str = None, details: dict = None):
        base_details = {"path": path} if path else {}
        if details:
            base_details.update(details)
        super().__init__(message, base_details)


class SnapshotDecodeError(ParserError):
    """Raised when a snapshot in the stream cannot be decoded."""

    def __init__(self, path: str, line: int | None = None, reason: str = None):
        location = f"{path}:{line}" if line is not None else path
        base_message = f"Failed to decode snapshot from demo: {location}"
        if reason:
            message = f"{base_message} ({reason})"
        else:
            message = base_message

        details = {
            "path": path,
            "line": line,
            "reason": reason,
            "suggested_action": (
                "Re-export the snapshot dump or check it was written completely"
            ),
        }
        super().__init__(message, path, details)


class AdapterNotFoundError(ParserError):
    """Raised when a requested parser adapter is not found."""

    def __init__(self, adapter_name: str, available_adapters: list = None):
        available = available_adapters or []
        if available:
            available_list = ", ".join(available)
            message = (
                f"Parser adapter not found: {adapter_name}. "
                f"Available: {available_list}"
            )
        else:
            message = f"Parser adapter not found: {adapter_name}"

        details = {
            "adapter_name": adapter_name,
            "available_adapters": available,
            "suggested_action": f"Use one of the available adapters: {available}",
        }
        super().__init__(message, details=details)
