"""Base error definitions for unitypackage_unpacker packages."""

from typing import Any, Dict


class UnpackerError(Exception):
    """Base exception for all unitypackage_unpacker errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(UnpackerError):
    """Configuration is invalid or missing."""
    pass
