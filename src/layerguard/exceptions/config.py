"""Configuration exceptions: project root, architecture style, settings."""

from pathlib import Path
from typing import Any, Iterable

from .base import LayerGuardError


class ConfigurationError(LayerGuardError):
    """Base class for fatal configuration errors.

    Raised before any rule runs; a check never produces partial output
    after one of these.
    """

    pass


class InvalidPathError(ConfigurationError):
    """Raised when the project root is missing or not a directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class UnknownArchitectureError(ConfigurationError):
    """Raised when a hard lookup names an architecture style that does not exist."""

    def __init__(self, style: str, known_styles: Iterable[str]):
        known = list(known_styles)
        super().__init__(
            f"Unknown architecture style: {style}",
            details={"style": style, "known": ", ".join(known)},
        )
        self.style = style
        self.known_styles = known


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
