"""Root of the layerguard exception hierarchy."""

from typing import Any, Mapping, Optional


class LayerGuardError(Exception):
    """Base exception for all layerguard errors.

    ``details`` holds the structured context of the failure (path, config
    key, rule id, ...). Values are stored as strings so an error renders the
    same way in logs, on the terminal and in JSON output.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: dict[str, str] = {k: str(v) for k, v in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> dict[str, Any]:
        """Machine-readable form used by ``layerguard lint --json``."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }
