"""Exception hierarchy for layerguard."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    RuleEvaluationError,
    ValidationCancelledError,
)
from .base import LayerGuardError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    UnknownArchitectureError,
)

__all__ = [
    "LayerGuardError",
    "AnalysisError",
    "FileAccessError",
    "RuleEvaluationError",
    "ValidationCancelledError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "UnknownArchitectureError",
]
