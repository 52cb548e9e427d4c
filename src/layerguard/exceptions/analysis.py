"""Analysis-related exceptions: file access, rule evaluation, cancellation."""

from pathlib import Path

from .base import LayerGuardError


class AnalysisError(LayerGuardError):
    """Base class for errors raised while a check is running."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class RuleEvaluationError(AnalysisError):
    """Describes a custom rule that failed on one file.

    Never propagates out of a check: the failure is converted into a
    synthetic ``error`` violation for the offending rule.
    """

    def __init__(self, rule_id: str, filepath: str, reason: str):
        super().__init__(
            f"Rule {rule_id} failed on {filepath}",
            details={"rule_id": rule_id, "filepath": filepath, "reason": reason},
        )
        self.rule_id = rule_id
        self.filepath = filepath
        self.reason = reason


class ValidationCancelledError(AnalysisError):
    """Raised when a check is cancelled or exceeds its deadline."""

    def __init__(self, reason: str):
        super().__init__(f"Validation cancelled: {reason}", details={"reason": reason})
        self.reason = reason
