"""Data models shared by the rule catalog, the engine and reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .rules.base import Rule


class Severity(str, Enum):
    """How serious a violation is. Only errors fail a check."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Violation:
    """One detected rule breach."""

    rule_id: str
    file: str
    message: str
    severity: Severity

    def to_dict(self) -> dict[str, str]:
        return {
            "rule_id": self.rule_id,
            "file": self.file,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class ValidationRequest:
    """Input of one check. Created per invocation, never persisted."""

    project_root: Path
    architecture_style: str
    extra_rules: Sequence["Rule"] = ()


@dataclass
class ValidationReport:
    """Ordered result of one check: rule-major, file-minor.

    Attributes:
        project_root: Resolved root the check ran against
        architecture_style: Style id as requested
        violations: All violations, never sorted or deduplicated
        rules_run: Rule ids in evaluation order
        files_scanned: Number of distinct files inspected by any rule
    """

    project_root: Path
    architecture_style: str
    violations: list[Violation] = field(default_factory=list)
    rules_run: list[str] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def errors(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Violation]:
        return [v for v in self.violations if v.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(v.severity is Severity.ERROR for v in self.violations)

    @property
    def exit_code(self) -> int:
        """1 when at least one error-severity violation exists, else 0."""
        return 1 if self.has_errors else 0

    def by_severity(self) -> dict[Severity, list[Violation]]:
        return {Severity.ERROR: self.errors, Severity.WARNING: self.warnings}

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_root": str(self.project_root),
            "architecture": self.architecture_style,
            "rules": list(self.rules_run),
            "files_scanned": self.files_scanned,
            "summary": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
            },
            "violations": [v.to_dict() for v in self.violations],
        }
