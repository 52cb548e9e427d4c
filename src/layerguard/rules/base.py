"""Base class for architecture rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, Sequence, runtime_checkable

from ..models import Severity, Violation


@runtime_checkable
class RuleLike(Protocol):
    """Anything usable as a rule. External rules only need to look like this."""

    id: str
    description: str
    applies_to: str

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]: ...


class Rule(ABC):
    """A stateless boundary rule.

    ``applies_to`` is a glob (relative to the project root) selecting the
    files the rule inspects. ``validate`` receives the absolute file path and
    the file's extracted imports and returns the violations found.
    """

    id: str
    description: str
    applies_to: str
    severity: Severity = Severity.ERROR

    @abstractmethod
    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        ...

    def violation(self, file_path: str, message: str) -> Violation:
        return Violation(
            rule_id=self.id,
            file=file_path,
            message=message,
            severity=self.severity,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id!r})"


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of platform."""
    return path.replace("\\", "/")
