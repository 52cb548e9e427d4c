"""Support for externally supplied rules.

External rules are trusted less than built-ins: every one is wrapped in a
SafeRule, which turns a failure on one file into a synthetic ``error``
violation instead of aborting the check.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ..exceptions import RuleEvaluationError
from ..logging_config import get_logger
from ..models import Severity, Violation
from .base import Rule, RuleLike

logger = get_logger(__name__)

ValidateFn = Callable[[str, Sequence[str]], list[Violation]]


class FunctionRule(Rule):
    """A rule built from a plain ``validate(file_path, imports)`` callable.

    Example:
        >>> def no_lodash(file_path, imports):
        ...     return [Violation("custom/no-lodash", file_path, "lodash", Severity.WARNING)
        ...             for imp in imports if imp == "lodash"]
        >>> rule = FunctionRule("custom/no-lodash", "Avoid lodash", "**/*.ts", no_lodash)
    """

    def __init__(self, rule_id: str, description: str, applies_to: str, func: ValidateFn):
        self.id = rule_id
        self.description = description
        self.applies_to = applies_to
        self._func = func

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        return self._func(file_path, imports)


class SafeRule(Rule):
    """Wraps an external rule so its failures become violations."""

    def __init__(self, inner: RuleLike):
        self.inner = inner
        self.id = str(getattr(inner, "id", "") or inner.__class__.__name__)
        self.description = str(getattr(inner, "description", ""))
        self.applies_to = str(getattr(inner, "applies_to", "**/*"))

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        try:
            result = self.inner.validate(file_path, list(imports))
        except Exception as e:
            return [self._failure(file_path, f"{type(e).__name__}: {e}")]

        if not isinstance(result, (list, tuple)):
            return [self._failure(file_path, f"returned {type(result).__name__}, expected a list")]
        bad = [v for v in result if not isinstance(v, Violation)]
        if bad:
            return [
                self._failure(file_path, f"returned {type(bad[0]).__name__}, expected Violation")
            ]
        return list(result)

    def _failure(self, file_path: str, reason: str) -> Violation:
        error = RuleEvaluationError(self.id, file_path, reason)
        logger.warning(str(error))
        return Violation(
            rule_id=self.id,
            file=file_path,
            message=f'Custom rule "{self.id}" failed: {reason}',
            severity=Severity.ERROR,
        )

    def __repr__(self) -> str:
        return f"SafeRule({self.inner!r})"


def wrap_rule(rule: RuleLike) -> SafeRule:
    """Wrap an external rule once; already-wrapped rules pass through."""
    if isinstance(rule, SafeRule):
        return rule
    if not callable(getattr(rule, "validate", None)):
        raise TypeError(f"{rule!r} has no validate(file_path, imports) method")
    return SafeRule(rule)
