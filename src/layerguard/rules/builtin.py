"""Built-in boundary rules.

Layer detection is plain substring matching on forward-slash paths and raw
import text; nothing is resolved or split into path components. A directory
such as ``domain-events`` or an import like ``./apiClient`` can therefore
match where a path-aware check would not.
"""

from __future__ import annotations

import os
import re
from typing import Optional, Sequence

from ..models import Severity, Violation
from .base import Rule, normalize_path

# Feature-Sliced Design layers, lowest first.
FSD_LAYERS = ("shared", "entities", "features", "widgets", "pages", "processes", "app")

_FEATURE_DIR = re.compile(r"features/([^/]+)/")
_FEATURE_REF = re.compile(r"features/([^/]+)")
_MODULE_DIR = re.compile(r"modules/([^/]+)/")
_MODULE_REF = re.compile(r"modules/([^/]+)")
_IMPL = re.compile(r"impl", re.IGNORECASE)

# Cross-module imports through any of these are public.
_MODULE_PUBLIC_MARKERS = ("/api/", ".api.", "/events/")


# ── Clean Architecture ─────────────────────────────────


class DomainIsolationRule(Rule):
    """Domain layer must not import from infrastructure or presentation."""

    id = "clean/domain-isolation"
    description = "Domain layer cannot import from infrastructure or presentation layers"
    applies_to = "**/domain/**/*.{ts,java,cs}"

    forbidden = ("infrastructure", "presentation")

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        for imp in imports:
            for layer in self.forbidden:
                if layer in imp:
                    violations.append(
                        self.violation(
                            file_path,
                            f'Domain layer file imports from forbidden layer "{layer}": {imp}',
                        )
                    )
        return violations


class ApplicationIsolationRule(Rule):
    """Application layer must not import from presentation."""

    id = "clean/application-isolation"
    description = "Application layer cannot import from presentation layer"
    applies_to = "**/application/**/*.{ts,java,cs}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        return [
            self.violation(
                file_path,
                f'Application layer file imports from forbidden layer "presentation": {imp}',
            )
            for imp in imports
            if "presentation" in imp
        ]


# ── Feature modules ────────────────────────────────────


class FeatureIsolationRule(Rule):
    """Feature modules are self-contained: no imports from sibling features."""

    id = "feature/isolation"
    description = "Feature modules cannot import from other feature modules directly"
    applies_to = "**/features/**/*.{ts,tsx,java,cs}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        current = _first_group(_FEATURE_DIR, normalize_path(file_path))
        if current is None:
            return violations

        for imp in imports:
            other = _first_group(_FEATURE_REF, normalize_path(imp))
            if other is not None and other != current:
                violations.append(
                    self.violation(
                        file_path,
                        f'Feature "{current}" imports from feature "{other}". '
                        "Use shared modules instead.",
                    )
                )
        return violations


# ── Naming ─────────────────────────────────────────────


class NoImplInDomainRule(Rule):
    """Implementation classes belong in infrastructure, not in domain/."""

    id = "naming/no-impl-in-domain"
    description = (
        'Domain layer files should not contain "Impl" — implementations belong in infrastructure'
    )
    applies_to = "**/domain/**/*.{ts,java,cs}"
    severity = Severity.WARNING

    def validate(self, file_path: str, imports: Sequence[str] = ()) -> list[Violation]:
        file_name = os.path.basename(normalize_path(file_path))
        if not _IMPL.search(file_name):
            return []
        return [
            self.violation(
                file_path,
                f'File "{file_name}" contains "Impl". '
                "Implementations should live in the infrastructure layer.",
            )
        ]


# ── Hexagonal ──────────────────────────────────────────


class PortIsolationRule(Rule):
    """Ports (domain interfaces) must not import from adapters."""

    id = "hexagonal/port-isolation"
    description = "Ports (domain) cannot import from adapters (infrastructure)"
    applies_to = "**/ports/**/*.{ts,java,cs}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        return [
            self.violation(file_path, f"Port imports from adapter/infrastructure: {imp}")
            for imp in imports
            if "adapter" in imp or "infrastructure" in imp
        ]


# ── DDD ────────────────────────────────────────────────


class AggregateIsolationRule(Rule):
    """Aggregates must not depend on infrastructure or presentation concerns."""

    id = "ddd/aggregate-isolation"
    description = "Domain aggregates must not depend on infrastructure or presentation"
    applies_to = "**/domain/**/*.{ts,java,cs}"

    forbidden = ("infrastructure", "persistence", "presentation", "controller", "api")

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        for imp in imports:
            lowered = imp.lower()
            for layer in self.forbidden:
                if layer in lowered:
                    violations.append(
                        self.violation(
                            file_path, f'Domain imports from forbidden layer "{layer}": {imp}'
                        )
                    )
        return violations


# ── Feature-Sliced Design ──────────────────────────────


class FsdLayerOrderRule(Rule):
    """A Feature-Sliced layer may only import from layers below it.

    Order: shared < entities < features < widgets < pages < processes < app
    """

    id = "fsd/layer-order"
    description = "Lower FSD layers cannot import from upper layers"
    applies_to = "**/{" + ",".join(FSD_LAYERS) + "}/**/*.{ts,tsx}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        current_idx = self.layer_index(file_path)
        if current_idx is None:
            return violations
        current = FSD_LAYERS[current_idx]

        for imp in imports:
            imp_norm = normalize_path(imp)
            for upper in FSD_LAYERS[current_idx + 1 :]:
                if f"@{upper}" in imp_norm or f"/{upper}/" in imp_norm:
                    violations.append(
                        self.violation(
                            file_path,
                            f'Layer "{current}" imports from upper layer "{upper}": {imp}',
                        )
                    )
        return violations

    @staticmethod
    def layer_index(file_path: str) -> Optional[int]:
        """Index of the first layer (in layer order) whose directory occurs in the path."""
        norm = normalize_path(file_path)
        for idx, layer in enumerate(FSD_LAYERS):
            if f"/{layer}/" in norm:
                return idx
        return None


# ── CQRS ───────────────────────────────────────────────


class CqrsSegregationRule(Rule):
    """Command side must not reach into the read side, and vice versa."""

    id = "cqrs/segregation"
    description = "Command side must not import from query/read side and vice-versa"
    applies_to = "**/{command,query}/**/*.{ts,java,cs}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        norm = normalize_path(file_path).lower()
        is_command = "/command" in norm
        is_query = "/query" in norm

        for imp in imports:
            lowered = imp.lower()
            if is_command and ("readmodel" in lowered or "query" in lowered):
                violations.append(
                    self.violation(file_path, f"Command side imports from query/read side: {imp}")
                )
            if is_query and ("writemodel" in lowered or "command" in lowered):
                violations.append(
                    self.violation(file_path, f"Query side imports from command/write side: {imp}")
                )
        return violations


# ── Modular Monolith ───────────────────────────────────


class ModuleIsolationRule(Rule):
    """Modules may only talk to each other through public api/ or events/ packages."""

    id = "modular/module-isolation"
    description = "Modules can only import from other modules via their public api package"
    applies_to = "**/modules/**/*.{ts,java,cs}"

    def validate(self, file_path: str, imports: Sequence[str]) -> list[Violation]:
        violations: list[Violation] = []
        current = _first_group(_MODULE_DIR, normalize_path(file_path))
        if current is None:
            return violations

        for imp in imports:
            imp_norm = normalize_path(imp)
            other = _first_group(_MODULE_REF, imp_norm)
            if other is None or other == current:
                continue
            if any(marker in imp_norm for marker in _MODULE_PUBLIC_MARKERS):
                continue
            violations.append(
                self.violation(
                    file_path,
                    f'Module "{current}" imports internal code from module "{other}". '
                    "Use the public API instead.",
                )
            )
        return violations


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


BUILT_IN_RULES: tuple[Rule, ...] = (
    DomainIsolationRule(),
    ApplicationIsolationRule(),
    FeatureIsolationRule(),
    NoImplInDomainRule(),
    PortIsolationRule(),
    AggregateIsolationRule(),
    FsdLayerOrderRule(),
    CqrsSegregationRule(),
    ModuleIsolationRule(),
)

_BY_ID: dict[str, Rule] = {rule.id: rule for rule in BUILT_IN_RULES}


def get_builtin_rule(rule_id: str) -> Optional[Rule]:
    return _BY_ID.get(rule_id)
