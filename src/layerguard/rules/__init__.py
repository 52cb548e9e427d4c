"""Rule catalog: built-in boundary rules, custom rules and per-style selection."""

from .base import Rule, RuleLike, normalize_path
from .builtin import (
    BUILT_IN_RULES,
    FSD_LAYERS,
    AggregateIsolationRule,
    ApplicationIsolationRule,
    CqrsSegregationRule,
    DomainIsolationRule,
    FeatureIsolationRule,
    FsdLayerOrderRule,
    ModuleIsolationRule,
    NoImplInDomainRule,
    PortIsolationRule,
    get_builtin_rule,
)
from .custom import FunctionRule, SafeRule, wrap_rule
from .selector import get_rules_for_architecture

__all__ = [
    "Rule",
    "RuleLike",
    "normalize_path",
    "BUILT_IN_RULES",
    "FSD_LAYERS",
    "DomainIsolationRule",
    "ApplicationIsolationRule",
    "FeatureIsolationRule",
    "NoImplInDomainRule",
    "PortIsolationRule",
    "AggregateIsolationRule",
    "FsdLayerOrderRule",
    "CqrsSegregationRule",
    "ModuleIsolationRule",
    "get_builtin_rule",
    "FunctionRule",
    "SafeRule",
    "wrap_rule",
    "get_rules_for_architecture",
]
