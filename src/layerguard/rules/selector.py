"""Maps an architecture style to the rules a check runs."""

from __future__ import annotations

from typing import Iterable

from ..architecture.registry import DEFAULT_REGISTRY, ArchitectureRegistry, StyleId
from ..logging_config import get_logger
from .base import Rule, RuleLike
from .builtin import get_builtin_rule
from .custom import wrap_rule

logger = get_logger(__name__)


def get_rules_for_architecture(
    style: StyleId,
    extra_rules: Iterable[RuleLike] = (),
    registry: ArchitectureRegistry = DEFAULT_REGISTRY,
) -> list[Rule]:
    """Active rules for ``style``: extra rules first, then the style's built-ins.

    Extra rules are always included and are wrapped so a failing rule yields
    a violation rather than an exception. An unknown style selects no
    built-ins.
    """
    rules: list[Rule] = [wrap_rule(rule) for rule in extra_rules]

    if style not in registry:
        logger.warning(f"Unknown architecture style '{style}': no built-in rules selected")
        return rules

    for rule_id in registry.rule_ids_for(style):
        rule = get_builtin_rule(rule_id)
        if rule is None:
            raise LookupError(f"Rule table references unknown rule '{rule_id}'")
        rules.append(rule)
    return rules
