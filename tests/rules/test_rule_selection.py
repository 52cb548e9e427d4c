"""Tests for rule selection and externally supplied rules."""

import logging

import pytest

from layerguard.architecture import ArchitectureStyle
from layerguard.models import Severity, Violation
from layerguard.rules import (
    FunctionRule,
    Rule,
    RuleLike,
    SafeRule,
    get_rules_for_architecture,
    wrap_rule,
)


EXPECTED_RULES = {
    "clean": ["clean/domain-isolation", "clean/application-isolation", "naming/no-impl-in-domain"],
    "feature-based": ["feature/isolation"],
    "layered": ["naming/no-impl-in-domain"],
    "hexagonal": [
        "hexagonal/port-isolation",
        "clean/domain-isolation",
        "naming/no-impl-in-domain",
    ],
    "ddd": ["ddd/aggregate-isolation", "clean/domain-isolation", "naming/no-impl-in-domain"],
    "feature-sliced": ["fsd/layer-order", "feature/isolation"],
    "mvc": ["naming/no-impl-in-domain"],
    "cqrs": ["cqrs/segregation", "naming/no-impl-in-domain"],
    "microservices": ["naming/no-impl-in-domain"],
    "modular-monolith": ["modular/module-isolation", "naming/no-impl-in-domain"],
}


class NoLodash:
    """A duck-typed external rule."""

    id = "custom/no-lodash"
    description = "Avoid lodash"
    applies_to = "**/*.ts"

    def validate(self, file_path, imports):
        return [
            Violation(self.id, file_path, "lodash is banned", Severity.WARNING)
            for imp in imports
            if imp == "lodash"
        ]


class Exploding:
    id = "custom/explode"
    description = "Always fails"
    applies_to = "**/*.ts"

    def validate(self, file_path, imports):
        raise RuntimeError("boom")


class TestSelector:
    """Style to rule mapping."""

    @pytest.mark.parametrize("style", sorted(EXPECTED_RULES))
    def test_rules_per_style(self, style):
        """Each style selects its built-ins in table order."""
        assert [r.id for r in get_rules_for_architecture(style)] == EXPECTED_RULES[style]

    def test_every_style_non_empty_and_repeatable(self):
        """Selection is deterministic."""
        for style in ArchitectureStyle:
            first = [r.id for r in get_rules_for_architecture(style)]
            assert first
            assert first == [r.id for r in get_rules_for_architecture(style)]

    def test_extra_rules_come_first(self):
        """Extra rules precede built-ins, in caller order."""
        rules = get_rules_for_architecture("feature-based", [NoLodash(), Exploding()])
        assert [r.id for r in rules] == ["custom/no-lodash", "custom/explode", "feature/isolation"]
        assert all(isinstance(r, SafeRule) for r in rules[:2])

    def test_unknown_style_keeps_only_extra_rules(self, caplog):
        """An unknown style selects no built-ins and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="layerguard"):
            rules = get_rules_for_architecture("onion", [NoLodash()])
        assert [r.id for r in rules] == ["custom/no-lodash"]
        assert "onion" in caplog.text

    def test_unknown_style_without_extras_is_empty(self):
        assert get_rules_for_architecture("onion") == []


class TestSafeRule:
    """Failure containment for external rules."""

    def test_passes_through_results(self):
        rule = wrap_rule(NoLodash())
        [v] = rule.validate("/p/a.ts", ["lodash", "react"])
        assert v.message == "lodash is banned"
        assert v.severity is Severity.WARNING

    def test_exception_becomes_error_violation(self, caplog):
        """A raising rule yields one synthetic error naming the rule."""
        rule = wrap_rule(Exploding())
        with caplog.at_level(logging.WARNING, logger="layerguard"):
            [v] = rule.validate("/p/a.ts", ["x"])
        assert v.rule_id == "custom/explode"
        assert v.severity is Severity.ERROR
        assert v.file == "/p/a.ts"
        assert v.message == 'Custom rule "custom/explode" failed: RuntimeError: boom'
        assert "custom/explode" in caplog.text

    def test_bad_return_type_becomes_error_violation(self):
        """Non-list results are converted too."""
        rule = wrap_rule(FunctionRule("custom/none", "", "**/*.ts", lambda f, i: None))
        [v] = rule.validate("/p/a.ts", [])
        assert "returned NoneType" in v.message

    def test_bad_item_type_becomes_error_violation(self):
        rule = wrap_rule(FunctionRule("custom/str", "", "**/*.ts", lambda f, i: ["oops"]))
        [v] = rule.validate("/p/a.ts", [])
        assert "expected Violation" in v.message

    def test_wrap_is_idempotent(self):
        rule = wrap_rule(NoLodash())
        assert wrap_rule(rule) is rule

    def test_object_without_validate_rejected(self):
        with pytest.raises(TypeError):
            wrap_rule(object())

    def test_metadata_copied(self):
        rule = wrap_rule(NoLodash())
        assert (rule.id, rule.applies_to) == ("custom/no-lodash", "**/*.ts")


class TestFunctionRule:
    """Rules from plain callables."""

    def test_is_a_rule(self):
        rule = FunctionRule("custom/x", "desc", "**/*.java", lambda f, i: [])
        assert isinstance(rule, Rule)
        assert isinstance(rule, RuleLike)
        assert rule.validate("/p/A.java", ["a.b"]) == []
