"""Tests for the validation orchestrator."""

import logging
import os
import threading

import pytest

from layerguard.config import CheckConfig
from layerguard.engine import ValidationEngine, validate_architecture
from layerguard.exceptions import InvalidPathError, ValidationCancelledError
from layerguard.models import Severity, ValidationRequest, Violation
from layerguard.rules import FunctionRule


CLEAN_TREE = {
    "src/domain/User.ts": "import { Db } from '../infrastructure/db';\n",
    "src/domain/Order.ts": "import { View } from '../presentation/view';\n",
    "src/domain/Money.ts": "export class Money {}\n",
    "src/domain/UserRepositoryImpl.ts": "export class UserRepositoryImpl {}\n",
    "src/application/CreateUser.ts": "import { Form } from '../presentation/form';\n",
    "src/infrastructure/db.ts": "import { User } from '../domain/User';\n",
    "src/presentation/view.ts": "export const view = 1;\n",
}


def _run(root, style="clean", **config):
    return ValidationEngine(CheckConfig(**config)).run(ValidationRequest(root, style))


class TestOrdering:
    """Rule-major, file-minor output."""

    def test_violations_grouped_by_rule_then_file(self, make_tree):
        """Rules run in selection order; files in scanner order within each rule."""
        root = make_tree(CLEAN_TREE)
        report = _run(root)
        assert [(v.rule_id, os.path.basename(v.file)) for v in report.violations] == [
            ("clean/domain-isolation", "Order.ts"),
            ("clean/domain-isolation", "User.ts"),
            ("clean/application-isolation", "CreateUser.ts"),
            ("naming/no-impl-in-domain", "UserRepositoryImpl.ts"),
        ]
        assert report.rules_run == [
            "clean/domain-isolation",
            "clean/application-isolation",
            "naming/no-impl-in-domain",
        ]

    def test_files_are_absolute_paths(self, make_tree):
        root = make_tree(CLEAN_TREE)
        report = _run(root)
        assert all(os.path.isabs(v.file) for v in report.violations)
        assert report.project_root == root.resolve()

    def test_files_scanned_counts_distinct_files(self, make_tree):
        """A file matched by several rules counts once."""
        root = make_tree(CLEAN_TREE)
        # 4 domain files (two rules) + 1 application file
        assert _run(root).files_scanned == 5

    def test_idempotent(self, make_tree):
        """Two runs over an unchanged tree are identical."""
        root = make_tree(CLEAN_TREE)
        assert _run(root).violations == _run(root).violations

    def test_parallel_matches_sequential(self, make_tree):
        """Thread pool evaluation restores canonical order."""
        files = dict(CLEAN_TREE)
        for i in range(30):
            files[f"src/domain/gen/Entity{i:02d}.ts"] = (
                f"import a from '../../infrastructure/repo{i}';\n"
                f"import b from '../../presentation/page{i}';\n"
            )
        root = make_tree(files)
        sequential = _run(root, workers=1).violations
        parallel = _run(root, workers=8).violations
        assert parallel == sequential
        assert len(sequential) == 64

    def test_report_severity_split(self, make_tree):
        root = make_tree(CLEAN_TREE)
        report = _run(root)
        assert len(report.errors) == 3
        assert len(report.warnings) == 1
        assert report.exit_code == 1


class TestRootHandling:
    """Fatal configuration errors."""

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            _run(tmp_path / "missing")

    def test_root_is_file(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("")
        with pytest.raises(InvalidPathError):
            _run(target)

    def test_missing_root_runs_no_rules(self, tmp_path):
        """No rule is called when the root is invalid."""
        calls = []
        rule = FunctionRule("custom/spy", "", "**/*", lambda f, i: calls.append(f) or [])
        with pytest.raises(InvalidPathError):
            validate_architecture(tmp_path / "missing", "clean", [rule])
        assert calls == []


class TestExtraRules:
    """Externally supplied rules."""

    def test_extra_rules_run_first(self, make_tree):
        root = make_tree(CLEAN_TREE)

        def flag_db(file_path, imports):
            return [
                Violation("custom/db", file_path, "db import", Severity.WARNING)
                for imp in imports
                if imp.endswith("/db")
            ]

        rule = FunctionRule("custom/db", "", "**/*.ts", flag_db)
        violations = validate_architecture(root, "clean", [rule])
        assert violations[0].rule_id == "custom/db"
        assert violations[0].file.endswith("User.ts")
        assert violations[1].rule_id == "clean/domain-isolation"

    def test_failing_rule_does_not_abort(self, make_tree):
        """A raising custom rule yields one error per file and the check continues."""
        root = make_tree({"src/domain/A.ts": "", "src/domain/B.ts": ""})

        def boom(file_path, imports):
            raise ValueError("bad rule")

        rule = FunctionRule("custom/boom", "", "**/domain/*.ts", boom)
        violations = validate_architecture(root, "clean", [rule])
        assert [v.rule_id for v in violations] == ["custom/boom", "custom/boom"]
        assert all(v.severity is Severity.ERROR for v in violations)

    def test_unknown_style_only_extra_rules(self, make_tree):
        root = make_tree(CLEAN_TREE)
        rule = FunctionRule(
            "custom/all",
            "",
            "src/presentation/*.ts",
            lambda f, i: [Violation("custom/all", f, "seen", Severity.ERROR)],
        )
        violations = validate_architecture(root, "onion", [rule])
        assert [v.rule_id for v in violations] == ["custom/all"]


class TestDefaultScope:
    """What a check sees with no configuration."""

    def test_node_modules_checked_by_default(self, make_tree):
        root = make_tree(
            {"node_modules/lib/domain/X.ts": "import { Db } from '../infrastructure/db';\n"}
        )
        violations = validate_architecture(root, "clean")
        assert [v.rule_id for v in violations] == ["clean/domain-isolation"]

    def test_node_modules_excluded_on_request(self, make_tree):
        root = make_tree(
            {"node_modules/lib/domain/X.ts": "import { Db } from '../infrastructure/db';\n"}
        )
        config = CheckConfig(exclude_patterns=["**/node_modules/**"])
        assert validate_architecture(root, "clean", config=config) == []


class TestDegradation:
    """Unreadable and unsupported files."""

    def test_unsupported_extension_has_no_imports(self, make_tree):
        """Rules still see files without an extractor, with an empty import list."""
        root = make_tree({"src/notes.md": "import x from '../infrastructure/y';"})
        seen = {}

        def record(file_path, imports):
            seen[os.path.basename(file_path)] = list(imports)
            return []

        rule = FunctionRule("custom/record", "", "**/*.md", record)
        assert validate_architecture(root, "layered", [rule]) == []
        assert seen == {"notes.md": []}

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits not enforced",
    )
    def test_unreadable_file_evaluated_with_no_imports(self, make_tree, caplog):
        root = make_tree({"src/domain/Secret.ts": "import a from '../infrastructure/x';\n"})
        target = root / "src" / "domain" / "Secret.ts"
        target.chmod(0)
        try:
            with caplog.at_level(logging.WARNING, logger="layerguard"):
                violations = validate_architecture(root, "clean")
        finally:
            target.chmod(0o644)
        assert violations == []
        assert "Secret.ts" in caplog.text

    def test_reads_each_file_once(self, make_tree, monkeypatch):
        """The per-run cache serves every rule that matches a file."""
        from layerguard.scanning.extractor import ImportExtractor

        root = make_tree({"src/domain/User.ts": "import a from '../infrastructure/x';\n"})
        reads = []
        original = ImportExtractor.extract_file

        def counting(self, path):
            reads.append(path)
            return original(self, path)

        monkeypatch.setattr(ImportExtractor, "extract_file", counting)
        # ddd runs three rules over domain/ files
        violations = validate_architecture(root, "ddd")
        assert len(reads) == 1
        assert [v.rule_id for v in violations] == [
            "ddd/aggregate-isolation",
            "clean/domain-isolation",
        ]


class TestCancellation:
    """Cancel signal and deadline."""

    def test_pre_set_event_cancels(self, make_tree):
        root = make_tree(CLEAN_TREE)
        event = threading.Event()
        event.set()
        with pytest.raises(ValidationCancelledError):
            validate_architecture(root, "clean", cancel_event=event)

    def test_event_set_mid_run(self, make_tree):
        """Setting the event from a rule stops the remaining work."""
        root = make_tree({f"src/domain/E{i}.ts": "" for i in range(5)})
        event = threading.Event()
        seen = []

        def stop_after_first(file_path, imports):
            seen.append(file_path)
            event.set()
            return []

        rule = FunctionRule("custom/stop", "", "**/domain/*.ts", stop_after_first)
        with pytest.raises(ValidationCancelledError):
            validate_architecture(root, "clean", [rule], cancel_event=event)
        assert len(seen) == 1

    @pytest.mark.parametrize("workers", [1, 4])
    def test_deadline(self, make_tree, workers):
        """A check past its deadline is aborted."""
        root = make_tree({f"src/domain/E{i}.ts": "" for i in range(20)})
        stop = threading.Event()

        def slow(file_path, imports):
            stop.wait(0.2)
            return []

        rule = FunctionRule("custom/slow", "", "**/domain/*.ts", slow)
        config = CheckConfig(workers=workers, timeout_seconds=0.3)
        try:
            with pytest.raises(ValidationCancelledError):
                validate_architecture(root, "clean", [rule], config=config)
        finally:
            stop.set()
