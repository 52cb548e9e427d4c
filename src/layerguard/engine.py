"""Validation orchestrator.

Pipeline for one check:
    1. Validate the project root (fatal before any rule runs)
    2. Select rules: extra rules, then the style's built-ins
    3. Per rule: scan the root with the rule's glob, extract imports of
       every matched file, call the rule
    4. Concatenate per-rule buckets in rule order

Output order is rule-major, file-minor (scanner order) and identical
whether units run sequentially or on a thread pool. Each file is read at
most once per check even when several rules match it.
"""

from __future__ import annotations

import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from threading import Lock
from typing import Iterable, Optional, Sequence, Union

from .architecture.models import ArchitectureStyle
from .architecture.registry import DEFAULT_REGISTRY, ArchitectureRegistry
from .config import DEFAULT_CONFIG, CheckConfig
from .exceptions import FileAccessError, ValidationCancelledError
from .logging_config import get_logger
from .models import ValidationReport, ValidationRequest, Violation
from .rules.base import Rule, RuleLike
from .rules.selector import get_rules_for_architecture
from .scanning.extractor import ImportExtractor
from .scanning.scanner import CancelSignal, FileScanner, validate_root_directory

logger = get_logger(__name__)


class _CancelToken:
    """Combines a caller's cancel signal with the configured deadline."""

    def __init__(self, external: Optional[CancelSignal], timeout_seconds: float):
        self._external = external
        self._timeout = timeout_seconds
        self._deadline = time.monotonic() + timeout_seconds if timeout_seconds > 0 else None

    def is_set(self) -> bool:
        return self._cancelled() or self._expired()

    def check(self) -> None:
        if self._cancelled():
            raise ValidationCancelledError("cancelled by caller")
        if self._expired():
            raise ValidationCancelledError(f"timed out after {self._timeout}s")

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def _cancelled(self) -> bool:
        return self._external is not None and self._external.is_set()

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline


class _ImportCache:
    """Per-check cache of extracted imports, shared by worker threads."""

    def __init__(self, extractor: ImportExtractor):
        self._extractor = extractor
        self._lock = Lock()
        self._cache: dict[Path, list[str]] = {}

    def get(self, path: Path) -> list[str]:
        with self._lock:
            cached = self._cache.get(path)
        if cached is not None:
            return cached

        try:
            imports = self._extractor.extract_file(path)
        except FileAccessError as e:
            logger.warning(f"Evaluating {path} with no imports: {e.reason}")
            imports = []

        with self._lock:
            return self._cache.setdefault(path, imports)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


class ValidationEngine:
    """Runs architecture checks against project trees.

    The engine holds only read-only state (config and registry) and can be
    reused for any number of checks.
    """

    def __init__(
        self,
        config: Optional[CheckConfig] = None,
        registry: ArchitectureRegistry = DEFAULT_REGISTRY,
    ):
        self.config = config or DEFAULT_CONFIG
        self.registry = registry

    def run(
        self, request: ValidationRequest, cancel_event: Optional[CancelSignal] = None
    ) -> ValidationReport:
        """Run one check.

        Args:
            request: Project root, style and extra rules
            cancel_event: Optional signal (e.g. ``threading.Event``); when set
                the check stops with ValidationCancelledError

        Returns:
            ValidationReport with violations in rule-major, file-minor order

        Raises:
            InvalidPathError: If the project root is missing or not a directory
            ValidationCancelledError: If cancelled or past ``timeout_seconds``
        """
        root = validate_root_directory(request.project_root)
        style = _style_id(request.architecture_style)
        rules = get_rules_for_architecture(style, request.extra_rules, self.registry)

        token = _CancelToken(cancel_event, self.config.timeout_seconds)
        scanner = FileScanner(
            follow_symlinks=self.config.follow_symlinks,
            allow_hidden=self.config.allow_hidden_files,
            exclude_patterns=self.config.exclude_patterns,
            cancel_event=token,
        )
        cache = _ImportCache(ImportExtractor(self.config.max_file_size_bytes))

        logger.info(
            f"Checking {root} as '{style}' with {len(rules)} rules "
            f"({'parallel' if self.config.parallel else 'sequential'})"
        )
        start = time.monotonic()

        if self.config.parallel:
            buckets = self._run_parallel(root, rules, scanner, cache, token)
        else:
            buckets = self._run_sequential(root, rules, scanner, cache, token)

        violations = [v for bucket in buckets for v in bucket]
        report = ValidationReport(
            project_root=root,
            architecture_style=style,
            violations=violations,
            rules_run=[rule.id for rule in rules],
            files_scanned=len(cache),
        )
        logger.info(
            f"Check complete: {len(report.errors)} errors, {len(report.warnings)} warnings, "
            f"{report.files_scanned} files in {time.monotonic() - start:.2f}s"
        )
        return report

    # ── Sequential ─────────────────────────────────────────────

    def _run_sequential(
        self,
        root: Path,
        rules: Sequence[Rule],
        scanner: FileScanner,
        cache: _ImportCache,
        token: _CancelToken,
    ) -> list[list[Violation]]:
        buckets: list[list[Violation]] = []
        for rule in rules:
            token.check()
            bucket: list[Violation] = []
            for path in scanner.scan(root, rule.applies_to):
                token.check()
                bucket.extend(rule.validate(str(path), cache.get(path)))
            logger.debug(f"{rule.id}: {len(bucket)} violations")
            buckets.append(bucket)
        return buckets

    # ── Parallel ───────────────────────────────────────────────

    def _run_parallel(
        self,
        root: Path,
        rules: Sequence[Rule],
        scanner: FileScanner,
        cache: _ImportCache,
        token: _CancelToken,
    ) -> list[list[Violation]]:
        def evaluate(rule: Rule, path: Path) -> list[Violation]:
            token.check()
            return rule.validate(str(path), cache.get(path))

        executor = ThreadPoolExecutor(max_workers=self.config.workers)
        try:
            scans = [executor.submit(scanner.scan, root, rule.applies_to) for rule in rules]
            self._wait(scans, token)
            file_lists = [future.result() for future in scans]

            # One slot per (rule, file); filled in any order, read back in canonical order.
            slots: list[list[Future]] = [
                [executor.submit(evaluate, rule, path) for path in files]
                for rule, files in zip(rules, file_lists)
            ]
            self._wait([f for row in slots for f in row], token)
            return [[v for future in row for v in future.result()] for row in slots]
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    @staticmethod
    def _wait(futures: Sequence[Future], token: _CancelToken) -> None:
        if not futures:
            return
        done, pending = wait(futures, timeout=token.remaining(), return_when=FIRST_EXCEPTION)
        for future in done:
            exc = future.exception()
            if exc is not None:
                raise exc
        if pending:
            token.check()
            raise ValidationCancelledError("evaluation did not finish before the deadline")


def _style_id(style: Union[str, ArchitectureStyle]) -> str:
    return style.value if isinstance(style, ArchitectureStyle) else str(style)


def validate_architecture(
    project_root: Union[str, Path],
    style: Union[str, ArchitectureStyle],
    extra_rules: Iterable[RuleLike] = (),
    config: Optional[CheckConfig] = None,
    cancel_event: Optional[CancelSignal] = None,
) -> list[Violation]:
    """Check ``project_root`` against ``style`` and return the ordered violations.

    Raises:
        InvalidPathError: If the project root is missing or not a directory
        ValidationCancelledError: If cancelled or past the configured deadline
    """
    request = ValidationRequest(
        project_root=Path(project_root),
        architecture_style=_style_id(style),
        extra_rules=tuple(extra_rules),
    )
    return ValidationEngine(config).run(request, cancel_event=cancel_event).violations
