"""Public API for layerguard.

Example:
    >>> from layerguard import check, validate_architecture
    >>>
    >>> # Ordered violations only
    >>> violations = validate_architecture("/path/to/project", "clean")
    >>>
    >>> # Full report, configuration auto-discovered and overridden
    >>> report = check("/path/to/project", "feature-sliced", workers=4)
    >>> report.exit_code
    0
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from .architecture.models import ArchitectureDefinition, ArchitectureStyle
from .architecture.registry import DEFAULT_REGISTRY
from .config import load_config
from .engine import ValidationEngine, validate_architecture
from .logging_config import configure_for, get_logger
from .models import ValidationReport, ValidationRequest
from .rules.base import RuleLike
from .rules.selector import get_rules_for_architecture

logger = get_logger(__name__)

__all__ = [
    "check",
    "validate_architecture",
    "get_rules_for_architecture",
    "list_architecture_definitions",
    "get_architecture_definition",
]


def list_architecture_definitions() -> list[ArchitectureDefinition]:
    """All supported architecture definitions in registration order."""
    return list(DEFAULT_REGISTRY.list_definitions())


def get_architecture_definition(
    style_id: Union[str, ArchitectureStyle],
) -> Optional[ArchitectureDefinition]:
    """Definition for ``style_id``, or None if the style is unknown."""
    return DEFAULT_REGISTRY.get_definition(style_id)


def check(
    project_root: Union[str, Path],
    style: Union[str, ArchitectureStyle],
    extra_rules: Iterable[RuleLike] = (),
    config_file: Optional[Path] = None,
    **overrides,
) -> ValidationReport:
    """Check a project and return the full report.

    Pipeline:
    1. Load configuration (auto-discover TOML + apply overrides)
    2. Run the validation engine

    Args:
        project_root: Root of the source tree
        style: Architecture style id
        extra_rules: Additional rules run before the built-ins
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. workers=4, verbose=True)

    Returns:
        ValidationReport with violations grouped by rule then file

    Raises:
        InvalidConfigError: If configuration is invalid
        InvalidPathError: If the project root is missing or not a directory
        ValidationCancelledError: If the configured deadline passes
    """
    config = load_config(config_file=config_file, **overrides)
    configure_for(config.verbosity)
    logger.debug(f"Configuration loaded: {config.verbosity} mode, {config.workers} workers")

    style_id = style.value if isinstance(style, ArchitectureStyle) else str(style)
    request = ValidationRequest(
        project_root=Path(project_root),
        architecture_style=style_id,
        extra_rules=tuple(extra_rules),
    )
    return ValidationEngine(config).run(request)
