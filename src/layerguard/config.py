"""Configuration loading and management for layerguard.

Configuration sources are merged in priority order:
    1. Defaults (defined in CheckConfig)
    2. Global config (~/.layerguard.toml)
    3. Project config (./layerguard.toml)
    4. Explicit config file
    5. Environment variables (LAYERGUARD_* prefix)
    6. Overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")

GLOBAL_CONFIG_NAME = ".layerguard.toml"
PROJECT_CONFIG_NAME = "layerguard.toml"
ENV_PREFIX = "LAYERGUARD_"


@dataclass(frozen=True)
class CheckConfig:
    """Configuration for one architecture check.

    Attributes:
        Performance:
            workers: Worker threads for rule evaluation (1 = sequential)
            timeout_seconds: Overall deadline for a check (0 = no deadline)

        File selection:
            follow_symlinks: Descend into symlinked directories while scanning
            allow_hidden_files: Include files and directories starting with "."
            exclude_patterns: Glob patterns pruned from every scan (none by default)
            max_file_size_mb: Larger files are evaluated with no imports

        Output control:
            verbosity: Logging verbosity level
    """

    # Performance
    workers: int = 1
    timeout_seconds: float = 0

    # File selection
    follow_symlinks: bool = False
    allow_hidden_files: bool = False
    exclude_patterns: list[str] = field(default_factory=list)
    max_file_size_mb: float = 10.0

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.timeout_seconds < 0:
            raise InvalidConfigError("timeout_seconds", self.timeout_seconds, "must be non-negative")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITY_LEVELS)}"
            )
        if not isinstance(self.exclude_patterns, (list, tuple)):
            raise InvalidConfigError(
                "exclude_patterns", self.exclude_patterns, "must be a list of glob patterns"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def parallel(self) -> bool:
        return self.workers > 1


# Default configuration (singleton)
DEFAULT_CONFIG = CheckConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> CheckConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are mapped onto ``verbosity``; ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated CheckConfig instance

    Raises:
        InvalidConfigError: If a config file is missing or invalid, or a
            value fails validation

    Example:
        >>> config = load_config(config_file=Path("layerguard.toml"), workers=2)
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidConfigError("config_file", config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    unknown = sorted(set(merged) - set(CheckConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    return CheckConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from LAYERGUARD_* environment variables.

    Supported environment variables:
        LAYERGUARD_WORKERS: int
        LAYERGUARD_TIMEOUT_SECONDS: float
        LAYERGUARD_FOLLOW_SYMLINKS: bool (true/false/1/0)
        LAYERGUARD_ALLOW_HIDDEN_FILES: bool
        LAYERGUARD_MAX_FILE_SIZE_MB: float
        LAYERGUARD_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any LAYERGUARD_* vars found.
    """
    type_hints = get_type_hints(CheckConfig)

    result: dict[str, Any] = {}

    for field_name in CheckConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if the field can't be set from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Lists (exclude_patterns) are too complex for env vars
    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file, accepting either top-level keys or a [layerguard] table.

    Raises:
        InvalidConfigError: If the file can't be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfigError("config_file", path, str(e))

    section = data.get("layerguard")
    if isinstance(section, dict):
        return dict(section)
    return data
