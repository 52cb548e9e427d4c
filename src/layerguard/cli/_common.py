"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import CheckConfig, load_config
from ..exceptions import LayerGuardError

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> CheckConfig:
    """Build check configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def print_fatal(error: LayerGuardError, json_output: bool = False) -> None:
    """Report a fatal error; with ``json_output`` as a JSON object on stdout."""
    if json_output:
        typer.echo(json.dumps(error.to_dict(), indent=2))
        return
    console.print(f"[red]Error:[/red] {escape(str(error))}")
