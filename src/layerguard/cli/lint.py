"""Lint command: checks a source tree against an architecture style."""

from pathlib import Path
from typing import Optional

import typer

from ..architecture.registry import DEFAULT_REGISTRY
from ..engine import ValidationEngine
from ..exceptions import ConfigurationError, ValidationCancelledError
from ..logging_config import setup_logging
from ..models import ValidationRequest
from ..report import render_report, report_to_json
from . import app
from ._common import console, print_fatal, resolve_config


@app.command()
def lint(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to check",
    ),
    architecture: str = typer.Option(
        ...,
        "--architecture",
        "-a",
        help="Architecture style (see `layerguard architectures`)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Worker threads for rule evaluation",
        min=1,
        max=64,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Abort the check after this many seconds",
        min=0,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Check PATH against an architecture style.

    Violations are grouped by severity. Exits 1 if any error-severity
    violation is found, 0 otherwise (warnings alone do not fail), and 2 on
    configuration errors.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        definition = DEFAULT_REGISTRY.require_definition(architecture)
        check_config = resolve_config(
            config=config, workers=workers, timeout=timeout, verbose=verbose, quiet=quiet
        )
        request = ValidationRequest(
            project_root=path, architecture_style=definition.id.value
        )
        report = ValidationEngine(check_config).run(request)
    except ConfigurationError as e:
        print_fatal(e, json_output)
        raise typer.Exit(2)
    except ValidationCancelledError as e:
        print_fatal(e, json_output)
        raise typer.Exit(2)

    if json_output:
        typer.echo(report_to_json(report))
    else:
        render_report(report, console)

    raise typer.Exit(report.exit_code)
