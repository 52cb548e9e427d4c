"""Severity-grouped reporting of check results."""

import json
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape

from .models import Severity, ValidationReport, Violation

_SEVERITY_STYLE = {
    Severity.ERROR: ("red", "Errors"),
    Severity.WARNING: ("yellow", "Warnings"),
}


def group_by_severity(violations: Iterable[Violation]) -> dict[Severity, list[Violation]]:
    """Split violations by severity, keeping their original order in each group."""
    groups: dict[Severity, list[Violation]] = {Severity.ERROR: [], Severity.WARNING: []}
    for v in violations:
        groups[v.severity].append(v)
    return groups


def exit_code_for(violations: Iterable[Violation]) -> int:
    """1 if any violation is an error, else 0. Warnings never fail a check."""
    return 1 if any(v.severity is Severity.ERROR for v in violations) else 0


def display_path(file: str, root: Path) -> str:
    """Path relative to the project root when it lies beneath it."""
    try:
        return Path(file).relative_to(root).as_posix()
    except ValueError:
        return file


def render_report(report: ValidationReport, console: Console) -> None:
    """Print errors, then warnings, then a one-line summary."""
    groups = group_by_severity(report.violations)

    console.print(
        f"[bold cyan]{escape(report.architecture_style)}[/bold cyan] check of "
        f"[blue]{escape(str(report.project_root))}[/blue] "
        f"({len(report.rules_run)} rules, {report.files_scanned} files)"
    )
    console.print()

    for severity in (Severity.ERROR, Severity.WARNING):
        items = groups[severity]
        if not items:
            continue
        color, title = _SEVERITY_STYLE[severity]
        console.print(f"[bold {color}]{title} ({len(items)})[/bold {color}]")
        for v in items:
            console.print(f"  [{color}]{escape(v.rule_id)}[/{color}]  {escape(v.message)}")
            console.print(f"    [dim]{escape(display_path(v.file, report.project_root))}[/dim]")
        console.print()

    errors = len(groups[Severity.ERROR])
    warnings = len(groups[Severity.WARNING])
    if not report.violations:
        console.print("[green]No architecture violations found.[/green]")
    elif errors:
        console.print(f"[red]{errors} error(s)[/red], [yellow]{warnings} warning(s)[/yellow]")
    else:
        console.print(f"[green]0 errors[/green], [yellow]{warnings} warning(s)[/yellow]")


def report_to_json(report: ValidationReport) -> str:
    return json.dumps(report.to_dict(), indent=2)
