"""Registry listing commands."""

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..architecture.registry import DEFAULT_REGISTRY
from ..exceptions import UnknownArchitectureError
from ..rules.selector import get_rules_for_architecture
from . import app
from ._common import console, print_fatal


@app.command()
def architectures(
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Only styles offered for this stack (e.g. react, java, dotnet)",
    ),
):
    """List the supported architecture styles."""
    if profile:
        definitions = DEFAULT_REGISTRY.list_definitions_for_profile(profile)
    else:
        definitions = DEFAULT_REGISTRY.list_definitions()

    if not definitions:
        console.print(f"[yellow]No architecture styles for profile '{escape(profile or '')}'.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Architecture Styles", show_lines=False)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Layers", style="dim")
    table.add_column("Stacks", style="dim")

    for definition in definitions:
        table.add_row(
            definition.id.value,
            escape(definition.name),
            ", ".join(definition.layer_names),
            ", ".join(definition.supported_profiles),
        )
    console.print(table)


@app.command()
def rules(
    style: str = typer.Argument(..., help="Architecture style id"),
):
    """List the built-in rules a style runs, in evaluation order."""
    try:
        definition = DEFAULT_REGISTRY.require_definition(style)
    except UnknownArchitectureError as e:
        print_fatal(e)
        raise typer.Exit(2)

    console.print(f"[bold cyan]{escape(definition.name)}[/bold cyan] ({definition.id.value})")
    for rule in get_rules_for_architecture(definition.id.value):
        color = "red" if rule.severity.value == "error" else "yellow"
        console.print(
            f"  [{color}]{rule.severity.value:<7}[/{color}] {rule.id}  [dim]{escape(rule.applies_to)}[/dim]"
        )
        console.print(f"          {escape(rule.description)}")
