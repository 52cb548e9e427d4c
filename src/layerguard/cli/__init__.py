"""CLI entry point: registers all subcommands."""

import typer

from ._common import console

app = typer.Typer(
    name="layerguard",
    help="layerguard - Architecture Boundary Checker",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Check that a source tree respects the module boundaries of an architecture style.

    [bold cyan]Examples:[/bold cyan]

      layerguard lint ./src --architecture clean

      layerguard lint . -a feature-sliced --json

      layerguard architectures --profile react
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]layerguard[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


# Import subcommands to register them
from .lint import lint as _lint  # noqa: F401, E402
from .architectures import architectures as _architectures, rules as _rules  # noqa: F401, E402
