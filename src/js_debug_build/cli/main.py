import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from js_debug_build import __version__
from js_debug_build.cli.console import configure_logging, console, err_console
from js_debug_build.context import get_build_context
from js_debug_build.exceptions import BuildError
from js_debug_build.tasks import create_registry
from js_debug_build.versioning import get_version_number

__all__ = ["app"]

app = typer.Typer(
    name="js-debug-build",
    help="Build, bundle, localize and publish the js-debug extension.",
    no_args_is_help=True,
)


@app.command()
def run(
    tasks: Annotated[
        list[str] | None, typer.Argument(help="Tasks to run in order. Defaults to 'default'.")
    ] = None,
    nightly: Annotated[bool, typer.Option(help="Build the nightly flavour.")] = False,
    analyze_size: Annotated[
        bool, typer.Option("--analyze-size", help="Ask the bundler for a size report.")
    ] = False,
    root: Annotated[
        Path | None,
        typer.Option(help="Extension repository to build. Defaults to the current directory."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Run one or more build tasks."""
    configure_logging(verbose)
    names = tasks or ["default"]

    try:
        registry = create_registry()
        ctx = get_build_context(names, nightly=nightly, analyze_size=analyze_size, root=root)
        asyncio.run(registry.run(names, ctx))
    except BuildError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted.[/yellow]")
        raise typer.Exit(code=130) from None


@app.command("list")
def list_tasks() -> None:
    """List every available task."""
    table = Table(title="Tasks")
    table.add_column("Name", style="bold cyan")
    table.add_column("Description")
    for task in create_registry():
        summary = task.description.splitlines()[0] if task.description else ""
        table.add_row(task.name, summary)
    console.print(table)


@app.command()
def version() -> None:
    """Print the version a nightly build would be stamped with."""
    try:
        ctx = get_build_context()
    except BuildError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e
    console.print(f"js-debug-build {__version__}")
    console.print(f"nightly version: [bold]{get_version_number(ctx.settings.version)}[/bold]")


if __name__ == "__main__":
    app()
