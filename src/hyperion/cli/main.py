"""
Hyperion CLI - Main entry point
"""

import logging
import sys
from importlib import metadata
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hyperion.components.document import Document
from hyperion.core.config.settings import settings
from hyperion.core.exceptions.custom_exceptions import DocumentFormatError
from hyperion.core.logging.logger import get_logger
from hyperion.reader.document_reader import DocumentReader

# Runtime dependencies listed by --third-party
THIRD_PARTY_DISTRIBUTIONS = (
    "typer",
    "rich",
    "structlog",
    "pydantic",
    "pydantic-settings",
    "PyYAML",
    "Jinja2",
)

# Initialize CLI app
app = typer.Typer(
    name="hyperion",
    help="Document driven task pipelines",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# Initialize console and logger
console = Console()
logger = get_logger(__name__)


def third_party_callback(value: bool) -> None:
    """Print name and version of the runtime dependencies"""
    if value:
        for name in THIRD_PARTY_DISTRIBUTIONS:
            try:
                version = metadata.version(name)
            except metadata.PackageNotFoundError:
                version = "unknown"
            console.print(
                f"name: {name}, version: {version}", markup=False, highlight=False
            )
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", "-t", help="Only run tasks with this tag (repeatable)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    third_party: bool = typer.Option(
        False,
        "--third-party",
        callback=third_party_callback,
        is_eager=True,
        help="List the third party libraries and exit",
    ),
) -> None:
    """
    Hyperion CLI - Document driven task pipelines

    Run 'hyperion --help' for available commands.
    """
    ctx.obj = {"tags": list(tags or [])}

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.info("Verbose logging enabled")


def _combined_tags(ctx: typer.Context, tags: Optional[List[str]]) -> List[str]:
    combined: List[str] = []
    for tag in (ctx.obj or {}).get("tags", []) + list(tags or []):
        if tag not in combined:
            combined.append(tag)
    return combined


def _print_output_line(line: str) -> None:
    console.print(line, markup=False, highlight=False, soft_wrap=True)


def _read_document(file: str) -> Document:
    try:
        return DocumentReader(file).read()
    except DocumentFormatError as e:
        logger.error("Failed to read document", path=file, error_code=e.error_code)
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        for key in ("unknown", "missing"):
            if e.details.get(key):
                fields = ", ".join(e.details[key])
                console.print(f"  {key} fields: {escape(fields)}")
        raise typer.Exit(1)


@app.command()
def run(
    ctx: typer.Context,
    file: str = typer.Option(
        ..., "--file", "-f", help="Path of the YAML or JSON pipeline document"
    ),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", "-t", help="Only run tasks with this tag (repeatable)"
    ),
) -> None:
    """Read a pipeline document and run its task groups"""
    document = _read_document(file)
    selected_tags = _combined_tags(ctx, tags)
    if selected_tags:
        console.print(f"Running tasks tagged: [cyan]{', '.join(selected_tags)}[/cyan]")

    success = document.run(selected_tags, sink=_print_output_line)

    table = Table(title="Variables")
    table.add_column("Task Group", style="cyan")
    table.add_column("Variable", style="yellow")
    table.add_column("Value", style="green")
    for task_group in document.task_groups:
        for name, variable in task_group.variables.items():
            table.add_row(task_group.title, name, escape(variable.value))
    console.print(table)

    if not success:
        console.print("[red]Document processing failed[/red]")
        raise typer.Exit(1)
    console.print("[green]Document processed successfully[/green]")


@app.command()
def validate(
    file: str = typer.Option(
        ..., "--file", "-f", help="Path of the YAML or JSON pipeline document"
    ),
) -> None:
    """Read a pipeline document without running it"""
    document = _read_document(file)

    table = Table(title="Pipeline Document")
    table.add_column("Task Group", style="cyan")
    table.add_column("Parallel", style="yellow")
    table.add_column("Task", style="green")
    table.add_column("Type")
    table.add_column("Tags")
    for task_group in document.task_groups:
        for task in task_group.tasks:
            table.add_row(
                task_group.title,
                str(task_group.parallel),
                escape(task.title),
                task.kind,
                ", ".join(task.tags),
            )
    console.print(table)
    console.print(f"[green]Document is valid: {escape(file)}[/green]")


@app.command()
def version() -> None:
    """Show Hyperion version information"""
    table = Table(title="Hyperion Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Environment", style="yellow")

    python_version = "{}.{}.{}".format(*sys.version_info[:3])
    table.add_row(settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    table.add_row("Python", python_version, "Runtime")
    table.add_row("Shell", settings.SHELL, "Script tasks")

    console.print(table)


if __name__ == "__main__":
    app()
