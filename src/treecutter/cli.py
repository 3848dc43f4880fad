"""
treecutter.cli - Command Line Interface
=======================================

This module provides the command-line interface for treecutter using Typer.

Architecture
------------
    app (main entry point)
    ├── generate   - Generate a project from a template
    └── variables  - List a template's variables and defaults

``generate`` is interactive by default: it asks for the template source if
none is given, then asks once per variable in cookiecutter.json. The
``--no-input`` flag keeps every default for scripted use.

Usage Examples
--------------
Interactive mode:
    $ treecutter generate ./templates/pylib

Remote template, defaults only:
    $ treecutter generate https://github.com/acme/pylib.git --no-input

Show variables:
    $ treecutter variables ./templates/pylib

See Also
--------
- generator.py: Core generation logic
- prompts.py: Interactive answer collection
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from treecutter import __version__
from treecutter.context import list_variables, load_config_document
from treecutter.errors import TreecutterError
from treecutter.generator import create_project
from treecutter.models import GeneratorSettings
from treecutter.prompts import QuestionaryPrompter
from treecutter.source import resolve_template


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="treecutter",
    help="Generate projects from cookiecutter-style template directories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

# Console for rich output
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]treecutter[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]Template-driven project generator[/]",
            border_style="green",
        ))
        raise typer.Exit()


def report_error(error: Exception) -> None:
    """Print a one-line diagnostic for a failed run."""
    console.print(f"[red]Error:[/] {escape(str(error))}", soft_wrap=True)


def load_settings(
    settings_path: Path | None,
    *,
    strict_input: bool = False,
) -> GeneratorSettings:
    """
    Build the run settings from an optional TOML file and CLI flags.

    Flags only ever switch behavior on, so they are applied on top of
    whatever the file says.
    """
    settings = (
        GeneratorSettings.from_toml(settings_path)
        if settings_path is not None
        else GeneratorSettings()
    )
    if strict_input:
        settings = settings.model_copy(update={"strict_input": True})
    return settings


def prompt_source() -> str:
    """Ask for the template location when it wasn't given on the command line."""
    result = questionary.text("Enter the path to the directory:").ask()

    if not result:
        raise typer.Abort()

    return result


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]treecutter[/] - template-driven project generator.

    Renders every path and file of a template directory through Jinja2,
    using the variables declared in its [cyan]cookiecutter.json[/].

    [bold]Quick Start:[/]

        treecutter generate ./my-template
    """


# =============================================================================
# Generate Command
# =============================================================================

@app.command()
def generate(
    source: Annotated[
        str | None,
        typer.Argument(
            help="Template directory or https:// git repository URL",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory to generate into (default: current directory)",
        ),
    ] = None,
    no_input: Annotated[
        bool,
        typer.Option(
            "--no-input",
            help="Don't prompt; keep every default from cookiecutter.json",
        ),
    ] = False,
    strict_input: Annotated[
        bool,
        typer.Option(
            "--strict-input",
            help="Re-ask when an answer doesn't match its default's type",
        ),
    ] = False,
    no_hooks: Annotated[
        bool,
        typer.Option(
            "--no-hooks",
            help="Skip post_gen scripts",
        ),
    ] = False,
    settings_path: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            "-s",
            help="TOML file with generator settings",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print errors",
        ),
    ] = False,
) -> None:
    """
    Generate a project from a template.

    The project is written to [cyan]<output-dir>/<template name>[/].
    Existing files there are overwritten.

    [bold]Examples:[/]

        treecutter generate ./templates/pylib

        treecutter generate https://github.com/acme/pylib.git --no-input
    """
    if source is None:
        source = prompt_source()

    try:
        settings = load_settings(settings_path, strict_input=strict_input)

        with resolve_template(source) as template:
            destination = (output_dir or Path.cwd()) / template.name
            input_source = (
                None if no_input else QuestionaryPrompter(strict=settings.strict_input)
            )
            create_project(
                template.path,
                destination,
                input_source=input_source,
                settings=settings,
                run_hooks=not no_hooks,
                verbose=not quiet,
            )
    except TreecutterError as e:
        report_error(e)
        raise typer.Exit(1)


# =============================================================================
# Variables Command
# =============================================================================

@app.command()
def variables(
    source: Annotated[
        str,
        typer.Argument(
            help="Template directory or https:// git repository URL",
        ),
    ],
    settings_path: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            "-s",
            help="TOML file with generator settings",
        ),
    ] = None,
) -> None:
    """
    List the variables a template asks for.

    Shows each top-level key of [cyan]cookiecutter.json[/] with the type
    inferred from its default.
    """
    try:
        settings = load_settings(settings_path)
        with resolve_template(source) as template:
            document = load_config_document(template.path / settings.config_filename)
    except TreecutterError as e:
        report_error(e)
        raise typer.Exit(1)

    table = Table(title=f"Variables of {template.name}")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Default", style="green")

    for variable in list_variables(document):
        table.add_row(variable.name, variable.kind.value, escape(repr(variable.default)))

    console.print(table)
