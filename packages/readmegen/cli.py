"""readmegen - Render README files from placeholder templates.

This module provides the command-line interface: composing a README from a
template and a context, and inspecting the placeholders a template uses.
"""

from __future__ import annotations

from collections import Counter
from importlib import metadata
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from readmegen.composer import compose_readme
from readmegen.context_loader import load_context_file, parse_assignments
from readmegen.errors import ContextFileError, MalformedTokenError, MissingKeyError, TemplateError
from readmegen.models import MessageType, ReadmeContext
from readmegen.renderer import Template, read_utf8
from readmegen.templates import DUAL_LICENSE_README_TEMPLATE

# Initialize Rich consoles; rendered documents own stdout, panels go to stderr
console = Console()
err_console = Console(stderr=True)

# Initialize Typer app
app = typer.Typer(
    name="readmegen",
    help="Render README files from [bold]{{placeholder}}[/bold] templates",
    add_completion=False,
    rich_markup_mode="rich",
)


def display_message(message: str, message_type: MessageType = MessageType.INFO, title: str | None = None) -> None:
    """Display a formatted message panel.

    Args:
        message: The message text to display
        message_type: Type of message (affects styling)
        title: Optional panel title (defaults to message type)
    """
    color, default_title = message_type.value
    panel_title = title or default_title

    err_console.print(
        Panel(message, title=f"[bold {color}]{panel_title}[/bold {color}]", border_style=color, padding=(1, 2))
    )


def handle_error(error: Exception, user_message: str | None = None, title: str | None = None) -> NoReturn:
    """Handle and display errors in a user-friendly way.

    Args:
        error: The exception that occurred
        user_message: Optional user-friendly explanation (Rich markup allowed)
        title: Optional panel title

    Raises:
        typer.Exit: Always, with exit code 1
    """
    error_msg = user_message or escape(str(error))
    display_message(error_msg, MessageType.ERROR, title=title)
    raise typer.Exit(1)


def _package_version() -> str:
    try:
        return metadata.version("readmegen")
    except metadata.PackageNotFoundError:
        from readmegen import __version__

        return __version__


def _describe_validation_error(error: ValidationError) -> str:
    lines: list[str] = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "context"
        if item["type"] == "missing":
            lines.append(f"Missing value for [bold]{field}[/bold]")
        else:
            lines.append(f"Invalid value for [bold]{field}[/bold]: {escape(item['msg'])}")
    return "\n".join(lines)


def _load_template(template_path: Path | None, builtin: bool) -> Template | None:
    if builtin and template_path is not None:
        display_message(
            "Use either a TEMPLATE file or --builtin, not both.", MessageType.ERROR, title="Invalid Arguments"
        )
        raise typer.Exit(1)
    if builtin:
        return Template(DUAL_LICENSE_README_TEMPLATE)
    if template_path is None:
        return None
    return Template.from_path(template_path)


def _read_readme(readme_file: Path) -> str:
    try:
        body = read_utf8(readme_file)
    except TemplateError as e:
        handle_error(e, title="Invalid Readme")
    return body.rstrip("\r\n")


def _with_trailing_newline(text: str) -> str:
    if text.endswith("\n"):
        return text
    return f"{text}\r\n" if "\r\n" in text else f"{text}\n"


@app.command()
def version() -> None:
    """Show version information."""
    display_message(
        f"[bold cyan]readmegen[/bold cyan] version [bold green]{_package_version()}[/bold green]",
        MessageType.INFO,
        title="Version Information",
    )


@app.command()
def info() -> None:
    """Display package information."""
    info_text = f"""
[bold cyan]Package:[/bold cyan] readmegen
[bold cyan]Version:[/bold cyan] {_package_version()}
[bold cyan]Summary:[/bold cyan] Render README files from placeholder templates
[bold cyan]Placeholders:[/bold cyan] crate, readme, license
[bold cyan]Python:[/bold cyan] >=3.11
"""
    display_message(info_text.strip(), MessageType.INFO, title="Package Information")


@app.command()
def render(
    ctx: typer.Context,
    template_path: Annotated[
        Path | None,
        typer.Argument(
            metavar="TEMPLATE",
            help="Template file with {{placeholder}} tokens (omit for a plain title/body/license README)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    builtin: Annotated[
        bool,
        typer.Option("--builtin", help="Use the built-in dual Apache-2.0/MIT template", rich_help_panel="Template"),
    ] = False,
    context_file: Annotated[
        Path | None,
        typer.Option(
            "--context",
            "-c",
            help="TOML or YAML file of placeholder values",
            exists=True,
            dir_okay=False,
            rich_help_panel="Values",
        ),
    ] = None,
    assignments: Annotated[
        list[str] | None,
        typer.Option(
            "--set", "-s", help="Placeholder value as KEY=VALUE (repeatable)", rich_help_panel="Values"
        ),
    ] = None,
    crate: Annotated[
        str | None, typer.Option("--crate", help="Package name for {{crate}}", rich_help_panel="Values")
    ] = None,
    license_name: Annotated[
        str | None, typer.Option("--license", help="License for {{license}}", rich_help_panel="Values")
    ] = None,
    readme_file: Annotated[
        Path | None,
        typer.Option(
            "--readme-file",
            "-r",
            help="Markdown file used as {{readme}}",
            exists=True,
            dir_okay=False,
            rich_help_panel="Values",
        ),
    ] = None,
    no_title: Annotated[
        bool,
        typer.Option(
            "--no-title",
            help="Do not prepend '# crate'. Ignored when the template contains {{crate}}",
            rich_help_panel="Composition",
        ),
    ] = False,
    no_license: Annotated[
        bool,
        typer.Option(
            "--no-license",
            help="Do not append 'License: ...'. Ignored when the template contains {{license}}",
            rich_help_panel="Composition",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o", help="File to write (default: stdout)", dir_okay=False, rich_help_panel="Output"
        ),
    ] = None,
) -> None:
    """Render a README from a template and placeholder values.

    Values are merged in order: context file, --set assignments, then
    --crate, --license and --readme-file.

    Args:
        ctx: Typer context carrying the global options
        template_path: Template file path
        builtin: Use the built-in template
        context_file: TOML or YAML context file
        assignments: KEY=VALUE placeholder values
        crate: Package name
        license_name: License expression
        readme_file: Markdown body file
        no_title: Disable the title line
        no_license: Disable the license line
        output: Output file path
    """
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))

    try:
        template = _load_template(template_path, builtin)

        values: dict[str, str] = {}
        if context_file is not None:
            values.update(load_context_file(context_file))
        values.update(parse_assignments(assignments or []))
        if crate is not None:
            values["crate"] = crate
        if license_name is not None:
            values["license"] = license_name
        if readme_file is not None:
            values["readme"] = _read_readme(readme_file)

        readme_context = ReadmeContext.from_mapping(values)

        if verbose and template is not None:
            resolved = ", ".join(template.names) or "(none)"
            display_message(f"Placeholders: [bold cyan]{resolved}[/bold cyan]", MessageType.INFO, title="Template")

        result = compose_readme(readme_context, template, add_title=not no_title, add_license=not no_license)

    except typer.Exit:
        raise
    except MissingKeyError as e:
        handle_error(
            e, f"{escape(str(e))}\n\nSupply the value with [bold]--set KEY=VALUE[/bold] or a context file."
        )
    except MalformedTokenError as e:
        handle_error(e, title="Malformed Template")
    except TemplateError as e:
        handle_error(e, title="Invalid Template")
    except ValidationError as e:
        handle_error(e, _describe_validation_error(e), title="Invalid Values")
    except ContextFileError as e:
        handle_error(e, title="Invalid Context File")
    except ValueError as e:
        handle_error(e)
    except OSError as e:
        handle_error(e, f"Could not read input: {escape(str(e))}")

    if output is None:
        typer.echo(result)
        return

    try:
        _ = output.write_text(_with_trailing_newline(result), encoding="utf-8", newline="")
    except OSError as e:
        handle_error(e, f"Could not write {output}: {escape(str(e))}")

    display_message(
        f"README written to [bold cyan]{output}[/bold cyan]", MessageType.SUCCESS, title="Render Complete"
    )


@app.command()
def placeholders(
    template_path: Annotated[
        Path,
        typer.Argument(
            metavar="TEMPLATE", help="Template file to inspect", exists=True, dir_okay=False, resolve_path=True
        ),
    ],
) -> None:
    """List the placeholders a template uses.

    Args:
        template_path: Template file path
    """
    try:
        template = Template.from_path(template_path)
    except MalformedTokenError as e:
        handle_error(e, title="Malformed Template")
    except TemplateError as e:
        handle_error(e, title="Invalid Template")
    except OSError as e:
        handle_error(e, f"Could not read {template_path}: {escape(str(e))}")

    if not template.names:
        display_message(f"No placeholders in [bold cyan]{template_path.name}[/bold cyan]", MessageType.WARNING)
        return

    counts = Counter(placeholder.name for placeholder in template.placeholders)

    table = Table(title=f"Placeholders in {template_path.name}", show_header=True, header_style="bold cyan")
    table.add_column("Placeholder", style="cyan")
    table.add_column("Occurrences", justify="right")
    for name in template.names:
        table.add_row(name, str(counts[name]))

    console.print(table)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context, verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output")] = False
) -> None:
    """readmegen - Render README files from placeholder templates."""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)

    ctx.obj = {"verbose": verbose}


if __name__ == "__main__":
    app()
