"""
contentshape CLI for template authors.

Shows the alternates a part shape receives and the template files that
would be tried for it, in lookup order.
"""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.table import Table

from contentshape.display.alternates import part_alternates
from contentshape.display.shapes import Shape
from contentshape.display.templates import candidate_templates

console = Console()

app = typer.Typer(
    name="contentshape",
    help="contentshape: display drivers and shape templates for content parts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from contentshape import __version__

        typer.echo(f"contentshape {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """contentshape CLI: inspect part alternates and template lookup."""
    from contentshape.core.config import get_settings
    from contentshape.core.logging import configure_from_settings

    configure_from_settings(get_settings())


def _display_type(display_type: str | None) -> str:
    if display_type:
        return display_type
    from contentshape.core.config import get_settings

    return get_settings().default_display_type


@app.command("alternates")
def show_alternates(
    part_type: str = typer.Argument(..., help="Part type name, e.g. BodyPart"),
    content_type: str = typer.Argument(..., help="Content type name, e.g. BlogPost"),
    display_type: str | None = typer.Option(None, "--display-type", "-d", help="Display type (default from settings)"),
    part_name: str | None = typer.Option(None, "--part-name", "-n", help="Instance name when it differs from the part type"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """List the alternates of a part shape, least specific first."""
    alternates = part_alternates(part_type, content_type, _display_type(display_type), part_name or part_type)

    if format == "json":
        console.print_json(json.dumps(alternates))
        return

    table = Table(title=f"{part_type} alternates")
    table.add_column("#", justify="right")
    table.add_column("Alternate")
    for index, alternate in enumerate(alternates, start=1):
        table.add_row(str(index), alternate)
    console.print(table)


@app.command("templates")
def show_templates(
    part_type: str = typer.Argument(..., help="Part type name, e.g. BodyPart"),
    content_type: str = typer.Argument(..., help="Content type name, e.g. BlogPost"),
    display_type: str | None = typer.Option(None, "--display-type", "-d", help="Display type (default from settings)"),
    part_name: str | None = typer.Option(None, "--part-name", "-n", help="Instance name when it differs from the part type"),
    extension: str | None = typer.Option(None, "--extension", "-e", help="Template file extension"),
) -> None:
    """List template file names in lookup order, most specific first."""
    from contentshape.core.config import get_settings

    shape = Shape()
    shape.metadata.type = part_type
    shape.metadata.alternates.extend(
        part_alternates(part_type, content_type, _display_type(display_type), part_name or part_type)
    )

    for name in candidate_templates(shape, extension or get_settings().template_extension):
        console.print(name, highlight=False)


@app.command("config")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from contentshape.core.config import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            console.print(f"CONTENTSHAPE_{key.upper()}={value}", highlight=False)
        return

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump().items()):
        table.add_row(key, str(value))
    console.print(table)


if __name__ == "__main__":
    app()
