"""Main CLI entry point."""

import logging
import sys
from typing import List, Optional

import rich_click as click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from wirebind import __version__
from wirebind.compiler.ast_nodes import BindDirective, DomAttribute, EventDirective
from wirebind.compiler.build import CompileResult, compile_attributes
from wirebind.compiler.exceptions import DirectiveSyntaxError
from wirebind.config import CompilerConfig, load_config

console = Console()
err_console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'wirebind --help' for more information."
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_COMMANDS_PANEL_BOX = None
click.rich_click.STYLE_OPTIONS_PANEL_BOX = None

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "wirebind": [
        {
            "name": "Commands",
            "commands": ["compile", "check"],
        }
    ]
}


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _read_source(source: str) -> str:
    if source == "-":
        return click.get_text_stream("stdin").read()
    return source


def _build_config(
    config_path: Optional[str], file_path: Optional[str], line: int, column: int
) -> CompilerConfig:
    try:
        options = load_config(config_path)
    except Exception as e:
        raise click.BadParameter(f"Could not load config: {e}", param_hint="--config")
    try:
        return CompilerConfig(**options, file_path=file_path or "", line=line, column=column)
    except (TypeError, ValueError) as e:
        raise click.BadParameter(f"Invalid config: {e}", param_hint="--config")


def _compile(source: str, config: CompilerConfig) -> CompileResult:
    try:
        return compile_attributes(_read_source(source), config)
    except DirectiveSyntaxError as e:
        # Delimiter-level errors abort the whole list
        return CompileResult(errors=[e])


def _report(errors: List[DirectiveSyntaxError]) -> None:
    for err in errors:
        err_console.print(
            f"[bold red]error[/] [dim]{type(err).__name__}[/] {escape(str(err))}",
            soft_wrap=True,
            highlight=False,
        )
    noun = "error" if len(errors) == 1 else "errors"
    err_console.print(f"❌ {len(errors)} {noun}", soft_wrap=True)


def _location_options(fn):
    fn = click.option("--column", default=0, type=int, help="Column of the list in its template")(fn)
    fn = click.option("--line", default=1, type=int, help="Line of the list in its template")(fn)
    fn = click.option("--file", "file_path", default=None, help="Template path used in diagnostics")(fn)
    fn = click.option(
        "--config",
        "config_path",
        default=None,
        help="Path to wirebind.config.py (default: ./wirebind.config.py)",
    )(fn)
    return fn


@click.group(
    help=f"""
[bold white on cyan] wirebind [/] [bold cyan]v{__version__}[/] Attribute directive compiler.

Run [bold cyan]wirebind compile "(value=name, on:click=handler)"[/] to print the generated binding code.
Run [bold cyan]wirebind check SOURCE[/] to validate an attribute list.

[dim]SOURCE is an attribute list, or '-' to read it from stdin.[/dim]
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log compiler pipeline steps")
def cli(verbose: bool) -> None:
    _configure_logging(verbose)


@cli.command(name="compile")
@click.argument("source")
@_location_options
@click.option("--plain", is_flag=True, help="Print source without syntax highlighting")
def compile_command(
    source: str,
    config_path: Optional[str],
    file_path: Optional[str],
    line: int,
    column: int,
    plain: bool,
) -> None:
    """Compile an attribute list and print the generated Python."""
    config = _build_config(config_path, file_path, line, column)
    result = _compile(source, config)

    if not result.ok:
        _report(result.errors)
        sys.exit(1)

    if plain:
        click.echo(result.source)
    else:
        console.print(Syntax(result.source, "python", word_wrap=True))


@cli.command()
@click.argument("source")
@_location_options
def check(
    source: str,
    config_path: Optional[str],
    file_path: Optional[str],
    line: int,
    column: int,
) -> None:
    """Validate an attribute list and summarise each directive."""
    config = _build_config(config_path, file_path, line, column)
    result = _compile(source, config)

    if result.lowered:
        table = Table(title="Attributes", show_lines=False)
        table.add_column("#", style="dim")
        table.add_column("Form", style="cyan")
        table.add_column("Target")
        table.add_column("Expression", style="green")
        table.add_column("Details", style="dim")
        for i, group in enumerate(result.lowered):
            ty = group.attribute.ty
            details = ""
            if isinstance(ty, DomAttribute):
                target = str(ty.name)
                details = "reactive"
            elif isinstance(ty, EventDirective):
                target = ty.event
                details = "once"
            elif isinstance(ty, BindDirective):
                target = ty.prop
                if group.descriptor:
                    details = f"{group.descriptor.event} / {group.descriptor.kind.python_type.__name__}"
            else:
                target = "ref"
                details = "once"
            table.add_row(str(i), group.kind, target, group.attribute.expr_source, details)
        console.print(table)

    if not result.ok:
        _report(result.errors)
        sys.exit(1)

    console.print(f"✅ {len(result.lowered)} attributes OK", soft_wrap=True)


if __name__ == "__main__":
    cli()
