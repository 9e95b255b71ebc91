"""CLI interface for oaslint using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler
from rich.markup import escape

from oaslint import __description__, __version__
from oaslint.config import load_config
from oaslint.errors import OasLintError
from oaslint.loader import is_supported, load_document
from oaslint.report import make_console, print_result
from oaslint.validation import ValidationFramework

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_FATAL = 2

app = typer.Typer(
    name="oaslint",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        typer.echo(f"oaslint version {__version__}")
        raise typer.Exit()


def _setup_logging(debug: bool, no_colors: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=make_console(no_colors, stderr=True), show_path=debug)],
        force=True,
    )


@app.command()
def main(
    files: Annotated[
        list[Path],
        typer.Argument(help="OpenAPI/Swagger documents to validate (.json, .yaml, .yml)")
    ],
    no_colors: Annotated[
        bool,
        typer.Option("--no-colors", "-n", help="Print output without colors")
    ] = False,
    print_validator_modules: Annotated[
        bool,
        typer.Option("--print-validator-modules", "-v", help="Print the rule module that produced each finding")
    ] = False,
    report_statistics: Annotated[
        bool,
        typer.Option("--report-statistics", "-s", help="Print a per-rule statistics summary")
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", "-j", help="Print results as JSON")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Rule configuration file (default: search for .validaterc)")
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging")
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
) -> None:
    """Validate API description documents against the configured rules."""
    _setup_logging(debug, no_colors)
    console = make_console(no_colors)
    logger = logging.getLogger("oaslint.cli")

    try:
        rule_config = load_config(config)
    except OasLintError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FATAL)

    framework = ValidationFramework(rule_config)
    framework.create_default_rules()

    exit_code = EXIT_OK
    results = {}

    for path in files:
        if not is_supported(path):
            console.print(f"[yellow]Warning:[/yellow] Skipping unsupported file: {escape(str(path))}")
            continue

        try:
            document = load_document(path)
            result = framework.validate(document)
        except (FileNotFoundError, OasLintError) as e:
            logger.debug(f"Validation of {path} aborted", exc_info=True)
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            exit_code = EXIT_FATAL
            continue

        if result.has_errors and exit_code == EXIT_OK:
            exit_code = EXIT_ERRORS

        if json_output:
            results[str(path)] = result.to_dict()
        else:
            print_result(
                console,
                path,
                result,
                registry=framework.registry,
                print_validator_modules=print_validator_modules,
                report_statistics=report_statistics,
            )

    if json_output:
        typer.echo(jsonlib.dumps(results, indent=2))

    raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
