"""Text reporting of validation results with rich."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from oaslint.models import Finding, ValidationResult
from oaslint.validation import RuleRegistry

_SECTION_STYLES = {
    "errors": "bold red",
    "warnings": "bold yellow",
}


def make_console(no_colors: bool = False, stderr: bool = False) -> Console:
    """Console for report output; ``no_colors`` strips every ANSI sequence."""
    if no_colors:
        return Console(color_system=None, highlight=False, soft_wrap=True, stderr=stderr)
    return Console(highlight=False, soft_wrap=True, stderr=stderr)


def _print_findings(console: Console, section: str, findings: list[Finding],
                    registry: RuleRegistry | None, print_validator_modules: bool) -> None:
    style = _SECTION_STYLES[section]
    console.print(f"\n[{style}]{section}[/{style}]\n")

    for finding in findings:
        console.print(f"  Message :   {escape(finding.message)}")
        console.print(f"  Path    :   {escape(finding.location)}")
        if print_validator_modules:
            rule = registry.get(finding.rule) if registry is not None else None
            module = rule.module if rule is not None else finding.rule
            console.print(f"  [dim]Validator: {escape(module)}[/dim]")
        console.print()


def print_statistics(console: Console, result: ValidationResult) -> None:
    """Print counts and per-rule percentage shares."""
    console.print("\n[bold cyan]statistics[/bold cyan]\n")
    console.print(f"  Total number of errors   : {len(result.errors)}")
    console.print(f"  Total number of warnings : {len(result.warnings)}")
    console.print()

    for stat in result.statistics:
        console.print(f"  {stat.count} {stat.percentage}% : {escape(stat.rule)}")


def print_result(
    console: Console,
    path: Path | str,
    result: ValidationResult,
    registry: RuleRegistry | None = None,
    print_validator_modules: bool = False,
    report_statistics: bool = False,
) -> None:
    """Print one file's result: errors, then warnings, then diagnostics."""
    console.print(f"\n[underline]{escape(str(path))}[/underline]")

    if not result.errors and not result.warnings:
        console.print("\n[green]No errors or warnings found.[/green]")
    if result.errors:
        _print_findings(console, "errors", result.errors, registry, print_validator_modules)
    if result.warnings:
        _print_findings(console, "warnings", result.warnings, registry, print_validator_modules)

    if result.diagnostics:
        console.print("\n[magenta]diagnostics[/magenta]\n")
        for diagnostic in result.diagnostics:
            console.print(f"  {escape(str(diagnostic))}")

    if report_statistics:
        print_statistics(console, result)
