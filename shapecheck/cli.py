#!/usr/bin/env python3
"""
shapecheck CLI - declarative checks for captured responses

Usage:
    shapecheck run <suite.yaml> [OPTIONS]
    shapecheck validate <suite.yaml>
    shapecheck --version
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .runner import run_suite
from .schema_parsing import load_suite

app = typer.Typer(
    name="shapecheck",
    help="Declarative checks for nested response data",
    add_completion=False,
)
console = Console()


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def version_callback(value: bool):
    if value:
        console.print(f"shapecheck v{__version__}")
        raise typer.Exit()


def configure_logging(level: Optional[LogLevel]) -> None:
    """Send package logs through rich when a level is requested."""
    if not level:
        return
    package_logger = logging.getLogger("shapecheck")
    package_logger.setLevel(level.value.upper())
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False))


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    shapecheck - declarative checks for nested response data

    Check captured API responses against YAML expectation suites.
    """
    pass


@app.command()
def run(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
    verbose: bool = typer.Option(
        True, "--verbose/--no-verbose", "-V",
        help="Show detailed case output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only show errors and final status"
    ),
    output: str = typer.Option(
        "text", "--output", "-o",
        help="Output format: text or json"
    ),
    report_dir: Path = typer.Option(
        Path("reports"), "--report-dir", "-r",
        help="Directory to save JSON reports"
    ),
    no_report: bool = typer.Option(
        False, "--no-report",
        help="Don't save a JSON report file"
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None, "--log-level", "-l",
        case_sensitive=False,
        help="Log level for engine diagnostics"
    ),
):
    """
    Run a check suite.

    Load every case's data, check it against its expectation,
    and generate a run report.
    """
    configure_logging(log_level)

    if not quiet:
        console.print(f"\n📄 Loading suite: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    if not quiet:
        console.print(f"   [green]✅ Valid suite:[/green] {suite.name}")

    reporter = run_suite(suite, verbose, quiet, console=console)
    report = reporter.report

    if output == "json":
        console.print_json(data=report.to_dict())
    elif not quiet:
        console.print("\n" + report.summary())

    if not no_report:
        report_path = report_dir / f"{report.run_id}.json"
        reporter.save_json(report_path)
        if not quiet:
            console.print(f"\n📁 Report saved: {report_path}")

    raise typer.Exit(code=0 if report.status.value == "passed" else 1)


@app.command()
def validate(
    suite_file: Path = typer.Argument(
        ...,
        help="Path to the suite YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a suite YAML file.

    Check the schema and report any errors without running the suite.
    """
    console.print(f"\n📄 Validating: {suite_file}")

    suite, validation = load_suite(suite_file)

    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    console.print(f"\n[green]✅ Valid suite:[/green] {suite.name}")
    console.print(f"   Cases: {len(suite.cases)}")

    table = Table(title="Cases")
    table.add_column("ID", style="cyan")
    table.add_column("Data", style="magenta")
    table.add_column("Select")
    table.add_column("Fields", justify="right")

    for case in suite.cases:
        fields = len(case.expect) if isinstance(case.expect, dict) else 0
        table.add_row(case.id, case.data, case.select or "", str(fields))

    console.print()
    console.print(table)


@app.command()
def info():
    """
    Show information about shapecheck.
    """
    console.print(f"""
[bold]shapecheck[/bold] v{__version__}

Declarative checks for nested response data

[bold]Expectation grammar:[/bold]
  • Literal values compared for equality
  • {{$check, $value, $func, $eMessage}} comparison directives
  • Index access (0, -1), forEach, some and every over arrays
  • Required-field pre-checks (scalar, object, array)

[bold]Quick Start:[/bold]
  shapecheck validate checks/suite.yaml
  shapecheck run checks/suite.yaml
""")


if __name__ == "__main__":
    app()
