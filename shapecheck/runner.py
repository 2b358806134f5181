"""
Suite runner.

Runs every case of a parsed suite through the check engine and records
the outcome with a Reporter.
"""

from __future__ import annotations

import logging

from rich.console import Console

from .assertions import Check
from .reporting import CaseStatus, Reporter
from .schema_parsing import Suite, load_case_data

logger = logging.getLogger(__name__)


def run_suite(
    suite: Suite,
    verbose: bool = True,
    quiet: bool = False,
    console: Console | None = None,
) -> Reporter:
    """Execute a suite and return the reporter with results."""
    console = console or Console()
    show = verbose and not quiet

    reporter = Reporter.from_suite(suite)
    reporter.start_run()
    stopped_by: str | None = None

    if show:
        console.print(f"\n{'=' * 60}")
        console.print(f"  [bold]Running:[/bold] {suite.name}")
        console.print(f"  [bold]Cases:[/bold] {len(suite.cases)}")
        console.print(f"{'=' * 60}\n")

    for case in suite.cases:
        if stopped_by:
            reporter.skip_case(case.id, f"fail_fast after '{stopped_by}'")
            continue

        if show:
            console.print(f"▶ [bold]Case:[/bold] {case.id}")
            console.print(f"  Data: {case.data}" + (f" @ {case.select}" if case.select else ""))

        reporter.start_case(case.id)
        logger.info(f"Running case {case.id}")

        try:
            data = load_case_data(suite, case)
            record = reporter.complete_case(case.id, Check.evaluate(data, case.expect, case.required))
        except Exception as e:
            logger.warning(f"Case {case.id} errored: {type(e).__name__}: {e}")
            record = reporter.complete_case_error(case.id, f"{type(e).__name__}: {e}")

        if record.status == CaseStatus.PASSED:
            if show:
                console.print("  [green]✅ Passed[/green]")
        elif record.status == CaseStatus.FAILED:
            if not quiet:
                console.print(f"  [red]❌ Failed:[/red] {record.failure_message}")
        elif not quiet:
            console.print(f"  [red]❌ Error:[/red] {record.error_message}")

        if record.status != CaseStatus.PASSED and suite.defaults.fail_fast:
            stopped_by = case.id

        if show:
            console.print()

    reporter.finish_run()
    return reporter
