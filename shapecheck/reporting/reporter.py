"""
Reporter for building and managing run reports.

This module provides the Reporter class which turns check results into
a run report for a suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from ..assertions import AssertionResult, AssertionStatus
from .models import (
    CaseRecord,
    CaseStatus,
    RunReport,
    compute_suite_hash,
)

if TYPE_CHECKING:
    from ..schema_parsing import Suite


class Reporter:
    """
    Builds and manages run reports.

    Example:
        suite, _ = load_suite("checks/chat.yaml")
        reporter = Reporter.from_suite(suite)

        reporter.start_run()
        reporter.start_case("unread")
        reporter.complete_case("unread", Check.evaluate(data, expectation))

        report = reporter.finish_run()
        print(report.summary())
    """

    def __init__(self, report: RunReport):
        self.report = report

    @classmethod
    def from_suite(cls, suite: Suite, run_id: str | None = None) -> Reporter:
        """
        Create a Reporter from a parsed Suite.

        Args:
            suite: The parsed suite to create a report for
            run_id: Optional custom run ID (auto-generated if not provided)
        """
        report = RunReport(
            suite_name=suite.name,
            suite_version=suite.version,
            suite_hash=compute_suite_hash(suite.source),
        )

        if run_id:
            report.run_id = run_id

        for case in suite.cases:
            report.add_case(CaseRecord(
                case_id=case.id,
                data_file=case.data,
                select=case.select,
            ))

        return cls(report)

    def start_run(self) -> None:
        """Mark the run as started."""
        self.report.start()

    def finish_run(self) -> RunReport:
        """Mark the run as completed and return the final report."""
        self.report.complete()
        return self.report

    def start_case(self, case_id: str) -> CaseRecord | None:
        """Mark a case as started."""
        case = self.report.get_case(case_id)
        if case:
            case.start()
        return case

    def complete_case(self, case_id: str, result: AssertionResult) -> CaseRecord | None:
        """
        Record the outcome of a case.

        Args:
            case_id: The ID of the case
            result: The result returned by Check.evaluate()

        Returns:
            The CaseRecord, or None if case not found
        """
        case = self.report.get_case(case_id)
        if not case:
            return None

        if result.status == AssertionStatus.PASSED:
            case.complete(CaseStatus.PASSED)
        elif result.status == AssertionStatus.FAILED:
            case.failure_path = result.path
            case.failure_message = result.message
            case.expected_value = result.expected
            case.actual_value = result.actual
            case.complete(CaseStatus.FAILED)
        else:
            case.failure_path = result.path
            case.error_message = result.message
            case.complete(CaseStatus.ERROR)
        return case

    def complete_case_error(self, case_id: str, error_message: str) -> CaseRecord | None:
        """Mark a case as errored (e.g. its data file could not be read)."""
        case = self.report.get_case(case_id)
        if case:
            case.error_message = error_message
            case.complete(CaseStatus.ERROR)
        return case

    def skip_case(self, case_id: str, reason: str | None = None) -> CaseRecord | None:
        """Mark a case as skipped."""
        case = self.report.get_case(case_id)
        if case:
            if reason:
                case.failure_message = f"Skipped: {reason}"
            case.complete(CaseStatus.SKIPPED)
        return case

    def save_json(self, path: str | Path) -> None:
        """Save the report to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report.to_json())
