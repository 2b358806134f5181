"""
Reporting for Suite Runs

This package provides reporting capabilities for capturing complete
records of check suite runs.

Usage:
    from shapecheck.schema_parsing import load_suite
    from shapecheck.reporting import Reporter

    suite, _ = load_suite("checks/chat.yaml")
    reporter = Reporter.from_suite(suite)

    reporter.start_run()
    reporter.start_case("unread")
    reporter.complete_case("unread", result)

    report = reporter.finish_run()
    print(report.summary())
    reporter.save_json("reports/run.json")
"""

# Models
from .models import (
    CaseRecord,
    CaseStatus,
    RunReport,
    RunStatus,
    compute_suite_hash,
)

# Reporter
from .reporter import Reporter

__all__ = [
    # Models
    "CaseRecord",
    "CaseStatus",
    "RunReport",
    "RunStatus",
    "compute_suite_hash",
    # Reporter
    "Reporter",
]
