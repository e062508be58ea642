"""Violation counts derived from a consolidated checkstyle report."""

from __future__ import annotations

from dataclasses import dataclass

from shellcheck_runner.reports.merger import ConsolidatedReport


@dataclass(frozen=True)
class ReportSummary:
    """How widespread the violations of a run are.

    Attributes:
        files_with_violations: Distinct file names with at least one error.
        severities: Distinct severity values across all errors.
    """

    files_with_violations: int
    severities: int


def summarize(report: ConsolidatedReport) -> ReportSummary | None:
    """Count files with violations and distinct severities.

    Returns:
        The summary, or None when no file has any ``<error>`` entry.
    """
    files: set[str] = set()
    severities: set[str] = set()
    for file_el in report.files():
        for error_el in file_el.iterchildren("error"):
            files.add(file_el.get("name", ""))
            severities.add(error_el.get("severity", ""))
    if not files:
        return None
    return ReportSummary(files_with_violations=len(files), severities=len(severities))
