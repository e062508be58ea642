"""Map a violation summary onto pass, warn or fail."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from shellcheck_runner.config.models import Reports
from shellcheck_runner.reports.summary import ReportSummary

PREAMBLE = "Shellcheck violations were found."


class Action(Enum):
    """What the build should do after a run."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class Outcome:
    """The decision for one run.

    Attributes:
        action: Pass silently, warn and continue, or fail the build.
        message: Human-readable description; empty for PASS.
        summary: The counts behind the decision, None when clean.
    """

    action: Action
    message: str = ""
    summary: ReportSummary | None = None


def report_url(reports: Reports) -> str | None:
    """File URL of the report to point users at: HTML first, then XML."""
    for report in (reports.html, reports.xml):
        if report.enabled:
            return Path(report.destination).absolute().as_uri()
    return None


def violation_message(reports: Reports, summary: ReportSummary) -> str:
    """Build the warning/failure text for a run with violations."""
    url = report_url(reports)
    link = f" See the report at: {url}\n" if url else "\n"
    return (
        f"{PREAMBLE}{link}"
        f"Shellcheck files with violations: {summary.files_with_violations}\n"
        f"Shellcheck violations by severity: {summary.severities}"
    )


def decide(
    summary: ReportSummary | None,
    reports: Reports,
    ignore_failures: bool,
) -> Outcome:
    """Decide the action for a run.

    Args:
        summary: Violation counts, or None when nothing was found.
        reports: Used to link the most readable enabled report.
        ignore_failures: Downgrade a failure to a warning.
    """
    if summary is None:
        return Outcome(Action.PASS)
    message = violation_message(reports, summary)
    action = Action.WARN if ignore_failures else Action.FAIL
    return Outcome(action, message, summary)
