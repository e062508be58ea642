"""Checkstyle report handling: merging, summarising and HTML rendering.

Submodules:
    merger     -- Consolidates per-file checkstyle fragments.
    summary    -- Counts files with violations and distinct severities.
    renderer   -- XSLT transform of the persisted report to HTML.
    stylesheet -- The built-in XSLT stylesheet.
"""

from shellcheck_runner.reports.merger import ConsolidatedReport, merge, merge_all, merge_into
from shellcheck_runner.reports.summary import ReportSummary, summarize

__all__ = [
    "ConsolidatedReport",
    "ReportSummary",
    "merge",
    "merge_all",
    "merge_into",
    "summarize",
]
