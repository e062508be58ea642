"""Tests for the pass/warn/fail outcome policy."""

from __future__ import annotations

from dataclasses import replace

from shellcheck_runner.core.outcome import Action, decide, report_url, violation_message
from shellcheck_runner.reports.summary import ReportSummary


class TestDecide:

    def test_no_summary_passes_silently(self, make_config) -> None:
        outcome = decide(None, make_config().reports, ignore_failures=False)
        assert outcome.action is Action.PASS
        assert outcome.message == ""

    def test_violations_fail_by_default(self, make_config) -> None:
        outcome = decide(ReportSummary(2, 3), make_config().reports, ignore_failures=False)
        assert outcome.action is Action.FAIL
        assert "Shellcheck files with violations: 2" in outcome.message
        assert "Shellcheck violations by severity: 3" in outcome.message

    def test_ignore_failures_downgrades_to_warning(self, make_config) -> None:
        summary = ReportSummary(1, 1)
        outcome = decide(summary, make_config().reports, ignore_failures=True)
        assert outcome.action is Action.WARN
        assert outcome.summary == summary


class TestMessage:

    def test_links_html_report_first(self, make_config) -> None:
        reports = make_config().reports
        message = violation_message(reports, ReportSummary(1, 1))
        assert message.startswith("Shellcheck violations were found. See the report at: file://")
        assert "shellcheck.html" in message

    def test_falls_back_to_xml_report(self, make_config) -> None:
        reports = make_config(html=False).reports
        assert report_url(reports).endswith("shellcheck.xml")

    def test_no_link_without_html_or_xml(self, make_config) -> None:
        reports = make_config(html=False, xml=False).reports
        assert report_url(reports) is None
        message = violation_message(reports, ReportSummary(1, 2))
        assert message == (
            "Shellcheck violations were found.\n"
            "Shellcheck files with violations: 1\n"
            "Shellcheck violations by severity: 2"
        )

    def test_text_report_is_never_linked(self, make_config) -> None:
        reports = make_config(html=False, xml=False).reports
        reports = replace(reports, txt=replace(reports.txt, enabled=True))
        assert report_url(reports) is None
