"""Tests for HTML rendering and transient XML handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from shellcheck_runner.core.invoker import CHECKSTYLE, RawResult
from shellcheck_runner.exceptions import RenderError
from shellcheck_runner.reports.merger import merge_all
from shellcheck_runner.reports.renderer import handle_html_report, load_stylesheet, render_html
from tests.helpers import checkstyle_fragment

CUSTOM_XSL = """<?xml version="1.0"?>
<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
<xsl:output method="text"/>
<xsl:template match="checkstyle">files=<xsl:value-of select="count(file)"/></xsl:template>
</xsl:stylesheet>
"""


@pytest.fixture
def xml_report(tmp_path: Path) -> Path:
    report = merge_all([
        RawResult(Path("scripts/deploy.sh"), CHECKSTYLE, checkstyle_fragment(
            "scripts/deploy.sh",
            [(3, 6, "warning", "unused appears unused.", "SC2034"),
             (1, 1, "error", "Tips depend on target shell.", "SC2148")],
        )),
        RawResult(Path("scripts/clean.sh"), CHECKSTYLE, checkstyle_fragment("scripts/clean.sh")),
    ])
    return report.write(tmp_path / "reports" / "shellcheck.xml")


class TestLoadStylesheet:

    def test_builtin_stylesheet_compiles(self) -> None:
        assert load_stylesheet() is not None

    def test_missing_stylesheet_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RenderError):
            load_stylesheet(tmp_path / "absent.xsl")

    def test_invalid_stylesheet_raises(self, tmp_path: Path) -> None:
        sheet = tmp_path / "broken.xsl"
        sheet.write_text("<xsl:stylesheet")
        with pytest.raises(RenderError):
            load_stylesheet(sheet)

    def test_xml_that_is_not_xslt_raises(self, tmp_path: Path) -> None:
        sheet = tmp_path / "plain.xsl"
        sheet.write_text("<notes><note/></notes>")
        with pytest.raises(RenderError):
            load_stylesheet(sheet)


class TestRenderHtml:

    def test_builtin_report_lists_files_and_violations(self, xml_report: Path, tmp_path: Path) -> None:
        html_path = render_html(xml_report, tmp_path / "out" / "shellcheck.html")
        html = html_path.read_text(encoding="utf-8")
        assert "ShellCheck Audit" in html
        assert "scripts/deploy.sh" in html
        assert "scripts/clean.sh" in html
        assert "unused appears unused." in html
        assert "ShellCheck.SC2148" in html

    def test_clean_file_has_no_section(self, xml_report: Path, tmp_path: Path) -> None:
        html = render_html(xml_report, tmp_path / "shellcheck.html").read_text(encoding="utf-8")
        assert 'id="f-scripts_deploy_sh"' in html
        assert 'id="f-scripts_clean_sh"' not in html

    def test_custom_stylesheet_is_used(self, xml_report: Path, tmp_path: Path) -> None:
        sheet = tmp_path / "custom.xsl"
        sheet.write_text(CUSTOM_XSL)
        html_path = render_html(xml_report, tmp_path / "shellcheck.html", sheet)
        assert html_path.read_text().strip() == "files=2"


class TestHandleHtmlReport:

    def test_renders_and_keeps_xml(self, make_config, xml_report: Path) -> None:
        config = make_config()
        rendered = handle_html_report(config, xml_report)
        assert rendered == config.reports.html.destination
        assert rendered.is_file()
        assert xml_report.exists()

    def test_html_disabled_renders_nothing(self, make_config, xml_report: Path) -> None:
        config = make_config(html=False)
        assert handle_html_report(config, xml_report) is None
        assert not config.reports.html.destination.exists()
        assert xml_report.exists()

    def test_transient_xml_removed(self, make_config, xml_report: Path) -> None:
        config = make_config(xml=False)
        rendered = handle_html_report(config, xml_report)
        assert rendered is not None and rendered.is_file()
        assert not xml_report.exists()

    def test_missing_custom_stylesheet_fails(self, make_config, xml_report: Path, tmp_path: Path) -> None:
        config = make_config(stylesheet=tmp_path / "nowhere.xsl")
        with pytest.raises(RenderError):
            handle_html_report(config, xml_report)
