"""Render the persisted checkstyle report to HTML via XSLT.

The HTML report is a pure function of the XML report on disk: the
consolidated document is written first, then transformed with either the
user's stylesheet or the built-in one. When the XML report itself was not
requested, the file only existed to feed this step and is removed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from shellcheck_runner.config.models import TaskConfiguration
from shellcheck_runner.exceptions import RenderError
from shellcheck_runner.reports.stylesheet import DEFAULT_STYLESHEET

logger = logging.getLogger(__name__)


def load_stylesheet(path: Path | None = None) -> etree.XSLT:
    """Compile a stylesheet, the built-in one when ``path`` is None.

    Raises:
        RenderError: If the file is missing, unreadable or not valid XSLT.
    """
    try:
        if path is None:
            document = etree.fromstring(DEFAULT_STYLESHEET.encode("utf-8"))
        else:
            document = etree.parse(str(path))
        return etree.XSLT(document)
    except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as exc:
        source = path or "built-in stylesheet"
        raise RenderError(f"Error while loading Shellcheck stylesheet {source}: {exc}") from exc


def render_html(xml_path: Path, html_path: Path, stylesheet: Path | None = None) -> Path:
    """Transform the XML report at ``xml_path`` into ``html_path``.

    Raises:
        RenderError: On stylesheet or transform failure.
    """
    transform = load_stylesheet(stylesheet)
    try:
        result = transform(etree.parse(str(xml_path)))
    except (OSError, etree.XMLSyntaxError, etree.XSLTApplyError) as exc:
        raise RenderError(f"Error while handling Shellcheck html report: {exc}") from exc

    html_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        html_path.write_bytes(bytes(result))
    except OSError as exc:
        raise RenderError(f"Cannot write html report {html_path}: {exc}") from exc
    logger.debug("Wrote html report %s", html_path)
    return html_path


def handle_html_report(config: TaskConfiguration, xml_path: Path) -> Path | None:
    """Render HTML if requested, then drop a transient XML report.

    Args:
        config: Supplies the html/xml report settings.
        xml_path: Where the consolidated document was persisted.

    Returns:
        The HTML report path, or None if HTML was not requested.
    """
    html = config.reports.html
    rendered = None
    if html.enabled:
        rendered = render_html(xml_path, html.destination, html.stylesheet)
    if not config.reports.xml.enabled:
        try:
            xml_path.unlink(missing_ok=True)
        except OSError as exc:
            raise RenderError(f"Cannot remove transient report {xml_path}: {exc}") from exc
        logger.debug("Removed transient xml report %s", xml_path)
    return rendered
