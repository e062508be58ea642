"""Merge per-file checkstyle XML fragments into one consolidated report.

ShellCheck's ``-f checkstyle`` output for a single file looks like::

    <?xml version='1.0' encoding='UTF-8'?>
    <checkstyle version='4.3'>
    <file name='deploy.sh' >
    <error line='3' column='6' severity='warning' message='...' source='ShellCheck.SC2034' />
    </file>
    </checkstyle>

Each run builds a fresh ``<checkstyle version="4.3">`` root and copies
every child of every fragment root into it, in order. Diagnostics printed
before the XML declaration are ignored; output with no declaration at all
is a broken invocation and aborts the merge.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Iterable

from lxml import etree

from shellcheck_runner.core.invoker import NoSourceFiles, RawOutcome, RawResult
from shellcheck_runner.exceptions import MalformedReportError

logger = logging.getLogger(__name__)

CHECKSTYLE_VERSION = "4.3"
XML_DECLARATION = "<?xml"

_PARSER = etree.XMLParser(
    remove_blank_text=True,
    resolve_entities=False,
    no_network=True,
)


class ConsolidatedReport:
    """The merged checkstyle document for one run.

    Attributes:
        root: The ``<checkstyle>`` element owning all ``<file>`` entries.
    """

    def __init__(self) -> None:
        self.root = etree.Element("checkstyle", version=CHECKSTYLE_VERSION)

    @property
    def is_empty(self) -> bool:
        """True when no fragment contributed any node."""
        return len(self.root) == 0

    def files(self) -> list[etree._Element]:
        """The ``<file>`` elements, in merge order."""
        return list(self.root.iterchildren("file"))

    def to_bytes(self) -> bytes:
        """Serialise as UTF-8 XML with a declaration."""
        return etree.tostring(
            self.root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=True,
        )

    def write(self, destination: Path) -> Path:
        """Write the document to ``destination``, creating parent dirs."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.to_bytes())
        return destination


def parse_fragment(text: str) -> etree._Element:
    """Parse one checker output, starting at its XML declaration.

    Raises:
        MalformedReportError: If there is no declaration or the XML is not
            well formed.
    """
    start = text.find(XML_DECLARATION)
    if start < 0:
        raise MalformedReportError("Error while executing shellcheck", text)
    # lxml refuses str input that carries an encoding declaration.
    payload = text[start:].encode("utf-8")
    try:
        return etree.fromstring(payload, _PARSER)
    except etree.XMLSyntaxError as exc:
        raise MalformedReportError(f"Invalid checkstyle output ({exc})", text) from exc


def merge_into(report: ConsolidatedReport, outcome: RawOutcome) -> ConsolidatedReport:
    """Append the entries of one outcome to ``report`` and return it.

    Sentinels and empty outputs contribute nothing.
    """
    if isinstance(outcome, NoSourceFiles):
        return report
    if not isinstance(outcome, RawResult):
        raise TypeError(f"Cannot merge {type(outcome).__name__}")
    if not outcome.output.strip():
        return report
    fragment = parse_fragment(outcome.output)
    for child in fragment:
        report.root.append(copy.deepcopy(child))
    return report


def merge_all(outcomes: Iterable[RawOutcome]) -> ConsolidatedReport:
    """Merge every outcome into a fresh report, empty or not."""
    report = ConsolidatedReport()
    for outcome in outcomes:
        merge_into(report, outcome)
    return report


def merge(outcomes: Iterable[RawOutcome]) -> ConsolidatedReport | None:
    """Merge outcomes, returning None when nothing was contributed.

    None tells the pipeline there is no structured report to persist or
    summarise.
    """
    report = merge_all(outcomes)
    if report.is_empty:
        logger.debug("Merged checkstyle report is empty")
        return None
    logger.debug("Merged checkstyle report with %d file entries", len(report.files()))
    return report
