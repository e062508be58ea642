"""One ShellCheck run, from source files to a pass/warn/fail outcome.

Steps, all on the calling thread:

1. Install ShellCheck when a local binary is needed and missing.
2. Enter the execution environment (a docker container, or the host).
3. Check every file in ``checkstyle`` format and merge the outputs. An empty
   merge ends the run here: nothing is written and the run passes.
4. Persist the merged XML, produce the text report and console echo from a
   second ``tty`` pass, render HTML and drop the XML if it was transient.
5. Summarise the merged document and apply the outcome policy.

Usage::

    from shellcheck_runner.config import load_config
    from shellcheck_runner.core.pipeline import invoke

    result = invoke(load_config(Path("shellcheck.yaml")))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from shellcheck_runner.config.models import TaskConfiguration
from shellcheck_runner.core import process
from shellcheck_runner.core.environment import ExecutionEnvironment, isolated_environment
from shellcheck_runner.core.installer import maybe_install
from shellcheck_runner.core.invoker import CHECKSTYLE, TTY, InvocationDriver, join_text
from shellcheck_runner.core.outcome import Action, Outcome, decide
from shellcheck_runner.core.process import CommandRunner
from shellcheck_runner.exceptions import (
    EnvironmentLifecycleError,
    ShellcheckRunnerError,
    ThresholdViolation,
)
from shellcheck_runner.reports.merger import merge
from shellcheck_runner.reports.renderer import handle_html_report
from shellcheck_runner.reports.summary import summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """What a completed run produced.

    Attributes:
        outcome: The pass/warn decision (failures raise instead).
        xml_report: The persisted XML report, if it was kept.
        html_report: The rendered HTML report, if requested.
        txt_report: The text report, if requested.
    """

    outcome: Outcome
    xml_report: Path | None = None
    html_report: Path | None = None
    txt_report: Path | None = None


def _write_text(destination: Path, text: str) -> Path:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ShellcheckRunnerError(f"Error while handling Shellcheck tty report: {exc}") from exc
    return destination


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Cannot remove transient report %s: %s", path, exc)


def _handle_text_report(
    config: TaskConfiguration,
    driver: InvocationDriver,
    echo: Callable[[str], None],
) -> Path | None:
    text: str | None = None
    written = None
    if config.reports.txt.enabled:
        text = join_text(driver.run(TTY))
        written = _write_text(config.reports.txt.destination, text)
    if config.show_violations:
        if text is None:
            text = join_text(driver.run(TTY))
        echo(text)
    return written


def _run(
    config: TaskConfiguration,
    environment: ExecutionEnvironment,
    runner: CommandRunner,
    echo: Callable[[str], None],
) -> RunResult:
    driver = InvocationDriver(config, environment, runner)

    outputs = driver.run(CHECKSTYLE)
    logger.debug("Shellcheck output: %s", outputs)
    report = merge(outputs)
    if report is None:
        return RunResult(Outcome(Action.PASS))

    xml_path = config.report_destination(config.reports.xml)
    try:
        report.write(xml_path)
    except OSError as exc:
        raise ShellcheckRunnerError(
            f"Error while handling Shellcheck checkstyle report: {exc}"
        ) from exc

    try:
        txt_path = _handle_text_report(config, driver, echo)
        html_path = handle_html_report(config, xml_path)
    finally:
        if not config.reports.xml.enabled:
            _discard(xml_path)

    outcome = decide(summarize(report), config.reports, config.ignore_failures)
    if outcome.action is Action.FAIL:
        raise ThresholdViolation(outcome.message, outcome.summary)
    if outcome.action is Action.WARN:
        logger.warning(outcome.message)

    return RunResult(
        outcome=outcome,
        xml_report=xml_path if config.reports.xml.enabled else None,
        html_report=html_path,
        txt_report=txt_path,
    )


def invoke(
    config: TaskConfiguration,
    runner: CommandRunner | None = None,
    echo: Callable[[str], None] | None = None,
) -> RunResult:
    """Run ShellCheck over the configured sources and apply the policy.

    Args:
        config: The resolved task configuration.
        runner: Command runner; ``process.run`` when None.
        echo: Receives the human-readable report when ``show_violations``
            is set. Defaults to logging it at INFO level.

    Returns:
        The run result for a passing or warning run.

    Raises:
        ThresholdViolation: Violations were found and are not ignored.
        EnvironmentLifecycleError: The container failed to start or stop.
            After a completed run its ``outcome`` holds the ``RunResult``.
        ShellcheckRunnerError: Any other technical failure.
    """
    if runner is None:
        runner = process.run
    if echo is None:
        echo = logger.info

    installed = maybe_install(config)
    if installed is not None:
        config = replace(config, shellcheck_binary=str(installed))

    result: RunResult | None = None
    try:
        with isolated_environment(config, runner) as environment:
            result = _run(config, environment, runner, echo)
    except EnvironmentLifecycleError as exc:
        if result is not None:
            exc.outcome = result
        raise
    return result
