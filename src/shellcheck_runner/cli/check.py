"""``shellcheck-runner check [SOURCES]...`` -- Check shell scripts and gate.

Every option overrides the matching key of ``--config``; anything left
unset falls back to the file, then to the built-in defaults.

Exit Codes:
    0 -- No violations, or violations with ``--ignore-failures``.
    1 -- Violations were found.
    2 -- ShellCheck, docker, report or configuration failure.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from shellcheck_runner.cli.output import (
    print_error,
    print_run_result,
    print_threshold_violation,
    print_violations,
)
from shellcheck_runner.config import SEVERITIES, load_config
from shellcheck_runner.core.pipeline import invoke
from shellcheck_runner.exceptions import ShellcheckRunnerError, ThresholdViolation

_PATH = click.Path(path_type=Path, resolve_path=True)


def _report_override(enabled: bool | None, stylesheet: Path | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if enabled is not None:
        data["enabled"] = enabled
    if stylesheet is not None:
        data["stylesheet"] = stylesheet
    return data


def build_overrides(**options: Any) -> dict[str, Any]:
    """Translate CLI options into a configuration override mapping.

    Options left at None (or empty for multi-value options) are dropped so
    the configuration file keeps precedence over built-in defaults.
    """
    overrides: dict[str, Any] = {}
    simple = (
        "working_dir", "reports_dir", "temporary_dir", "shellcheck_binary",
        "use_docker", "shellcheck_version", "docker_image", "severity",
        "additional_arguments", "ignore_failures", "show_violations",
    )
    for key in simple:
        if options.get(key) is not None:
            overrides[key] = options[key]
    for key in ("sources", "source_files", "exclude_errors", "accepted_exit_codes"):
        if options.get(key):
            overrides[key] = list(options[key])

    reports = {
        "xml": _report_override(options.get("xml")),
        "html": _report_override(options.get("html"), options.get("stylesheet")),
        "txt": _report_override(options.get("txt")),
    }
    reports = {kind: data for kind, data in reports.items() if data}
    if reports:
        overrides["reports"] = reports
    if options.get("install") is not None:
        overrides["installer"] = {"enabled": options["install"]}
    return overrides


@click.command("check")
@click.argument("sources", nargs=-1, type=click.Path(exists=True, path_type=Path, resolve_path=True))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="YAML task configuration file.")
@click.option("--file", "-f", "source_files", multiple=True, type=_PATH,
              help="Explicit script to check (repeatable); disables name filtering.")
@click.option("--working-dir", type=click.Path(file_okay=False, path_type=Path, resolve_path=True),
              default=None, help="Directory ShellCheck runs in (default: config dir or cwd).")
@click.option("--reports-dir", type=_PATH, default=None,
              help="Report directory (default: build/reports/shellcheck).")
@click.option("--temporary-dir", type=_PATH, default=None,
              help="Scratch directory for reports that are not kept.")
@click.option("--docker/--no-docker", "use_docker", default=None,
              help="Run ShellCheck inside a disposable docker container.")
@click.option("--binary", "shellcheck_binary", type=str, default=None,
              help="Local ShellCheck binary (default: shellcheck).")
@click.option("--shellcheck-version", type=str, default=None,
              help="Docker image tag / release to install (default: v0.7.1).")
@click.option("--docker-image", type=str, default=None,
              help="Docker image without tag (default: koalaman/shellcheck-alpine).")
@click.option("--severity", type=click.Choice(list(SEVERITIES)), default=None,
              help="Minimum severity to report (default: style).")
@click.option("--exclude", "exclude_errors", multiple=True, type=str,
              help="ShellCheck code to exclude, e.g. SC2034 (repeatable).")
@click.option("--args", "additional_arguments", type=str, default=None,
              help="Extra raw arguments passed to ShellCheck.")
@click.option("--accept-exit-code", "accepted_exit_codes", multiple=True, type=int,
              help="ShellCheck exit code treated as success (repeatable, default: 0).")
@click.option("--ignore-failures/--no-ignore-failures", default=None,
              help="Warn instead of failing when violations are found.")
@click.option("--show-violations/--hide-violations", default=None,
              help="Echo the human-readable report to the console.")
@click.option("--xml/--no-xml", default=None, help="Keep the checkstyle XML report.")
@click.option("--html/--no-html", default=None, help="Render the HTML report.")
@click.option("--txt/--no-txt", default=None, help="Write the text report.")
@click.option("--stylesheet", type=click.Path(path_type=Path, resolve_path=True), default=None,
              help="Custom XSLT stylesheet for the HTML report.")
@click.option("--install/--no-install", default=None,
              help="Download ShellCheck if the local binary is missing.")
def check_command(config_path: Path | None, **options: Any) -> None:
    """Check shell scripts with ShellCheck and fail on violations.

    SOURCES are files or directories; directories are searched for
    *.sh, *.bash, *.ksh and bash dotfiles.
    """
    try:
        config = load_config(config_path, overrides=build_overrides(**options))
        result = invoke(config, echo=print_violations)
    except ThresholdViolation as exc:
        print_threshold_violation(exc)
        sys.exit(1)
    except ShellcheckRunnerError as exc:
        print_error(exc)
        sys.exit(2)

    print_run_result(result)
    sys.exit(0)
