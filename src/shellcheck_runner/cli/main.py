"""shellcheck-runner CLI: run ShellCheck over shell scripts and gate builds.

Entry point for the ``shellcheck-runner`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    check   -- Check shell scripts, write reports, fail on violations.
    install -- Download the configured ShellCheck release.

Usage::

    shellcheck-runner check scripts/
    shellcheck-runner check --docker --severity warning scripts/
    shellcheck-runner check --config shellcheck.yaml
    shellcheck-runner install --shellcheck-version v0.9.0
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from shellcheck_runner import __version__
from shellcheck_runner.cli.check import check_command
from shellcheck_runner.cli.install_cmd import install_command


def configure_logging(verbosity: int) -> None:
    """Route log records to stderr through Rich.

    ``-v`` shows INFO, ``-vv`` shows DEBUG (including every command line).
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """shellcheck-runner: ShellCheck reports and build gating for shell scripts.

    Runs ShellCheck once per script (locally or in a disposable docker
    container), merges the results into a checkstyle XML report, renders
    HTML and text reports, and fails when violations are found.
    """
    configure_logging(verbose)


cli.add_command(check_command)
cli.add_command(install_command)
