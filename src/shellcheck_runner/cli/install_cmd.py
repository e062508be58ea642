"""``shellcheck-runner install`` -- Download a ShellCheck release.

Installs the configured version under ``<working_dir>/.shellcheck/`` (or
the configured ``installer.install_dir``) so that later ``check`` runs can
use it without docker.

Exit Codes:
    0 -- Installed, or already present.
    2 -- Download, unpack or configuration failure.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from shellcheck_runner.cli.output import console, print_error
from shellcheck_runner.config import load_config
from shellcheck_runner.core.installer import install
from shellcheck_runner.exceptions import ShellcheckRunnerError


@click.command("install")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="YAML task configuration file.")
@click.option("--shellcheck-version", type=str, default=None,
              help="Release to install (default: v0.7.1).")
@click.option("--install-dir", type=click.Path(file_okay=False, path_type=Path, resolve_path=True),
              default=None, help="Directory releases are unpacked into.")
@click.option("--base-url", type=str, default=None, help="Release download root.")
def install_command(
    config_path: Path | None,
    shellcheck_version: str | None,
    install_dir: Path | None,
    base_url: str | None,
) -> None:
    """Download and unpack the configured ShellCheck release."""
    overrides: dict[str, Any] = {}
    if shellcheck_version is not None:
        overrides["shellcheck_version"] = shellcheck_version
    installer: dict[str, Any] = {"enabled": True}
    if install_dir is not None:
        installer["install_dir"] = install_dir
    if base_url is not None:
        installer["base_url"] = base_url
    overrides["installer"] = installer

    try:
        config = load_config(config_path, overrides=overrides)
        binary = install(config)
    except ShellcheckRunnerError as exc:
        print_error(exc)
        sys.exit(2)

    console.print(f"ShellCheck {config.shellcheck_version} available at:", soft_wrap=True)
    console.print(str(binary), markup=False, highlight=False, soft_wrap=True)
