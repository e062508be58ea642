"""Task configuration: resolved models and the YAML loader.

Public API::

    from shellcheck_runner.config import load_config

    config = load_config(Path("shellcheck.yaml"), overrides={"severity": "warning"})
"""

from shellcheck_runner.config.loader import build_config, load_config, read_config_file
from shellcheck_runner.config.models import (
    SEVERITIES,
    InstallerSettings,
    ReportSettings,
    Reports,
    TaskConfiguration,
)

__all__ = [
    "SEVERITIES",
    "InstallerSettings",
    "ReportSettings",
    "Reports",
    "TaskConfiguration",
    "build_config",
    "load_config",
    "read_config_file",
]
