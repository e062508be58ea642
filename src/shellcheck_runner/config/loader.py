"""Load a ``TaskConfiguration`` from YAML plus command-line overrides.

The YAML file is a flat mapping of task options with two nested sections::

    working_dir: .
    sources: [scripts, bin/deploy.sh]
    use_docker: true
    severity: warning
    exclude_errors: [SC2034]
    reports_dir: build/reports/shellcheck
    reports:
      html:
        stylesheet: config/shellcheck.xsl
      txt:
        enabled: false
    installer:
      enabled: true

Overrides have the same shape and win over the file. Relative paths are
resolved against ``working_dir``, which itself is resolved against the
current directory.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from shellcheck_runner.config.models import (
    DEFAULT_DOCKER_IMAGE,
    DEFAULT_INSTALLER_URL,
    DEFAULT_SHELLCHECK_VERSION,
    REPORT_KINDS,
    SEVERITIES,
    InstallerSettings,
    ReportSettings,
    Reports,
    TaskConfiguration,
)
from shellcheck_runner.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TOP_LEVEL_KEYS = frozenset({
    "working_dir", "temporary_dir", "reports_dir", "reports", "installer",
    "source_files", "sources", "shellcheck_binary", "use_docker",
    "shellcheck_version", "docker_image", "severity", "exclude_errors",
    "additional_arguments", "ignore_failures", "show_violations",
    "accepted_exit_codes",
})
_REPORT_KEYS = frozenset({"enabled", "destination", "stylesheet"})
_INSTALLER_KEYS = frozenset({"enabled", "base_url", "install_dir"})


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML configuration file into a mapping.

    Args:
        path: The YAML file to read.

    Returns:
        The parsed mapping. An empty file yields an empty dict.

    Raises:
        ConfigurationError: If the file is unreadable, not valid YAML, or
            its top level is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {path} must be a mapping")
    return data


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _check_keys(data: Mapping[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown {where} option(s): {', '.join(unknown)}")


def _expect(value: Any, kind: type | tuple[type, ...], key: str) -> Any:
    # bool is an int subclass; reject it where a number is expected.
    if isinstance(value, bool) and kind is int:
        raise ConfigurationError(f"'{key}' must be int, got bool")
    if not isinstance(value, kind):
        name = kind.__name__ if isinstance(kind, type) else "/".join(k.__name__ for k in kind)
        raise ConfigurationError(f"'{key}' must be {name}, got {type(value).__name__}")
    return value


def _path(value: Any, key: str, base: Path) -> Path:
    raw = Path(_expect(value, (str, Path), key)).expanduser()
    return raw if raw.is_absolute() else base / raw


def _path_list(value: Any, key: str, base: Path) -> tuple[Path, ...]:
    if isinstance(value, (str, Path)):
        value = [value]
    items = _expect(value, (list, tuple), key)
    return tuple(_path(item, key, base) for item in items)


def _report(kind: str, data: Mapping[str, Any], reports_dir: Path, base: Path) -> ReportSettings:
    _check_keys(data, _REPORT_KEYS, f"reports.{kind}")
    enabled = _expect(data.get("enabled", True), bool, f"reports.{kind}.enabled")
    if "destination" in data:
        destination = _path(data["destination"], f"reports.{kind}.destination", base)
    else:
        destination = reports_dir / f"shellcheck.{kind}"
    stylesheet = None
    if data.get("stylesheet") is not None:
        if kind != "html":
            raise ConfigurationError(f"'stylesheet' only applies to the html report, not {kind}")
        stylesheet = _path(data["stylesheet"], "reports.html.stylesheet", base)
    return ReportSettings(enabled=enabled, destination=destination, stylesheet=stylesheet)


def _installer(data: Mapping[str, Any], base: Path) -> InstallerSettings:
    _check_keys(data, _INSTALLER_KEYS, "installer")
    install_dir = data.get("install_dir")
    return InstallerSettings(
        enabled=_expect(data.get("enabled", False), bool, "installer.enabled"),
        base_url=_expect(data.get("base_url", DEFAULT_INSTALLER_URL), str, "installer.base_url"),
        install_dir=_path(install_dir, "installer.install_dir", base) if install_dir else None,
    )


def build_config(data: Mapping[str, Any], cwd: Path | None = None) -> TaskConfiguration:
    """Validate a raw mapping and resolve it into a ``TaskConfiguration``.

    Args:
        data: Parsed YAML merged with any overrides.
        cwd: Directory a relative ``working_dir`` is resolved against.
            Defaults to the process working directory.

    Returns:
        The resolved, immutable configuration.

    Raises:
        ConfigurationError: On unknown keys, wrong value types, or an
            unsupported severity.
    """
    _check_keys(data, _TOP_LEVEL_KEYS, "task")
    root = (cwd or Path.cwd()).resolve()
    working_dir = _path(data.get("working_dir", "."), "working_dir", root).resolve()

    reports_dir = _path(data.get("reports_dir", "build/reports/shellcheck"), "reports_dir", working_dir)
    temporary_dir = _path(data.get("temporary_dir", "build/tmp/shellcheck"), "temporary_dir", working_dir)

    reports_data = _expect(data.get("reports") or {}, Mapping, "reports")
    _check_keys(reports_data, frozenset(REPORT_KINDS), "reports")
    built = {
        kind: _report(kind, _expect(reports_data.get(kind) or {}, Mapping, f"reports.{kind}"),
                      reports_dir, working_dir)
        for kind in REPORT_KINDS
    }

    severity = _expect(data.get("severity", "style"), str, "severity").lower()
    if severity not in SEVERITIES:
        raise ConfigurationError(
            f"Unsupported severity '{severity}' (expected one of: {', '.join(SEVERITIES)})"
        )

    source_files = None
    if data.get("source_files") is not None:
        source_files = _path_list(data["source_files"], "source_files", working_dir)

    exclude = data.get("exclude_errors") or ()
    if isinstance(exclude, str):
        exclude = [code.strip() for code in exclude.split(",") if code.strip()]
    exclude_errors = tuple(_expect(code, str, "exclude_errors") for code in _expect(exclude, (list, tuple), "exclude_errors"))

    codes = _expect(data.get("accepted_exit_codes", [0]), (list, tuple), "accepted_exit_codes")
    accepted_exit_codes = tuple(_expect(code, int, "accepted_exit_codes") for code in codes)

    config = TaskConfiguration(
        working_dir=working_dir,
        temporary_dir=temporary_dir,
        reports=Reports(**built),
        source_files=source_files,
        sources=_path_list(data.get("sources") or [], "sources", working_dir),
        shellcheck_binary=_expect(data.get("shellcheck_binary", "shellcheck"), str, "shellcheck_binary"),
        use_docker=_expect(data.get("use_docker", False), bool, "use_docker"),
        shellcheck_version=_expect(data.get("shellcheck_version", DEFAULT_SHELLCHECK_VERSION), str, "shellcheck_version"),
        docker_image=_expect(data.get("docker_image", DEFAULT_DOCKER_IMAGE), str, "docker_image"),
        severity=severity,
        exclude_errors=exclude_errors,
        additional_arguments=_expect(data.get("additional_arguments", ""), str, "additional_arguments"),
        ignore_failures=_expect(data.get("ignore_failures", False), bool, "ignore_failures"),
        show_violations=_expect(data.get("show_violations", True), bool, "show_violations"),
        accepted_exit_codes=accepted_exit_codes,
        installer=_installer(_expect(data.get("installer") or {}, Mapping, "installer"), working_dir),
    )
    logger.debug("Resolved task configuration: %s", config)
    return config


def load_config(
    path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    cwd: Path | None = None,
) -> TaskConfiguration:
    """Load a configuration file (optional) and apply overrides on top.

    Args:
        path: YAML configuration file, or None to start from defaults.
        overrides: Values that replace those from the file; nested
            ``reports`` and ``installer`` sections merge key by key.
        cwd: Base for a relative ``working_dir``. When None, a config
            file's own directory is used, else the process directory.

    Returns:
        The resolved configuration.
    """
    data: dict[str, Any] = {}
    if path is not None:
        data = read_config_file(path)
        if cwd is None:
            cwd = path.resolve().parent
    if overrides:
        data = _deep_merge(data, overrides)
    return build_config(data, cwd=cwd)
