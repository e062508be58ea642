"""Download a ShellCheck release when no local binary is available.

Only used when the run does not use docker and the configured binary is
not on PATH. Releases are fetched from the ShellCheck GitHub releases page
(or a mirror given as ``installer.base_url``) and unpacked under
``<install_dir>/<version>/``; an existing unpacked binary is reused.

Requires the optional ``httpx`` dependency::

    pip install shellcheck-runner[install]
"""

from __future__ import annotations

import logging
import lzma
import os
import platform
import shutil
import stat
import tarfile
import tempfile
from pathlib import Path
from typing import Any

from shellcheck_runner.config.models import TaskConfiguration
from shellcheck_runner.exceptions import InstallError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 60.0

_SYSTEMS = {"linux": "linux", "darwin": "darwin"}
_MACHINES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "armv6l": "armv6hf",
    "armv7l": "armv6hf",
}


def _ensure_httpx() -> Any:  # noqa: ANN401
    """Lazily import httpx and raise a friendly error if missing."""
    try:
        import httpx

        return httpx
    except ImportError:
        raise InstallError(
            "httpx is required to install ShellCheck.\n"
            "Install it with: pip install shellcheck-runner[install]"
        )


def archive_name(version: str, system: str | None = None, machine: str | None = None) -> str:
    """Release archive name for a platform, e.g. ``shellcheck-v0.7.1.linux.x86_64.tar.xz``.

    Raises:
        InstallError: For platforms without a prebuilt tarball.
    """
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()
    if system not in _SYSTEMS or machine not in _MACHINES:
        raise InstallError(f"No prebuilt ShellCheck release for {system}/{machine}")
    return f"shellcheck-{version}.{_SYSTEMS[system]}.{_MACHINES[machine]}.tar.xz"


def install_location(config: TaskConfiguration) -> Path:
    """Where the binary for the configured version lives once installed."""
    base = config.installer.install_dir or config.working_dir / ".shellcheck"
    return base / config.shellcheck_version / "shellcheck"


def _download(url: str, target: Path) -> None:
    httpx = _ensure_httpx()
    logger.info("Downloading ShellCheck from %s", url)
    try:
        with httpx.stream("GET", url, follow_redirects=True, timeout=DEFAULT_TIMEOUT) as resp:
            resp.raise_for_status()
            with target.open("wb") as fh:
                for chunk in resp.iter_bytes():
                    fh.write(chunk)
    except httpx.HTTPStatusError as exc:
        raise InstallError(f"HTTP {exc.response.status_code} downloading {url}") from exc
    except httpx.HTTPError as exc:
        raise InstallError(f"Failed to download {url}: {exc}") from exc


def _extract_binary(archive: Path, destination: Path) -> None:
    # Unpack beside the target so a failed copy never leaves a reusable binary.
    partial = destination.with_name(f".{destination.name}.partial")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive, "r:xz") as tar:
            member = next(
                (m for m in tar.getmembers() if m.isfile() and Path(m.name).name == "shellcheck"),
                None,
            )
            if member is None:
                raise InstallError(f"No shellcheck binary inside {archive.name}")
            source = tar.extractfile(member)
            if source is None:
                raise InstallError(f"Cannot read {member.name} from {archive.name}")
            with source, partial.open("wb") as fh:
                shutil.copyfileobj(source, fh)
        partial.chmod(partial.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        os.replace(partial, destination)
    except (tarfile.TarError, OSError, EOFError, lzma.LZMAError) as exc:
        raise InstallError(f"Failed to unpack {archive.name}: {exc}") from exc
    finally:
        partial.unlink(missing_ok=True)


def install(config: TaskConfiguration) -> Path:
    """Install the configured ShellCheck version and return the binary.

    Raises:
        InstallError: On unsupported platforms, download or unpack errors.
    """
    binary = install_location(config)
    if binary.is_file():
        logger.debug("ShellCheck %s already installed at %s", config.shellcheck_version, binary)
        return binary

    name = archive_name(config.shellcheck_version)
    url = f"{config.installer.base_url.rstrip('/')}/{config.shellcheck_version}/{name}"
    with tempfile.TemporaryDirectory() as tmp:
        archive = Path(tmp) / name
        _download(url, archive)
        _extract_binary(archive, binary)
    logger.info("Installed ShellCheck %s at %s", config.shellcheck_version, binary)
    return binary


def maybe_install(config: TaskConfiguration) -> Path | None:
    """Install ShellCheck if the run needs a local binary and has none.

    Returns:
        The installed binary, or None when nothing had to be installed.
    """
    if config.use_docker or not config.installer.enabled:
        return None
    if shutil.which(config.shellcheck_binary):
        return None
    return install(config)
