"""Data models for a resolved ShellCheck task configuration.

The engine consumes a ``TaskConfiguration`` read-only: every path is already
absolute and every convention (report locations, image tag, severity) is
already applied by the loader or by the caller. Nothing here reaches back
into global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# ShellCheck's own severity scale, most to least severe.
SEVERITIES: tuple[str, ...] = ("error", "warning", "info", "style")

DEFAULT_SHELLCHECK_VERSION = "v0.7.1"
DEFAULT_DOCKER_IMAGE = "koalaman/shellcheck-alpine"
DEFAULT_INSTALLER_URL = "https://github.com/koalaman/shellcheck/releases/download"

# Report kinds in the order the engine reads them.
REPORT_KINDS: tuple[str, ...] = ("xml", "html", "txt")


@dataclass(frozen=True)
class ReportSettings:
    """One single-file report.

    Attributes:
        enabled: Whether the report is requested by the user.
        destination: Absolute path the report is written to when enabled.
        stylesheet: Custom XSLT stylesheet (HTML report only).
    """

    enabled: bool
    destination: Path
    stylesheet: Path | None = None


@dataclass(frozen=True)
class Reports:
    """The three report kinds a run can produce."""

    xml: ReportSettings
    html: ReportSettings
    txt: ReportSettings

    @classmethod
    def in_directory(cls, reports_dir: Path) -> Reports:
        """Build the default reports, all enabled, as ``shellcheck.<kind>``."""
        return cls(
            xml=ReportSettings(True, reports_dir / "shellcheck.xml"),
            html=ReportSettings(True, reports_dir / "shellcheck.html"),
            txt=ReportSettings(True, reports_dir / "shellcheck.txt"),
        )


@dataclass(frozen=True)
class InstallerSettings:
    """Where to fetch a ShellCheck release from when no binary is present.

    Attributes:
        enabled: Download the binary before the run if it is missing.
        base_url: Release download root; the version and archive name are
            appended.
        install_dir: Directory the release is unpacked into. Defaults to
            ``<working_dir>/.shellcheck`` when None.
    """

    enabled: bool = False
    base_url: str = DEFAULT_INSTALLER_URL
    install_dir: Path | None = None


@dataclass(frozen=True)
class TaskConfiguration:
    """Fully resolved input for one pipeline run.

    Attributes:
        working_dir: Directory every process runs in; mounted into the
            container at the same path.
        temporary_dir: Where reports that were not requested are written
            while the run needs them.
        reports: Report settings for xml, html and txt.
        source_files: Explicit shell scripts. When None, ``sources`` is
            walked and filtered by shell-script name.
        sources: Files or directories to search when ``source_files`` is
            not given.
        shellcheck_binary: Local binary used when not running in docker.
        use_docker: Run every invocation inside a disposable container.
        shellcheck_version: Image tag (docker) or release (installer).
        docker_image: Image name, without tag.
        severity: Minimum severity passed to ``--severity``.
        exclude_errors: SC codes passed to ``--exclude``.
        additional_arguments: Raw extra arguments, split shell-style.
        ignore_failures: Warn instead of failing when violations exist.
        show_violations: Echo the human-readable report to the console.
        accepted_exit_codes: Checker exit codes treated as success.
        installer: Binary download settings.
    """

    working_dir: Path
    temporary_dir: Path
    reports: Reports
    source_files: tuple[Path, ...] | None = None
    sources: tuple[Path, ...] = ()
    shellcheck_binary: str = "shellcheck"
    use_docker: bool = False
    shellcheck_version: str = DEFAULT_SHELLCHECK_VERSION
    docker_image: str = DEFAULT_DOCKER_IMAGE
    severity: str = "style"
    exclude_errors: tuple[str, ...] = ()
    additional_arguments: str = ""
    ignore_failures: bool = False
    show_violations: bool = True
    accepted_exit_codes: tuple[int, ...] = (0,)
    installer: InstallerSettings = field(default_factory=InstallerSettings)

    @property
    def image(self) -> str:
        """Docker image reference including the version tag."""
        return f"{self.docker_image}:{self.shellcheck_version}"

    def report_destination(self, report: ReportSettings) -> Path:
        """Where a report is written: its destination, or a temporary file.

        Reports that were not requested but are needed internally (the XML
        document backing the HTML report and the summary) land in the
        temporary directory under the same file name.
        """
        if report.enabled:
            return report.destination
        return self.temporary_dir / report.destination.name
