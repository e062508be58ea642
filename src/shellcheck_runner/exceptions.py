"""shellcheck-runner exception hierarchy.

All public exceptions inherit from ShellcheckRunnerError, giving callers a
single base class to catch when they want to handle any runner failure
without swallowing unrelated errors.

``ThresholdViolation`` is the odd one out: it is not a technical fault but
the business outcome "violations were found and failures are not ignored".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from shellcheck_runner.reports.summary import ReportSummary


class ShellcheckRunnerError(Exception):
    """Base exception for all shellcheck-runner errors.

    Attributes:
        teardown_error: Set when the isolated environment failed to stop
            after this error was raised inside it.
    """

    teardown_error: EnvironmentLifecycleError | None = None


class ConfigurationError(ShellcheckRunnerError):
    """Raised when a task configuration file or override is invalid."""


class ProcessExecutionError(ShellcheckRunnerError):
    """Raised when an external command exits non-zero or cannot start.

    Attributes:
        command: The argument vector that was executed.
        exit_code: Process exit status, or None if it never started.
        output: Combined stdout/stderr captured from the process.
    """

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int | None,
        output: str,
    ) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
        if exit_code is None:
            detail = f"failed to start: {output}"
        else:
            detail = f"exited with code {exit_code}: {output}"
        super().__init__(f"Command '{' '.join(self.command)}' {detail}")


class MalformedReportError(ShellcheckRunnerError):
    """Raised when checker output expected to be XML is not.

    Attributes:
        message: What went wrong, without the fragment.
        fragment: The raw output that could not be parsed.
    """

    def __init__(self, message: str, fragment: str) -> None:
        self.message = message
        self.fragment = fragment
        super().__init__(f"{message}: {fragment}")


class EnvironmentLifecycleError(ShellcheckRunnerError):
    """Raised when the isolated container fails to start or stop.

    Attributes:
        outcome: The run result computed before a failed teardown, if the
            wrapped work itself completed.
    """

    outcome: object | None = None


class RenderError(ShellcheckRunnerError):
    """Raised when the HTML report cannot be rendered.

    Covers missing stylesheets, invalid stylesheets and transform failures
    alike.
    """


class InstallError(ShellcheckRunnerError):
    """Raised when the ShellCheck binary cannot be downloaded or unpacked."""


class ThresholdViolation(ShellcheckRunnerError):
    """Raised when violations were found and failures are not ignored.

    Attributes:
        summary: The counts that triggered the failure.
    """

    def __init__(self, message: str, summary: ReportSummary) -> None:
        self.summary = summary
        super().__init__(message)
