"""Shared test helpers: checkstyle fragments and a scripted command runner.

``FakeRunner`` stands in for ``shellcheck_runner.core.process.run``. It
records every command and answers docker and ShellCheck invocations from
a per-file table of violations, so no real binary is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Sequence

from shellcheck_runner.exceptions import ProcessExecutionError

CONTAINER_ID = "3f2a9c7d1b44"

# (line, column, severity, message, code)
Violation = tuple[int, int, str, str, str]


def checkstyle_fragment(name: str, violations: Iterable[Violation] = (), preamble: str = "") -> str:
    """Render the checkstyle output ShellCheck prints for one file."""
    errors = "".join(
        f"<error line='{line}' column='{col}' severity='{sev}' "
        f"message='{msg}' source='ShellCheck.{code}' />\n"
        for line, col, sev, msg, code in violations
    )
    return (
        f"{preamble}<?xml version='1.0' encoding='UTF-8'?>\n"
        "<checkstyle version='4.3'>\n"
        f"<file name='{name}' >\n{errors}</file>\n"
        "</checkstyle>\n"
    )


def tty_output(name: str, violations: Iterable[Violation] = ()) -> str:
    """Render a simplified ``-f tty`` output for one file."""
    lines = [
        f"In {name} line {line}:\n  ^-- {code} ({sev}): {msg}"
        for line, _col, sev, msg, code in violations
    ]
    return "\n".join(lines)


class FakeRunner:
    """Scripted replacement for ``process.run``.

    Args:
        violations: Violations per script file name (base name).
        fail_on: Predicate on the command; when true the call raises
            ``ProcessExecutionError`` with exit code 1.
        raw: Per file name, verbatim output overriding ``violations``.
    """

    def __init__(
        self,
        violations: dict[str, Sequence[Violation]] | None = None,
        fail_on: Callable[[list[str]], bool] | None = None,
        raw: dict[str, str] | None = None,
    ) -> None:
        self.violations = violations or {}
        self.fail_on = fail_on
        self.raw = raw or {}
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []

    def __call__(self, command: Sequence[str], working_dir: Path, **kwargs: object) -> str:
        command = list(command)
        self.calls.append(command)
        self.kwargs.append(dict(kwargs))
        if self.fail_on is not None and self.fail_on(command):
            raise ProcessExecutionError(command, 1, "boom")
        if command[:2] == ["docker", "run"]:
            return f"{CONTAINER_ID}\n"
        if command[:2] == ["docker", "stop"]:
            return f"{command[2]}\n"
        if command[:2] == ["docker", "exec"]:
            command = command[3:]
        return self._shellcheck(command)

    def _shellcheck(self, command: list[str]) -> str:
        path = Path(command[-1])
        fmt = command[command.index("-f") + 1]
        if path.name in self.raw:
            return self.raw[path.name]
        found = self.violations.get(path.name, ())
        if fmt == "checkstyle":
            return checkstyle_fragment(str(path), found)
        return tty_output(str(path), found)

    def shellcheck_calls(self, fmt: str | None = None) -> list[list[str]]:
        """Commands that ran ShellCheck, optionally for one format."""
        calls = [c for c in self.calls if c[:2] not in (["docker", "run"], ["docker", "stop"])]
        if fmt is not None:
            calls = [c for c in calls if fmt in c]
        return calls
