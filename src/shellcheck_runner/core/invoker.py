"""Run ShellCheck once per source file in a given output format.

The driver returns one outcome per file in source order. When there is
nothing to check it returns the single ``NO_SOURCE_FILES`` sentinel
instead, a tagged value that downstream stages skip by type rather than by
comparing output text.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from shellcheck_runner.config.models import TaskConfiguration
from shellcheck_runner.core import process
from shellcheck_runner.core.environment import ExecutionEnvironment
from shellcheck_runner.core.process import CommandRunner
from shellcheck_runner.core.sources import resolve_sources

logger = logging.getLogger(__name__)

CHECKSTYLE = "checkstyle"
TTY = "tty"


@dataclass(frozen=True)
class NoSourceFiles:
    """Sentinel outcome: the source file set was empty."""

    message: str = "No source files specified."


NO_SOURCE_FILES = NoSourceFiles()


@dataclass(frozen=True)
class RawResult:
    """Raw ShellCheck output for one file in one format.

    Attributes:
        path: The checked file.
        fmt: The ``-f`` format it was produced with.
        output: Combined stdout and stderr of the invocation.
    """

    path: Path
    fmt: str
    output: str


RawOutcome = Union[RawResult, NoSourceFiles]


def build_command(
    config: TaskConfiguration,
    fmt: str,
    path: Path,
    environment: ExecutionEnvironment,
) -> list[str]:
    """Build the argument vector that checks one file."""
    binary = "shellcheck" if environment.is_isolated else config.shellcheck_binary
    command = [binary, "-f", fmt, f"--severity={config.severity}"]
    if config.exclude_errors:
        command.append(f"--exclude={','.join(config.exclude_errors)}")
    command.extend(shlex.split(config.additional_arguments))
    command.append(str(path))
    return environment.wrap(command)


class InvocationDriver:
    """Invokes ShellCheck sequentially over the resolved source files.

    Args:
        config: The resolved task configuration.
        environment: Host or container environment commands run in.
        runner: Command runner, ``process.run`` unless replaced in tests.
    """

    def __init__(
        self,
        config: TaskConfiguration,
        environment: ExecutionEnvironment | None = None,
        runner: CommandRunner = process.run,
    ) -> None:
        self._config = config
        self._environment = environment or ExecutionEnvironment()
        self._runner = runner

    def run(self, fmt: str) -> list[RawOutcome]:
        """Check every source file in ``fmt`` and collect the outputs.

        Returns:
            ``[NO_SOURCE_FILES]`` for an empty source set, otherwise one
            ``RawResult`` per file in source order.

        Raises:
            ProcessExecutionError: On the first invocation that fails; the
                remaining files are not checked.
        """
        sources = resolve_sources(self._config)
        if not sources:
            logger.debug("No source files to check")
            return [NO_SOURCE_FILES]

        results: list[RawOutcome] = []
        for path in sources:
            command = build_command(self._config, fmt, path, self._environment)
            logger.debug("Command to run Shellcheck: %s", " ".join(command))
            output = self._runner(
                command,
                self._config.working_dir,
                accepted_exit_codes=self._config.accepted_exit_codes,
            )
            results.append(RawResult(path=path, fmt=fmt, output=output))
        return results


def join_text(outcomes: list[RawOutcome]) -> str:
    """Concatenate human-readable outputs, blank-line separated."""
    return "\n\n".join(
        outcome.message if isinstance(outcome, NoSourceFiles) else outcome.output
        for outcome in outcomes
    )
