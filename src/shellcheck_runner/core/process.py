"""Synchronous execution of one external command.

Every ShellCheck and docker invocation goes through ``run``. The process
inherits no stdin, its stderr is folded into stdout, and the call blocks
until the process exits. There is no timeout and no retry: a failing tool
usually means a broken invocation, and running it again would fail the
same way.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from shellcheck_runner.exceptions import ProcessExecutionError

logger = logging.getLogger(__name__)

# Signature shared by ``run`` and the fakes used in tests.
CommandRunner = Callable[..., str]


def run(
    command: Sequence[str],
    working_dir: Path,
    *,
    accepted_exit_codes: Sequence[int] = (0,),
) -> str:
    """Run a command and return its combined output.

    Args:
        command: Argument vector; ``command[0]`` is looked up on PATH.
        working_dir: Directory the process runs in.
        accepted_exit_codes: Exit statuses treated as success.

    Returns:
        Combined stdout and stderr, decoded as UTF-8.

    Raises:
        ProcessExecutionError: If the process cannot be started or exits
            with a status outside ``accepted_exit_codes``.
    """
    logger.debug("Running %s in %s", " ".join(command), working_dir)
    try:
        completed = subprocess.run(  # noqa: S603
            list(command),
            cwd=working_dir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ProcessExecutionError(command, None, str(exc)) from exc

    output = completed.stdout or ""
    if completed.returncode not in accepted_exit_codes:
        raise ProcessExecutionError(command, completed.returncode, output)
    return output
