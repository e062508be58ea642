"""Disposable docker container wrapping every ShellCheck invocation.

When a task asks for docker, one ``koalaman/shellcheck-alpine`` container
is started for the whole run with the working directory mounted at the same
path, every checker command is prefixed with ``docker exec <id>``, and the
container is stopped (and auto-removed) once the run is over.

Lifecycle::

    IDLE -> STARTING -> RUNNING -> STOPPING -> STOPPED

A failed start is fatal and leaves nothing to tear down. Stop is attempted
exactly once on every exit path. If the wrapped work raised, that error
stays the primary one and a stop failure is only logged and attached to it
as ``teardown_error``; otherwise the stop failure itself is raised.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Sequence

from shellcheck_runner.config.models import TaskConfiguration
from shellcheck_runner.core import process
from shellcheck_runner.core.process import CommandRunner
from shellcheck_runner.exceptions import (
    EnvironmentLifecycleError,
    ProcessExecutionError,
    ShellcheckRunnerError,
)

logger = logging.getLogger(__name__)


class EnvironmentState(Enum):
    """Where a container is in its lifecycle."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class ExecutionEnvironment:
    """Where checker commands run: a container, or directly on the host.

    Attributes:
        handle: Container ID, or None when running on the host.
        state: Current lifecycle state. A host environment stays IDLE.
    """

    def __init__(self, handle: str | None = None) -> None:
        self.handle = handle
        self.state = EnvironmentState.IDLE

    @property
    def is_isolated(self) -> bool:
        """True when commands are redirected into a container."""
        return self.handle is not None

    def wrap(self, command: Sequence[str]) -> list[str]:
        """Prefix a command with ``docker exec <id>`` when isolated."""
        if self.handle is None:
            return list(command)
        return ["docker", "exec", self.handle, *command]

    def __repr__(self) -> str:
        return f"ExecutionEnvironment(handle={self.handle!r}, state={self.state.value})"


class DockerController:
    """Starts and stops the ShellCheck container for one run.

    Args:
        config: Supplies the working directory and image tag.
        runner: Command runner, ``process.run`` unless replaced in tests.
    """

    def __init__(self, config: TaskConfiguration, runner: CommandRunner = process.run) -> None:
        self._config = config
        self._runner = runner

    def start_command(self) -> list[str]:
        workdir = str(self._config.working_dir)
        return [
            "docker", "run", "-it", "--rm", "--detach",
            "-v", f"{workdir}:{workdir}",
            "-w", workdir,
            self._config.image,
        ]

    def start(self) -> ExecutionEnvironment:
        """Start the container and return its environment handle.

        Raises:
            EnvironmentLifecycleError: If docker fails or prints no ID.
        """
        environment = ExecutionEnvironment()
        environment.state = EnvironmentState.STARTING
        command = self.start_command()
        logger.debug("Starting docker with %s", " ".join(command))
        try:
            output = self._runner(command, self._config.working_dir)
        except ProcessExecutionError as exc:
            raise EnvironmentLifecycleError(f"Failed to start docker: {exc}") from exc

        # Image pull progress may precede the container ID.
        lines = [line.strip() for line in output.splitlines() if line.strip()]
        if not lines:
            raise EnvironmentLifecycleError("Failed to start docker: no container ID returned")
        environment.handle = lines[-1]
        environment.state = EnvironmentState.RUNNING
        logger.debug("Docker container ID: %s", environment.handle)
        return environment

    def stop(self, environment: ExecutionEnvironment) -> None:
        """Stop the container; it removes itself (``--rm``).

        Raises:
            EnvironmentLifecycleError: If ``docker stop`` fails.
        """
        environment.state = EnvironmentState.STOPPING
        try:
            self._runner(["docker", "stop", environment.handle], self._config.working_dir)
        except ProcessExecutionError as exc:
            raise EnvironmentLifecycleError(
                f"Failed to stop docker container {environment.handle}: {exc}"
            ) from exc
        finally:
            environment.state = EnvironmentState.STOPPED

    @contextmanager
    def session(self) -> Iterator[ExecutionEnvironment]:
        """Run the enclosed block inside a freshly started container."""
        environment = self.start()
        try:
            yield environment
        except BaseException as exc:
            try:
                self.stop(environment)
            except EnvironmentLifecycleError as stop_exc:
                logger.error("%s", stop_exc)
                if isinstance(exc, ShellcheckRunnerError):
                    exc.teardown_error = stop_exc
            raise
        self.stop(environment)


@contextmanager
def isolated_environment(
    config: TaskConfiguration,
    runner: CommandRunner = process.run,
) -> Iterator[ExecutionEnvironment]:
    """Yield the environment checker commands should run in.

    With ``use_docker`` off this yields a host environment and performs no
    lifecycle transitions at all.
    """
    if not config.use_docker:
        yield ExecutionEnvironment()
        return
    with DockerController(config, runner).session() as environment:
        yield environment
