"""Rich output formatting helpers for the shellcheck-runner CLI.

Outcome colours: PASS = bold green, WARN = yellow, FAIL = bold red.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shellcheck_runner.core.outcome import Action
from shellcheck_runner.core.pipeline import RunResult
from shellcheck_runner.exceptions import (
    EnvironmentLifecycleError,
    MalformedReportError,
    ProcessExecutionError,
    ShellcheckRunnerError,
    ThresholdViolation,
)

_ACTION_STYLES: dict[Action, str] = {
    Action.PASS: "bold green",
    Action.WARN: "yellow",
    Action.FAIL: "bold red",
}

console = Console()


def action_style(action: Action) -> str:
    """Return the Rich style string for an outcome action."""
    return _ACTION_STYLES.get(action, "white")


def print_violations(text: str) -> None:
    """Echo the human-readable ShellCheck report verbatim."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_run_result(result: RunResult) -> None:
    """Print the outcome of a passing or warning run and its reports."""
    outcome = result.outcome
    label = Text(outcome.action.name, style=action_style(outcome.action))
    if outcome.action is Action.PASS:
        console.print(Panel(Text.assemble(label, "  No Shellcheck violations."), title="Shellcheck"))
    else:
        console.print(Panel(Text.assemble(label, "  ", outcome.message), title="Shellcheck"))

    reports = [
        ("xml", result.xml_report),
        ("html", result.html_report),
        ("txt", result.txt_report),
    ]
    written = [(kind, path) for kind, path in reports if path is not None]
    if written:
        table = Table(title="Reports", show_header=True, header_style="bold")
        table.add_column("Kind", style="bold")
        table.add_column("Location", overflow="fold")
        for kind, path in written:
            table.add_row(kind, str(path))
        console.print(table)


def print_threshold_violation(exc: ThresholdViolation) -> None:
    """Print the failure message of a run with violations."""
    label = Text(Action.FAIL.name, style=action_style(Action.FAIL))
    console.print(Panel(Text.assemble(label, "  ", str(exc)), title="Shellcheck"))
    if exc.teardown_error is not None:
        print_teardown_error(exc.teardown_error)


def print_error(exc: ShellcheckRunnerError) -> None:
    """Print a technical failure with the details needed to diagnose it."""
    console.print(f"[bold red]Error:[/bold red] {type(exc).__name__}", soft_wrap=True)
    if isinstance(exc, ProcessExecutionError):
        status = "failed to start" if exc.exit_code is None else f"exited with code {exc.exit_code}"
        console.print(Text.assemble(("Command: ", "bold"), " ".join(exc.command), f" ({status})"), soft_wrap=True)
        if exc.output:
            console.print(Panel(Text(exc.output), title="Tool output"))
    elif isinstance(exc, MalformedReportError):
        console.print(exc.message, markup=False, highlight=False, soft_wrap=True)
        console.print(Panel(Text(exc.fragment), title="Unparseable output"))
    else:
        console.print(str(exc), markup=False, highlight=False, soft_wrap=True)
    if isinstance(exc, EnvironmentLifecycleError) and isinstance(exc.outcome, RunResult):
        console.print("[dim]The run itself completed before teardown failed:[/dim]")
        print_run_result(exc.outcome)
    if exc.teardown_error is not None:
        print_teardown_error(exc.teardown_error)


def print_teardown_error(exc: EnvironmentLifecycleError) -> None:
    """Print a container teardown failure that followed another error."""
    console.print(Text.assemble(("Teardown error: ", "yellow"), str(exc)), soft_wrap=True)
