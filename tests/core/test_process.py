"""Tests for the synchronous process runner."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from shellcheck_runner.core.process import run
from shellcheck_runner.exceptions import ProcessExecutionError


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestRunSuccess:
    """Exit code 0 returns the captured output."""

    def test_returns_stdout(self, tmp_path: Path) -> None:
        assert run(_python("print('hello')"), tmp_path) == "hello\n"

    def test_stderr_is_combined_with_stdout(self, tmp_path: Path) -> None:
        code = "import sys; print('out'); sys.stdout.flush(); print('err', file=sys.stderr)"
        output = run(_python(code), tmp_path)
        assert "out" in output
        assert "err" in output

    def test_runs_in_working_dir(self, tmp_path: Path) -> None:
        output = run(_python("import os; print(os.getcwd())"), tmp_path)
        assert Path(output.strip()).resolve() == tmp_path.resolve()

    def test_accepted_exit_codes_extend_success(self, tmp_path: Path) -> None:
        code = "print('findings'); raise SystemExit(1)"
        assert run(_python(code), tmp_path, accepted_exit_codes=(0, 1)) == "findings\n"


class TestRunFailure:
    """Non-zero exits and start failures raise ProcessExecutionError."""

    def test_non_zero_exit_raises_with_code_and_output(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessExecutionError) as info:
            run(_python("print('bad option'); raise SystemExit(4)"), tmp_path)
        assert info.value.exit_code == 4
        assert "bad option" in info.value.output
        assert "exited with code 4" in str(info.value)

    def test_exit_code_one_fails_by_default(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessExecutionError):
            run(_python("raise SystemExit(1)"), tmp_path)

    def test_missing_binary_raises_without_exit_code(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessExecutionError) as info:
            run(["definitely-not-a-real-binary-xyz"], tmp_path)
        assert info.value.exit_code is None
        assert "failed to start" in str(info.value)
