"""Fixtures for CLI tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from tests.helpers import FakeRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def fake_shellcheck(monkeypatch: pytest.MonkeyPatch):
    """Install a ``FakeRunner`` as the process runner and return a setter.

    Call the returned function with ``FakeRunner`` arguments to script the
    checker's answers; it returns the runner for inspecting calls.
    """

    def install(**kwargs) -> FakeRunner:
        fake = FakeRunner(**kwargs)
        monkeypatch.setattr("shellcheck_runner.core.process.run", fake)
        return fake

    return install
