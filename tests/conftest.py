"""Shared fixtures for shellcheck-runner tests."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import pytest

from shellcheck_runner.config.models import Reports, TaskConfiguration


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project with two shell scripts and some non-script files.

    Layout::

        scripts/deploy.sh
        scripts/lib/util.bash
        scripts/README.md
        scripts/notes.txt
    """
    scripts = tmp_path / "scripts"
    (scripts / "lib").mkdir(parents=True)
    (scripts / "deploy.sh").write_text("#!/bin/sh\nunused=1\necho $1\n")
    (scripts / "lib" / "util.bash").write_text("#!/bin/bash\nlog() { echo \"$*\"; }\n")
    (scripts / "README.md").write_text("# scripts\n")
    (scripts / "notes.txt").write_text("not a script\n")
    return tmp_path


@pytest.fixture
def make_config(project_dir: Path) -> Callable[..., TaskConfiguration]:
    """Factory for a configuration rooted at ``project_dir``.

    Keyword arguments replace fields; ``xml``, ``html`` and ``txt`` accept
    an enabled flag for the corresponding report.
    """

    def factory(**overrides: Any) -> TaskConfiguration:
        reports_dir = project_dir / "build" / "reports" / "shellcheck"
        reports = Reports.in_directory(reports_dir)
        enabled = {kind: overrides.pop(kind) for kind in ("xml", "html", "txt") if kind in overrides}
        if enabled:
            reports = Reports(**{
                kind: replace(getattr(reports, kind), enabled=enabled.get(kind, True))
                for kind in ("xml", "html", "txt")
            })
        stylesheet = overrides.pop("stylesheet", None)
        if stylesheet is not None:
            reports = replace(reports, html=replace(reports.html, stylesheet=stylesheet))
        base = TaskConfiguration(
            working_dir=project_dir,
            temporary_dir=project_dir / "build" / "tmp" / "shellcheck",
            reports=reports,
            sources=(project_dir / "scripts",),
        )
        return replace(base, **overrides)

    return factory

