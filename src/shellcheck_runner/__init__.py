"""shellcheck-runner: ShellCheck invocation, report merging and build gating."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
