"""Invocation engine: process execution, docker lifecycle, ShellCheck runs.

Submodules
----------
- ``process``: Runs one external command and captures its output.
- ``environment``: Disposable docker container around a run.
- ``sources``: Resolves the shell scripts to check.
- ``invoker``: One ShellCheck invocation per file and format.
- ``installer``: Downloads a ShellCheck release when needed.
- ``outcome``: Pass/warn/fail policy.
- ``pipeline``: Ties the above together for one run.

Import from the submodules directly; this package re-exports nothing so
that ``shellcheck_runner.reports`` can depend on ``invoker`` without a
cycle.
"""
