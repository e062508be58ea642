"""Command-line interface for shellcheck-runner."""
