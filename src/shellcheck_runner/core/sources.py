"""Resolve the ordered, deduplicated set of shell scripts to check."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from shellcheck_runner.config.models import TaskConfiguration

logger = logging.getLogger(__name__)

# File-name endings recognised as shell scripts when walking directories.
SHELL_SCRIPT_SUFFIXES: tuple[str, ...] = (
    ".sh",
    ".bash",
    ".ksh",
    ".bashrc",
    ".bash_profile",
    ".bash_login",
    ".bash_logout",
)


def is_shell_script(path: Path) -> bool:
    """Return True if the file name marks it as a shell script.

    Dotfiles such as ``.bashrc`` match as well as ``team.bashrc``.
    """
    return path.name.endswith(SHELL_SCRIPT_SUFFIXES)


def _walk(root: Path) -> Iterator[Path]:
    if root.is_file():
        if is_shell_script(root):
            yield root
        return
    if not root.is_dir():
        logger.debug("Skipping missing source %s", root)
        return
    for candidate in sorted(root.rglob("*")):
        if candidate.is_file() and is_shell_script(candidate):
            yield candidate


def _dedupe(paths: Iterable[Path]) -> tuple[Path, ...]:
    return tuple(dict.fromkeys(p.resolve() for p in paths))


def resolve_sources(config: TaskConfiguration) -> tuple[Path, ...]:
    """Return the canonical source files for a run, in check order.

    Explicit ``source_files`` are taken as-is (no name filtering), keeping
    their order. Otherwise every entry of ``sources`` is walked and shell
    scripts are kept, sorted within each directory.

    An empty result is valid: the run then checks nothing and passes.
    """
    if config.source_files is not None:
        files = _dedupe(config.source_files)
    else:
        logger.debug("Converting sources into a file tree: %s", list(config.sources))
        files = _dedupe(path for root in config.sources for path in _walk(root))
    logger.debug("Source files: %s", [str(f) for f in files])
    return files
