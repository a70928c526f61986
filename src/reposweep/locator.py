"""Discovery of candidate working copies under a root directory."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from . import exec as exec_util
from . import log
from .backend import GitRepository
from .errors import NotARepositoryError, ScanRootError
from .models import WorkingCopy


def iter_candidates(root: Path) -> Iterator[Path]:
    """Yield every immediate child directory of ``root``.

    The root is listed eagerly so an unreadable root fails before anything
    is yielded; children are then produced in directory-enumeration order.

    Raises:
        ScanRootError: ``root`` could not be listed.
    """
    try:
        with os.scandir(root) as entries:
            children = [Path(entry.path) for entry in entries]
    except OSError as exc:
        raise ScanRootError(root, exc.strerror or str(exc)) from exc
    for child in children:
        if child.is_dir():
            yield child
        else:
            log.trace(f"skipping non-directory {child}")


def open_working_copy(
    path: Path,
    *,
    git_path: str = "git",
    runner: exec_util.CommandRunner | None = None,
) -> WorkingCopy:
    """Canonicalise ``path`` and open it as a git working copy.

    Raises:
        NotARepositoryError: ``path`` cannot be resolved or is not a work
            tree root.
        GitUnavailableError: The git executable could not be started.
    """
    try:
        canonical = path.resolve(strict=True)
    except OSError as exc:
        raise NotARepositoryError(path, exc.strerror or str(exc)) from exc
    repo = GitRepository.open(canonical, git_path=git_path, runner=runner)
    return WorkingCopy(path=canonical, repo=repo)
