"""Failure contracts for scanning, evaluation, and deletion.

Fatal errors (``ScanRootError``, ``PathEncodingError``,
``GitUnavailableError``) abort the run. Per-candidate errors
(``NotARepositoryError``, ``BackendError``) are caught at the candidate
boundary and reported as skips. ``SelectionCancelled`` is control flow for
an operator cancel and exits cleanly.
"""

from __future__ import annotations

from pathlib import Path


class SweepError(Exception):
    """Base class for expected repo-sweep failures.

    Use ``raise SweepError(...) from exc`` to chain a causing exception; it
    is available as ``__cause__``.
    """

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__(message)
        self.recovery_hint = recovery_hint


class ScanRootError(SweepError):
    """The root directory could not be listed."""

    def __init__(self, root: Path, detail: str) -> None:
        super().__init__(
            f"cannot read directory {root}: {detail}",
            recovery_hint="check that the directory exists and is readable",
        )
        self.root = root


class PathEncodingError(SweepError):
    """A path cannot be represented as UTF-8 text."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"invalid UTF-8 in file path: {path!r}")
        self.path = path


class GitUnavailableError(SweepError):
    """The git executable could not be started."""

    def __init__(self, git_path: str) -> None:
        super().__init__(
            f"missing required command: {git_path}",
            recovery_hint="install git or set REPO_SWEEP_GIT",
        )
        self.git_path = git_path


class NotARepositoryError(SweepError):
    """A candidate directory is not the top level of a git work tree."""

    def __init__(self, path: Path, detail: str | None = None) -> None:
        message = f"{path} is not a git repository"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.path = path


class BackendError(SweepError):
    """A repository query (status, refs, revision walk) failed."""


class SelectionCancelled(SweepError):
    """The operator cancelled the selection workflow."""

    def __init__(self, message: str = "Cancelled. Exiting.") -> None:
        super().__init__(message)
