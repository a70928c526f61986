"""Repository capability interface and its git CLI implementation."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from . import exec as exec_util
from . import git
from .errors import BackendError, NotARepositoryError
from .models import StatusEntry


class RepositoryBackend(Protocol):
    """Operations the cleanliness evaluator needs from a repository."""

    def status(self) -> list[StatusEntry]:
        """Work tree differences against ``HEAD`` (untracked in, ignored out)."""
        ...

    def local_branch_tips(self) -> list[str]:
        """Commit ids of every local branch."""
        ...

    def remote_branch_tips(self) -> list[str]:
        """Commit ids of every remote-tracking branch."""
        ...

    def walk(
        self, push: list[str], hide: list[str], *, limit: int | None = None
    ) -> Iterator[str]:
        """Commits reachable from ``push`` and not from ``hide``."""
        ...


class GitRepository:
    """Backend that answers queries by running the ``git`` executable."""

    def __init__(
        self,
        path: Path,
        *,
        git_path: str = "git",
        runner: exec_util.CommandRunner | None = None,
    ) -> None:
        self.path = path
        self.git_path = git_path
        self.runner = runner

    @classmethod
    def open(
        cls,
        path: Path,
        *,
        git_path: str = "git",
        runner: exec_util.CommandRunner | None = None,
    ) -> GitRepository:
        """Open ``path`` as the top level of a git work tree.

        A directory nested inside some other repository's work tree is not
        itself a repository, so discovery never walks upwards.

        Raises:
            NotARepositoryError: ``path`` is not a work tree root, or git
                could not be run against it.
            GitUnavailableError: The git executable could not be started.
        """
        try:
            toplevel = git.git_show_toplevel(path, git_path=git_path, runner=runner)
        except BackendError as exc:
            raise NotARepositoryError(path, str(exc)) from exc
        if toplevel is None:
            raise NotARepositoryError(path)
        if toplevel.resolve() != path.resolve():
            raise NotARepositoryError(path, f"inside work tree {toplevel}")
        return cls(path, git_path=git_path, runner=runner)

    def status(self) -> list[StatusEntry]:
        return git.git_status_entries(self.path, git_path=self.git_path, runner=self.runner)

    def local_branch_tips(self) -> list[str]:
        return git.git_ref_tips(
            self.path, "refs/heads", git_path=self.git_path, runner=self.runner
        )

    def remote_branch_tips(self) -> list[str]:
        return git.git_ref_tips(
            self.path, "refs/remotes", git_path=self.git_path, runner=self.runner
        )

    def walk(
        self, push: list[str], hide: list[str], *, limit: int | None = None
    ) -> Iterator[str]:
        return iter(
            git.git_rev_list(
                self.path,
                push,
                hide,
                limit=limit,
                git_path=self.git_path,
                runner=self.runner,
            )
        )

    def __repr__(self) -> str:
        return f"GitRepository({str(self.path)!r})"
