"""In-process repository backend over an explicit commit graph.

Useful for exercising the evaluator without touching the file system, and as
the reference for what the git backend must answer.

Example:
    >>> repo = MemoryRepository(
    ...     commits={"a": (), "b": ("a",)},
    ...     local_branches={"main": "b"},
    ...     remote_branches={"origin/main": "a"},
    ... )
    >>> list(repo.walk(repo.local_branch_tips(), repo.remote_branch_tips()))
    ['b']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from itertools import islice

from .errors import BackendError
from .models import StatusEntry
from .revwalk import RevWalk


class MemoryRepository:
    """Backend holding commits, branch tips, and status entries in memory."""

    def __init__(
        self,
        commits: Mapping[str, Sequence[str]],
        *,
        local_branches: Mapping[str, str] | None = None,
        remote_branches: Mapping[str, str] | None = None,
        status_entries: Iterable[StatusEntry] = (),
    ) -> None:
        self.commits = {oid: tuple(parents) for oid, parents in commits.items()}
        self.local_branches = dict(local_branches or {})
        self.remote_branches = dict(remote_branches or {})
        self.status_entries = list(status_entries)
        for name, oid in {**self.local_branches, **self.remote_branches}.items():
            if oid not in self.commits:
                raise BackendError(f"branch {name} points at unknown commit {oid}")

    def parents(self, oid: str) -> tuple[str, ...]:
        return self.commits[oid]

    def status(self) -> list[StatusEntry]:
        return list(self.status_entries)

    def local_branch_tips(self) -> list[str]:
        return _distinct(self.local_branches.values())

    def remote_branch_tips(self) -> list[str]:
        return _distinct(self.remote_branches.values())

    def walk(
        self, push: list[str], hide: list[str], *, limit: int | None = None
    ) -> Iterator[str]:
        walk = RevWalk(self.parents)
        walk.push_all(push)
        walk.hide_all(hide)
        if limit is None:
            return iter(walk)
        return islice(walk, limit)


def _distinct(oids: Iterable[str]) -> list[str]:
    tips: list[str] = []
    for oid in oids:
        if oid not in tips:
            tips.append(oid)
    return tips
