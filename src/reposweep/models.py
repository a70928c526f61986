"""Data types shared by the locator, evaluator, and reporting layers.

Example:
    >>> verdict = CleanlinessVerdict(path=Path("/repos/demo"))
    >>> verdict.is_clean
    True
    >>> verdict.reason is None
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .backend import RepositoryBackend


class StatusKind(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    TYPE_CHANGED = "type_changed"
    UNTRACKED = "untracked"
    CONFLICTED = "conflicted"


@dataclass(frozen=True)
class StatusEntry:
    """One difference between the work tree/index and ``HEAD``."""

    kind: StatusKind
    path: str
    original_path: str | None = None

    def describe(self) -> str:
        """Render the entry as a short status line.

        Example:
            >>> StatusEntry(StatusKind.RENAMED, "new.txt", "old.txt").describe()
            'renamed old.txt -> new.txt'
        """
        if self.original_path:
            return f"{self.kind.value} {self.original_path} -> {self.path}"
        return f"{self.kind.value} {self.path}"


class VerdictReason(str, Enum):
    HAS_WORKING_TREE_CHANGES = "has_working_tree_changes"
    HAS_UNPUSHED_COMMITS = "has_unpushed_commits"
    NOT_A_REPOSITORY = "not_a_repository"
    STATUS_CHECK_FAILED = "status_check_failed"
    HISTORY_CHECK_FAILED = "history_check_failed"


@dataclass(frozen=True)
class CleanlinessVerdict:
    """Classification of one working copy.

    ``reasons`` lists every failed check in evaluation order; an empty tuple
    means the working copy is safe to delete.
    """

    path: Path
    reasons: tuple[VerdictReason, ...] = ()
    status_entries: tuple[StatusEntry, ...] = ()
    unpushed_commit: str | None = None
    error: str | None = None

    @property
    def is_clean(self) -> bool:
        return not self.reasons

    @property
    def reason(self) -> VerdictReason | None:
        return self.reasons[0] if self.reasons else None

    def has(self, reason: VerdictReason) -> bool:
        return reason in self.reasons


@dataclass(frozen=True)
class WorkingCopy:
    """An opened working copy: its canonical path and backend handle."""

    path: Path
    repo: RepositoryBackend
