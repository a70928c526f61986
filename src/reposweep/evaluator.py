"""Cleanliness classification for a single working copy.

The evaluator only reads from the backend and returns a
``CleanlinessVerdict``; it never prints. Both checks run whenever the status
check itself succeeds, so a verdict lists every reason that applies.
"""

from __future__ import annotations

from pathlib import Path

from .backend import RepositoryBackend
from .errors import BackendError
from .models import CleanlinessVerdict, VerdictReason


def find_unpushed_commit(repo: RepositoryBackend) -> str | None:
    """Return one commit reachable from a local branch but no remote-tracking branch.

    Every local branch tip is pushed and every remote-tracking tip hidden;
    the walk stops at the first commit it yields.

    Returns:
        A witness commit id, or ``None`` when all local history is on a
        remote-tracking branch (including when there are no local branches).

    Raises:
        BackendError: Branch enumeration, tip resolution, or the walk failed.
    """
    push = repo.local_branch_tips()
    if not push:
        return None
    hide = repo.remote_branch_tips()
    return next(repo.walk(push, hide, limit=1), None)


def evaluate(repo: RepositoryBackend, path: Path) -> CleanlinessVerdict:
    """Classify the working copy at ``path``.

    Args:
        repo: Opened backend for the working copy.
        path: Canonical path recorded in the verdict.

    Returns:
        A verdict whose ``reasons`` are empty only when the work tree has no
        status entries and no local commit is missing from the remotes.
    """
    try:
        entries = tuple(repo.status())
    except BackendError as exc:
        return CleanlinessVerdict(
            path=path,
            reasons=(VerdictReason.STATUS_CHECK_FAILED,),
            error=str(exc),
        )

    reasons: list[VerdictReason] = []
    if entries:
        reasons.append(VerdictReason.HAS_WORKING_TREE_CHANGES)

    unpushed = None
    error = None
    try:
        unpushed = find_unpushed_commit(repo)
    except BackendError as exc:
        reasons.append(VerdictReason.HISTORY_CHECK_FAILED)
        error = str(exc)
    if unpushed is not None:
        reasons.append(VerdictReason.HAS_UNPUSHED_COMMITS)

    return CleanlinessVerdict(
        path=path,
        reasons=tuple(reasons),
        status_entries=entries,
        unpushed_commit=unpushed,
        error=error,
    )
