"""Scan a root directory and report a verdict for every candidate.

Each candidate is opened and evaluated inside its own error boundary: a
directory that is not a repository, or a repository whose queries fail,
becomes a diagnostic line and never aborts the rest of the scan.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from . import exec as exec_util
from . import log
from .config import SweepSettings
from .errors import NotARepositoryError
from .evaluator import evaluate
from .locator import iter_candidates, open_working_copy
from .models import CleanlinessVerdict, VerdictReason

STATUS_PREVIEW_LIMIT = 10


@dataclass
class ScanResult:
    """Verdicts for every candidate, in directory-enumeration order."""

    root: Path
    verdicts: list[CleanlinessVerdict] = field(default_factory=list)

    @property
    def clean(self) -> list[Path]:
        return [verdict.path for verdict in self.verdicts if verdict.is_clean]

    @property
    def unclean(self) -> list[CleanlinessVerdict]:
        return [
            verdict
            for verdict in self.verdicts
            if not verdict.is_clean and not verdict.has(VerdictReason.NOT_A_REPOSITORY)
        ]

    @property
    def skipped(self) -> list[Path]:
        return [
            verdict.path
            for verdict in self.verdicts
            if verdict.has(VerdictReason.NOT_A_REPOSITORY)
        ]


def classify_candidate(
    candidate: Path,
    *,
    git_path: str = "git",
    runner: exec_util.CommandRunner | None = None,
) -> CleanlinessVerdict:
    """Open and evaluate one candidate directory."""
    try:
        working_copy = open_working_copy(candidate, git_path=git_path, runner=runner)
    except NotARepositoryError as exc:
        return CleanlinessVerdict(
            path=candidate,
            reasons=(VerdictReason.NOT_A_REPOSITORY,),
            error=str(exc),
        )
    return evaluate(working_copy.repo, working_copy.path)


def report_verdict(verdict: CleanlinessVerdict) -> None:
    """Print the console lines for one verdict."""
    path = str(verdict.path)
    if verdict.is_clean:
        log.success(f"Clean repository found: {path}")
        return
    if verdict.has(VerdictReason.NOT_A_REPOSITORY):
        log.info(f"{path} is not a git repository", style="bright_black")
        if verdict.error:
            log.debug(verdict.error)
        return
    if verdict.has(VerdictReason.STATUS_CHECK_FAILED):
        log.error(f"Couldn't get status for {path}: {verdict.error}")
        return
    if verdict.has(VerdictReason.HAS_WORKING_TREE_CHANGES):
        log.info(f"Working tree changes in {path}", style="red")
        entries = verdict.status_entries
        for entry in entries[:STATUS_PREVIEW_LIMIT]:
            log.info(f"  {entry.describe()}", style="bright_black")
        hidden = entries[STATUS_PREVIEW_LIMIT:]
        if hidden:
            log.info(f"  ... and {len(hidden)} more", style="bright_black")
            for entry in hidden:
                log.debug(f"  {entry.describe()}")
    if verdict.has(VerdictReason.HAS_UNPUSHED_COMMITS):
        short = (verdict.unpushed_commit or "")[:12]
        log.info(f"Unpushed commits in {path} ({short})", style="red")
    if verdict.has(VerdictReason.HISTORY_CHECK_FAILED):
        log.error(f"Couldn't check history for {path}: {verdict.error}")


def scan(root: Path, settings: SweepSettings, *, runner: exec_util.CommandRunner | None = None) -> ScanResult:
    """Classify every candidate under ``root`` and report as results arrive.

    With ``settings.jobs > 1`` candidates are evaluated on a thread pool, but
    verdicts are still reported and recorded in enumeration order.

    Raises:
        ScanRootError: ``root`` could not be listed.
        GitUnavailableError: The git executable could not be started.
    """
    log.info(f"Scanning directory {root}", style="yellow")
    result = ScanResult(root=root)
    candidates = iter_candidates(root)
    if settings.jobs <= 1:
        for candidate in candidates:
            verdict = classify_candidate(candidate, git_path=settings.git_path, runner=runner)
            report_verdict(verdict)
            result.verdicts.append(verdict)
        return result

    with ThreadPoolExecutor(max_workers=settings.jobs) as pool:
        pending = [
            pool.submit(classify_candidate, candidate, git_path=settings.git_path, runner=runner)
            for candidate in candidates
        ]
        for future in pending:
            verdict = future.result()
            report_verdict(verdict)
            result.verdicts.append(verdict)
    return result
