"""Git helper functions used by the repository backend."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util
from . import log
from .errors import BackendError, GitUnavailableError
from .models import StatusEntry, StatusKind

_CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}
_KIND_BY_CODE = {
    "A": StatusKind.ADDED,
    "M": StatusKind.MODIFIED,
    "D": StatusKind.DELETED,
    "R": StatusKind.RENAMED,
    "C": StatusKind.COPIED,
    "T": StatusKind.TYPE_CHANGED,
}


def git_command(args: list[str], *, git_path: str | None = None) -> list[str]:
    """Build a git command using an optional executable path.

    Example:
        >>> git_command(["status"], git_path="/usr/bin/git")
        ['/usr/bin/git', 'status']
    """
    resolved = git_path.strip() if isinstance(git_path, str) else ""
    if not resolved:
        resolved = "git"
    return [resolved, *args]


def run_git(
    repo_dir: Path,
    args: list[str],
    *,
    stdin: bytes | None = None,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> exec_util.CommandResult:
    """Run ``git -C <repo_dir> <args>`` and return the raw result.

    Optional index locks are disabled so read-only queries never rewrite the
    index of the repository being inspected.

    Raises:
        GitUnavailableError: The git executable could not be found.
        BackendError: The command could not be started for another reason
            (for example an oversized argument list).
    """
    argv = git_command(
        ["--no-optional-locks", "-C", str(repo_dir), *args], git_path=git_path
    )
    log.trace(f"git {' '.join(args)} in {repo_dir}")
    request = exec_util.CommandRequest(argv=tuple(argv), input=stdin)
    try:
        result = exec_util.run_with_runner(request, runner=runner)
    except OSError as exc:
        raise BackendError(f"could not run {argv[0]}: {exc}") from exc
    if result is None:
        raise GitUnavailableError(argv[0])
    return result


def _run_git_checked(
    repo_dir: Path,
    args: list[str],
    *,
    stdin: bytes | None = None,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> exec_util.CommandResult:
    result = run_git(repo_dir, args, stdin=stdin, git_path=git_path, runner=runner)
    if result.returncode != 0:
        raise BackendError(exec_util.command_failure_detail(result))
    return result


def git_show_toplevel(
    repo_dir: Path,
    *,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> Path | None:
    """Return the work tree root containing ``repo_dir``.

    Returns:
        The top-level path, or ``None`` when ``repo_dir`` is not inside a
        work tree (plain directory or bare repository).
    """
    result = run_git(
        repo_dir, ["rev-parse", "--show-toplevel"], git_path=git_path, runner=runner
    )
    if result.returncode != 0:
        return None
    toplevel = result.text.strip()
    if not toplevel:
        return None
    return Path(toplevel)


def parse_porcelain_status(output: bytes) -> list[StatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output.

    Args:
        output: Raw NUL-separated status output.

    Returns:
        Status entries in git's order. Ignored entries (``!!``) are dropped.

    Example:
        >>> entries = parse_porcelain_status(b" M a.txt\\x00?? new/b.txt\\x00")
        >>> [entry.describe() for entry in entries]
        ['modified a.txt', 'untracked new/b.txt']
    """
    fields = output.decode("utf-8", errors="surrogateescape").split("\0")
    entries: list[StatusEntry] = []
    index = 0
    while index < len(fields):
        field = fields[index]
        index += 1
        if not field:
            continue
        if len(field) < 4 or field[2] != " ":
            raise BackendError(f"unexpected status line: {field!r}")
        code, path = field[:2], field[3:]
        if code == "!!":
            continue
        if code == "??":
            entries.append(StatusEntry(StatusKind.UNTRACKED, path))
            continue
        if code in _CONFLICT_CODES:
            entries.append(StatusEntry(StatusKind.CONFLICTED, path))
            continue
        original_path = None
        if code[0] in {"R", "C"}:
            if index >= len(fields) or not fields[index]:
                raise BackendError(f"missing source path for status line: {field!r}")
            original_path = fields[index]
            index += 1
        letter = code[0] if code[0] != " " else code[1]
        kind = _KIND_BY_CODE.get(letter)
        if kind is None:
            raise BackendError(f"unknown status code {code!r} for {path}")
        entries.append(StatusEntry(kind, path, original_path))
    return entries


def git_status_entries(
    repo_dir: Path,
    *,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> list[StatusEntry]:
    """Return work tree differences, untracked files included, ignored excluded.

    Raises:
        BackendError: ``git status`` failed (for example corrupt metadata).
    """
    result = _run_git_checked(
        repo_dir,
        ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
        git_path=git_path,
        runner=runner,
    )
    return parse_porcelain_status(result.stdout)


def git_ref_tips(
    repo_dir: Path,
    namespace: str,
    *,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> list[str]:
    """Return the distinct commit ids that refs under ``namespace`` point at.

    Args:
        repo_dir: Git repository directory.
        namespace: Ref prefix such as ``refs/heads`` or ``refs/remotes``.

    Returns:
        Commit ids in ref order, without duplicates.
    """
    result = _run_git_checked(
        repo_dir,
        ["for-each-ref", "--format=%(objectname)", namespace],
        git_path=git_path,
        runner=runner,
    )
    tips: list[str] = []
    for line in result.text.splitlines():
        oid = line.strip()
        if oid and oid not in tips:
            tips.append(oid)
    return tips


def git_rev_list(
    repo_dir: Path,
    push: list[str],
    hide: list[str],
    *,
    limit: int | None = None,
    git_path: str | None = None,
    runner: exec_util.CommandRunner | None = None,
) -> list[str]:
    """List commits reachable from ``push`` but not from ``hide``.

    Tips are fed on stdin (``^<oid>`` for hidden ones), so repositories with
    many thousands of branches never hit the argument-length limit.

    Raises:
        BackendError: A tip could not be resolved or the walk failed.
    """
    if not push:
        return []
    args = ["rev-list"]
    if limit is not None:
        args.append(f"--max-count={limit}")
    args.append("--stdin")
    lines = [*push, *(f"^{oid}" for oid in hide)]
    stdin = "".join(f"{line}\n" for line in lines).encode("ascii")
    result = _run_git_checked(repo_dir, args, stdin=stdin, git_path=git_path, runner=runner)
    return [line.strip() for line in result.text.splitlines() if line.strip()]
