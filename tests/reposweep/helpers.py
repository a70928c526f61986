from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from reposweep import exec as exec_util

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

GIT_ENV = {
    **os.environ,
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_CONFIG_GLOBAL": os.devnull,
}


def git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", "-C", str(repo), *args],
        check=True,
        capture_output=True,
        text=True,
        env=GIT_ENV,
    )
    return completed.stdout.strip()


def init_repo(path: Path) -> Path:
    path.mkdir(parents=True)
    git(path, "init")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return path


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    target = repo / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    git(repo, "add", name)
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def init_origin(root: Path) -> Path:
    origin = init_repo(root / "origin")
    commit_file(origin, "README.md", "base\n", "chore: initial")
    return origin


def clone(origin: Path, path: Path) -> Path:
    subprocess.run(
        ["git", "clone", "--quiet", str(origin), str(path)],
        check=True,
        capture_output=True,
        env=GIT_ENV,
    )
    return path


def result(
    argv: tuple[str, ...] = ("git",), *, returncode: int = 0, stdout: bytes = b"", stderr: str = ""
) -> exec_util.CommandResult:
    return exec_util.CommandResult(argv=argv, returncode=returncode, stdout=stdout, stderr=stderr)


class FakeRunner:
    """Command runner returning scripted results keyed by git subcommand."""

    def __init__(self, responses: dict[str, exec_util.CommandResult | None]) -> None:
        self.responses = responses
        self.requests: list[exec_util.CommandRequest] = []

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        argv = list(request.argv)
        subcommand = argv[argv.index("-C") + 2]
        if subcommand not in self.responses:
            raise AssertionError(f"unexpected git command: {argv}")
        return self.responses[subcommand]


def undecodable_path(parent: Path, name: bytes, *, directory: bool = True) -> Path:
    """Create a child of ``parent`` whose name is not valid UTF-8."""
    target = os.path.join(os.fsencode(parent), name)
    try:
        if directory:
            os.mkdir(target)
        else:
            with open(target, "wb") as handle:
                handle.write(b"data\n")
    except OSError:
        pytest.skip("file system rejects names that are not valid UTF-8")
    return Path(os.fsdecode(target))


class BrokenGitRunner:
    """Run real git, but fail one subcommand in one named repository."""

    def __init__(
        self,
        repo_name: str,
        subcommand: str,
        failure: exec_util.CommandResult | OSError,
    ) -> None:
        self.repo_name = repo_name
        self.subcommand = subcommand
        self.failure = failure
        self.inner = exec_util.SubprocessCommandRunner()

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        argv = list(request.argv)
        index = argv.index("-C")
        if Path(argv[index + 1]).name == self.repo_name and argv[index + 2] == self.subcommand:
            if isinstance(self.failure, OSError):
                raise self.failure
            return self.failure
        return self.inner.run(request)
