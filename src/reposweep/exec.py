"""Subprocess helpers for running external commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request."""

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout_seconds: float | None = None
    input: bytes | None = None


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result.

    ``stdout`` is kept as bytes so NUL-separated git output and paths that
    are not valid UTF-8 survive intact.
    """

    argv: tuple[str, ...]
    returncode: int
    stdout: bytes
    stderr: str
    timed_out: bool = False

    @property
    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="surrogateescape")


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "env": request.env,
            "check": False,
            "capture_output": True,
        }
        if request.input is None:
            run_kwargs["stdin"] = subprocess.DEVNULL
        else:
            run_kwargs["input"] = request.input
        if request.timeout_seconds is not None:
            run_kwargs["timeout"] = request.timeout_seconds
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                argv=request.argv,
                returncode=124,
                stdout=exc.stdout if isinstance(exc.stdout, bytes) else b"",
                stderr=_decode_stderr(exc.stderr),
                timed_out=True,
            )

        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=completed.stdout if isinstance(completed.stdout, bytes) else b"",
            stderr=_decode_stderr(completed.stderr),
        )


def _decode_stderr(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return ""


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    return active_runner.run(request)


def command_failure_detail(result: CommandResult) -> str:
    """Describe a failed command using its stderr (or stdout) output."""
    output = (result.stderr or result.text or "").strip()
    command_text = " ".join(result.argv)
    if result.timed_out:
        return f"command timed out: {command_text}"
    if output:
        return f"command failed: {command_text}\n{output}"
    return f"command failed: {command_text}"
