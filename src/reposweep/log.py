"""Structured terminal logging for repo-sweep.

Messages often carry file system paths, which on POSIX may hold bytes that
are not valid UTF-8 (Python keeps them as lone surrogates). Every message is
rendered lossily before it reaches the console, so reporting a path can
never fail.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import IntEnum

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


LEVEL_NAMES = ("trace", "debug", "info", "success", "warning", "error")

_LEVEL_BY_NAME = {name: LogLevel[name.upper()] for name in LEVEL_NAMES}
_LEVEL_BY_NAME["warn"] = LogLevel.WARNING
_LEVEL_STYLES = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}
_TRUTHY = {"1", "true", "yes", "on"}
_DEFAULT_LEVEL = LogLevel.INFO
_configured_level = None
_no_color = None


def _normalize_level(value: str | None) -> LogLevel:
    if value is None:
        return _DEFAULT_LEVEL
    normalized = value.strip().lower()
    if not normalized:
        return _DEFAULT_LEVEL
    return _LEVEL_BY_NAME.get(normalized, _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    global _configured_level
    if _configured_level is None:
        _configured_level = _normalize_level(os.environ.get("REPO_SWEEP_LOG_LEVEL"))
    return _configured_level


def set_level(value: str | None) -> None:
    """Set the active log level."""
    global _configured_level
    _configured_level = _normalize_level(value)


def no_color_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Whether the environment asks for plain output.

    Any non-empty ``NO_COLOR`` disables colour; ``REPO_SWEEP_NO_COLOR`` must
    be a truthy word.

    Example:
        >>> no_color_requested({"REPO_SWEEP_NO_COLOR": "0"})
        False
        >>> no_color_requested({"NO_COLOR": "anything"})
        True
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return True
    return env.get("REPO_SWEEP_NO_COLOR", "").strip().lower() in _TRUTHY


def color_disabled() -> bool:
    if _no_color is not None:
        return _no_color
    return no_color_requested()


def set_no_color(value: bool) -> None:
    """Record the resolved colour setting, overriding the environment."""
    global _no_color
    _no_color = bool(value)


def printable(message: str) -> str:
    """Return ``message`` with undecodable path bytes replaced.

    Example:
        >>> printable("plain\\udcff") == "plain\\ufffd"
        True
    """
    try:
        raw = message.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        raw = message.encode("utf-8", errors="surrogatepass")
    return raw.decode("utf-8", errors="replace")


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def _console(*, stderr: bool) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=color_disabled(),
    )


def emit(
    level: LogLevel,
    message: str,
    *,
    style: str | None = None,
    stderr: bool | None = None,
) -> None:
    if not is_enabled(level):
        return
    target_stderr = stderr if stderr is not None else level >= LogLevel.WARNING
    text = Text(printable(message), style=style or _LEVEL_STYLES.get(level, ""))
    _console(stderr=target_stderr).print(text)


def trace(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.TRACE, message, style=style, stderr=False)


def debug(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.DEBUG, message, style=style, stderr=False)


def info(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.INFO, message, style=style, stderr=False)


def success(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.SUCCESS, message, style=style, stderr=False)


def warning(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.WARNING, message, style=style, stderr=True)


def error(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.ERROR, message, style=style, stderr=True)
