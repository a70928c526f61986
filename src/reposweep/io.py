"""Console I/O helpers for user-facing messages and prompts."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import NoReturn

import questionary

from .log import printable


def _use_questionary() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def say(message: str) -> None:
    """Print a normal message to stdout.

    Args:
        message: Text to print.

    Returns:
        None.

    Example:
        >>> say("Hello")
        Hello
    """
    print(message)


def die(message: str, code: int = 1) -> NoReturn:
    """Print an error message and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.

    Raises:
        SystemExit: Always, with ``code``.
    """
    print(f"error: {printable(message)}", file=sys.stderr)
    sys.exit(code)


def confirm(text: str, default: bool = False) -> bool:
    """Prompt for a yes/no confirmation.

    Args:
        text: Prompt label shown to the user.
        default: Default answer when the user presses enter.

    Returns:
        ``True`` when the user confirms. An aborted prompt counts as ``False``.
    """
    if _use_questionary():
        response = questionary.confirm(text, default=default).ask()
        return bool(response)
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        response = input(f"{text} {suffix}: ").strip().lower()
    except EOFError:
        return False
    if response == "":
        return default
    return response in {"y", "yes"}


def select(text: str, choices: Sequence[str], default: str | None = None) -> str | None:
    """Prompt for exactly one of ``choices``.

    Args:
        text: Prompt label shown to the user.
        choices: Options in display order.
        default: Option preselected (TTY) or used on empty input.

    Returns:
        The chosen option, or ``None`` when the prompt was aborted.
    """
    if not choices:
        raise ValueError("select() requires at least one choice")
    if _use_questionary():
        return questionary.select(text, choices=list(choices), default=default).ask()
    say(text)
    for index, choice in enumerate(choices, start=1):
        say(f"  {index}) {choice}")
    default_index = choices.index(default) + 1 if default in choices else None
    label = f"Choice [{default_index}]" if default_index else "Choice"
    while True:
        try:
            raw = input(f"{label}: ").strip()
        except EOFError:
            return None
        if raw == "" and default_index is not None:
            return choices[default_index - 1]
        if raw.isdigit() and 1 <= int(raw) <= len(choices):
            return choices[int(raw) - 1]
        if raw in choices:
            return raw


def checkbox(
    text: str, choices: Sequence[str], *, checked: bool = True
) -> list[str] | None:
    """Prompt for any subset of ``choices``.

    Args:
        text: Prompt label shown to the user.
        choices: Options in display order.
        checked: Whether every option starts selected.

    Returns:
        The chosen options in their original order, or ``None`` when aborted.
    """
    if _use_questionary():
        answer = questionary.checkbox(
            text,
            choices=[questionary.Choice(choice, value=choice, checked=checked) for choice in choices],
        ).ask()
        if answer is None:
            return None
        picked = set(answer)
        return [choice for choice in choices if choice in picked]
    say(text)
    suffix = "[Y/n]" if checked else "[y/N]"
    selected: list[str] = []
    for choice in choices:
        try:
            response = input(f"  {choice} {suffix}: ").strip().lower()
        except EOFError:
            return None
        if response == "":
            keep = checked
        else:
            keep = response in {"y", "yes"}
        if keep:
            selected.append(choice)
    return selected
