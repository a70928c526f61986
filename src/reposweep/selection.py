"""Interactive selection of the clean repositories to delete."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from . import io, log
from .errors import PathEncodingError, SelectionCancelled

DELETE_ALL = "Delete all repositories"
SELECT_SOME = "Select repositories to delete"
CANCEL = "Cancel"
ACTIONS = (DELETE_ALL, SELECT_SOME, CANCEL)


def display_path(path: Path) -> str:
    """Return ``path`` as UTF-8 representable text.

    Raises:
        PathEncodingError: The path holds bytes that are not valid UTF-8.

    Example:
        >>> display_path(Path("/repos/demo"))
        '/repos/demo'
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathEncodingError(path) from exc
    return text


def choose_repositories(paths: Sequence[Path], *, assume_yes: bool = False) -> list[Path]:
    """Ask the operator which of ``paths`` to delete.

    Args:
        paths: Clean working copies in scan order.
        assume_yes: Skip the final confirmation of the chosen list.

    Returns:
        The chosen paths in scan order; never empty.

    Raises:
        SelectionCancelled: The operator cancelled, aborted a prompt, chose
            nothing, or declined the confirmation.
        PathEncodingError: A path cannot be shown as text.
    """
    labels = [display_path(path) for path in paths]
    by_label = dict(zip(labels, paths))

    action = io.select("What do you want to do?", ACTIONS)
    if action is None or action == CANCEL:
        raise SelectionCancelled()

    if action == DELETE_ALL:
        chosen = labels
    else:
        picked = io.checkbox(
            "Select the repositories that should be deleted", labels, checked=True
        )
        if not picked:
            raise SelectionCancelled()
        chosen = picked

    if not assume_yes:
        log.info("The following repositories will be deleted:", style="red")
        for label in chosen:
            log.info(f"  {label}", style="red")
        if not io.confirm(f"Delete {len(chosen)} repositories?", default=False):
            raise SelectionCancelled()

    return [by_label[label] for label in chosen]
