"""Recursive removal of the selected working copies.

Deletion is not transactional: each path is removed independently, failures
are reported per item, and nothing is rolled back.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from . import log


@dataclass
class DeletionReport:
    deleted: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _make_tree_writable(path: Path) -> None:
    for dirpath, dirnames, filenames in os.walk(path):
        for name in (*dirnames, *filenames):
            target = os.path.join(dirpath, name)
            if os.path.islink(target):
                continue
            mode = os.stat(target).st_mode
            os.chmod(target, mode | stat.S_IWRITE)


def remove_tree(path: Path) -> None:
    """Remove ``path`` recursively, clearing read-only bits if needed.

    Git object files are read-only, which blocks deletion on some platforms;
    a permission failure triggers one retry after making the tree writable.
    """
    try:
        shutil.rmtree(path)
    except PermissionError:
        _make_tree_writable(path)
        shutil.rmtree(path)


def delete_repositories(paths: Sequence[Path]) -> DeletionReport:
    """Delete every path in ``paths``, continuing past failures.

    A path that no longer exists is recorded as ``missing`` and is not a
    failure.
    """
    report = DeletionReport()
    log.info(f"Deleting a total of {len(paths)} repositories", style="red")
    for path in paths:
        log.info(f"Deleting {path}", style="red")
        if not path.exists():
            log.info(f"{path} no longer exists; skipping", style="bright_black")
            report.missing.append(path)
            continue
        try:
            remove_tree(path)
        except FileNotFoundError:
            log.info(f"{path} no longer exists; skipping", style="bright_black")
            report.missing.append(path)
            continue
        except OSError as exc:
            log.error(f"Failed to delete {path}: {exc}")
            report.failed.append((path, str(exc)))
            continue
        log.debug(f"Deleted {path}")
        report.deleted.append(path)
    return report
