"""Command-line entry point for repo-sweep."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from . import __version__
from . import log as sweep_log
from .config import SweepSettings
from .deletion import delete_repositories
from .errors import PathEncodingError, SelectionCancelled, SweepError
from .io import die
from .scan import scan
from .selection import choose_repositories

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Find git working copies with no local-only work and delete them.",
)


class LogLevelChoice(str, Enum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _resolve_settings(
    *, log_level: LogLevelChoice | None, no_color: bool, jobs: int | None
) -> SweepSettings:
    try:
        return SweepSettings.from_env().with_overrides(
            log_level=log_level.value if log_level else None,
            no_color=True if no_color else None,
            jobs=jobs,
        )
    except ValidationError as exc:
        die(f"invalid configuration: {exc}")


def _failure_message(exc: SweepError) -> str:
    if exc.recovery_hint:
        return f"{exc} (hint: {exc.recovery_hint})"
    return str(exc)


@app.command()
def sweep(
    directory: Annotated[
        Path,
        typer.Option("--directory", "-d", help="Directory whose subdirectories are scanned."),
    ] = Path("."),
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Report clean repositories without prompting or deleting."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the final confirmation before deleting."),
    ] = False,
    jobs: Annotated[
        Optional[int],
        typer.Option("--jobs", "-j", min=1, help="Repositories to evaluate in parallel."),
    ] = None,
    log_level: Annotated[
        Optional[LogLevelChoice],
        typer.Option("--log-level", case_sensitive=False, help="Minimum level of messages to show."),
    ] = None,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable colored output."),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """Scan DIRECTORY for clean git repositories and offer to delete them."""
    settings = _resolve_settings(log_level=log_level, no_color=no_color, jobs=jobs)
    sweep_log.set_level(settings.log_level)
    sweep_log.set_no_color(settings.no_color)

    root = directory.expanduser()
    try:
        result = scan(root, settings)
    except SweepError as exc:
        die(_failure_message(exc))

    clean = result.clean
    sweep_log.debug(
        f"{len(clean)} clean, {len(result.unclean)} not clean, "
        f"{len(result.skipped)} skipped"
    )
    if not clean:
        sweep_log.info("No clean repositories found.")
        return

    sweep_log.success("Found the following clean repositories:")
    for path in clean:
        sweep_log.success(str(path))

    if dry_run:
        sweep_log.info("Dry run: nothing was deleted.")
        return

    try:
        targets = choose_repositories(clean, assume_yes=yes)
    except SelectionCancelled as exc:
        sweep_log.info(str(exc), style="red")
        return
    except PathEncodingError as exc:
        die(_failure_message(exc))

    report = delete_repositories(targets)
    if report.failed:
        sweep_log.warning(
            f"Deleted {len(report.deleted)} repositories; "
            f"{len(report.failed)} could not be deleted"
        )
    else:
        sweep_log.success(f"Deleted {len(report.deleted)} repositories")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
