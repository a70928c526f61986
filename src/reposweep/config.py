"""Runtime settings for repo-sweep.

Settings come from environment variables and are overridden by CLI options.
There is no configuration file.

Example:
    >>> settings = SweepSettings.from_env({"REPO_SWEEP_JOBS": "4"})
    >>> settings.jobs
    4
    >>> settings.git_path
    'git'
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .log import LEVEL_NAMES, no_color_requested


class SweepSettings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(frozen=True)

    git_path: str = "git"
    log_level: str = "info"
    no_color: bool = False
    jobs: int = Field(default=1, ge=1)

    @field_validator("git_path")
    @classmethod
    def _git_path_not_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("git path must not be empty")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized == "warn":
            normalized = "warning"
        if normalized not in LEVEL_NAMES:
            raise ValueError(f"expected one of: {', '.join(LEVEL_NAMES)}")
        return normalized

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SweepSettings:
        """Build settings from ``REPO_SWEEP_*`` environment variables."""
        env = os.environ if environ is None else environ
        payload: dict[str, object] = {}
        git_path = env.get("REPO_SWEEP_GIT")
        if git_path:
            payload["git_path"] = git_path
        log_level = env.get("REPO_SWEEP_LOG_LEVEL")
        if log_level:
            payload["log_level"] = log_level
        jobs = env.get("REPO_SWEEP_JOBS")
        if jobs:
            payload["jobs"] = jobs
        if no_color_requested(env):
            payload["no_color"] = True
        return cls.model_validate(payload)

    def with_overrides(self, **overrides: object) -> SweepSettings:
        """Return a copy with non-``None`` overrides applied and validated."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return type(self).model_validate({**self.model_dump(), **updates})
