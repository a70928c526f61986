# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import reposweep.io as io
import reposweep.log as sweep_log


@pytest.fixture(autouse=True)
def _default_io_patches(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(io, "_use_questionary", lambda: False)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)


@pytest.fixture(autouse=True)
def _default_log_state(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("REPO_SWEEP_LOG_LEVEL", "REPO_SWEEP_JOBS", "REPO_SWEEP_GIT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(sweep_log, "_configured_level", None)
    monkeypatch.setattr(sweep_log, "_no_color", None)
