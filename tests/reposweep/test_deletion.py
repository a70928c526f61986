import shutil
import stat
from pathlib import Path

import pytest

from reposweep import deletion


def _make_repo_dir(path: Path) -> Path:
    (path / ".git" / "objects" / "ab").mkdir(parents=True)
    (path / "README.md").write_text("hello\n", encoding="utf-8")
    return path


def test_delete_repositories_removes_every_path(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    paths = [_make_repo_dir(tmp_path / "one"), _make_repo_dir(tmp_path / "two")]

    report = deletion.delete_repositories(paths)
    output = capsys.readouterr().out

    assert report.deleted == paths
    assert report.ok
    assert not any(path.exists() for path in paths)
    assert "Deleting a total of 2 repositories" in output
    assert f"Deleting {paths[0]}" in output


def test_path_removed_before_deletion_is_a_benign_skip(tmp_path: Path) -> None:
    paths = [_make_repo_dir(tmp_path / name) for name in ("one", "two", "three")]
    shutil.rmtree(paths[1])

    report = deletion.delete_repositories(paths)

    assert report.deleted == [paths[0], paths[2]]
    assert report.missing == [paths[1]]
    assert report.ok


def test_failure_is_reported_and_batch_continues(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    paths = [_make_repo_dir(tmp_path / "locked"), _make_repo_dir(tmp_path / "free")]
    real_remove = deletion.remove_tree

    def flaky_remove(path: Path) -> None:
        if path.name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        real_remove(path)

    monkeypatch.setattr(deletion, "remove_tree", flaky_remove)

    report = deletion.delete_repositories(paths)

    assert report.deleted == [paths[1]]
    assert [path for path, _ in report.failed] == [paths[0]]
    assert not report.ok
    assert paths[0].exists()
    assert f"Failed to delete {paths[0]}" in capsys.readouterr().err


def test_concurrent_removal_during_rmtree_counts_as_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = _make_repo_dir(tmp_path / "racy")

    def vanish(target: Path) -> None:
        raise FileNotFoundError(2, "No such file or directory", str(target))

    monkeypatch.setattr(deletion, "remove_tree", vanish)

    report = deletion.delete_repositories([path])
    assert report.missing == [path]
    assert report.ok


def test_remove_tree_retries_after_clearing_read_only_bits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = _make_repo_dir(tmp_path / "readonly")
    obj = path / ".git" / "objects" / "ab" / "cdef"
    obj.write_bytes(b"blob")
    obj.chmod(stat.S_IREAD)
    real_rmtree = shutil.rmtree
    calls: list[Path] = []

    def rmtree_once_denied(target: Path) -> None:
        calls.append(Path(target))
        if len(calls) == 1:
            raise PermissionError(13, "Permission denied", str(target))
        real_rmtree(target)

    monkeypatch.setattr(deletion.shutil, "rmtree", rmtree_once_denied)

    deletion.remove_tree(path)

    assert calls == [path, path]
    assert not path.exists()
