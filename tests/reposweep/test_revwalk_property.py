from __future__ import annotations

from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from reposweep.evaluator import evaluate
from reposweep.memory import MemoryRepository
from reposweep.models import StatusEntry, StatusKind, VerdictReason
from reposweep.revwalk import RevWalk


@st.composite
def commit_graphs(draw: st.DrawFn) -> dict[str, tuple[str, ...]]:
    size = draw(st.integers(min_value=1, max_value=25))
    commits: dict[str, tuple[str, ...]] = {}
    for index in range(size):
        parents: list[int] = []
        if index:
            parents = draw(
                st.lists(st.integers(min_value=0, max_value=index - 1), max_size=3, unique=True)
            )
        commits[f"c{index}"] = tuple(f"c{parent}" for parent in parents)
    return commits


@st.composite
def graphs_with_tips(
    draw: st.DrawFn,
) -> tuple[dict[str, tuple[str, ...]], list[str], list[str]]:
    commits = draw(commit_graphs())
    oids = sorted(commits)
    push = draw(st.lists(st.sampled_from(oids), max_size=4))
    hide = draw(st.lists(st.sampled_from(oids), max_size=4))
    return commits, push, hide


def _ancestors(commits: dict[str, tuple[str, ...]], tips: list[str]) -> set[str]:
    reached: set[str] = set()
    pending = list(tips)
    while pending:
        oid = pending.pop()
        if oid not in reached:
            reached.add(oid)
            pending.extend(commits[oid])
    return reached


@given(graphs_with_tips())
def test_walk_matches_ancestor_set_difference(
    case: tuple[dict[str, tuple[str, ...]], list[str], list[str]],
) -> None:
    commits, push, hide = case
    walk = RevWalk(commits.__getitem__)
    walk.push_all(push)
    walk.hide_all(hide)
    yielded = list(walk)

    assert len(yielded) == len(set(yielded))
    assert set(yielded) == _ancestors(commits, push) - _ancestors(commits, hide)


@given(graphs_with_tips(), st.booleans())
def test_verdict_follows_status_and_reachability(
    case: tuple[dict[str, tuple[str, ...]], list[str], list[str]], dirty: bool
) -> None:
    commits, push, hide = case
    repo = MemoryRepository(
        commits,
        local_branches={f"local{index}": oid for index, oid in enumerate(push)},
        remote_branches={f"origin/r{index}": oid for index, oid in enumerate(hide)},
        status_entries=[StatusEntry(StatusKind.MODIFIED, "file.txt")] if dirty else [],
    )
    verdict = evaluate(repo, Path("/repos/demo"))

    unpushed = bool(_ancestors(commits, push) - _ancestors(commits, hide))
    if dirty:
        assert verdict.reason is VerdictReason.HAS_WORKING_TREE_CHANGES
    assert verdict.has(VerdictReason.HAS_UNPUSHED_COMMITS) is unpushed
    assert verdict.is_clean is (not dirty and not unpushed)
