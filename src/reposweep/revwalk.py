"""Push/hide reachability walk over a commit graph.

Edges point from a commit to its parents. Walking yields every commit
reachable from a pushed oid that is not reachable from any hidden oid.

Example:
    >>> graph = {"c3": ("c2",), "c2": ("c1",), "c1": ()}
    >>> walk = RevWalk(graph.__getitem__)
    >>> walk.push("c3")
    >>> walk.hide("c2")
    >>> list(walk)
    ['c3']
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence

from .errors import BackendError

ParentLookup = Callable[[str], Sequence[str]]


class RevWalk:
    """Set-difference walk: ancestors of pushed tips minus ancestors of hidden tips.

    Commits are yielded lazily, each at most once, so a caller that only
    needs to know whether the difference is empty can stop after the first
    item. Enumeration order is unspecified.
    """

    def __init__(self, parents: ParentLookup) -> None:
        self._parents = parents
        self._pushed: list[str] = []
        self._hidden: list[str] = []

    def push(self, oid: str) -> None:
        self._lookup(oid)
        self._pushed.append(oid)

    def hide(self, oid: str) -> None:
        self._lookup(oid)
        self._hidden.append(oid)

    def push_all(self, oids: Iterable[str]) -> None:
        for oid in oids:
            self.push(oid)

    def hide_all(self, oids: Iterable[str]) -> None:
        for oid in oids:
            self.hide(oid)

    def _lookup(self, oid: str) -> Sequence[str]:
        try:
            return self._parents(oid)
        except KeyError as exc:
            raise BackendError(f"unknown commit {oid}") from exc

    def _closure(self, tips: Iterable[str]) -> set[str]:
        reached: set[str] = set()
        stack = list(tips)
        while stack:
            oid = stack.pop()
            if oid in reached:
                continue
            reached.add(oid)
            stack.extend(parent for parent in self._lookup(oid) if parent not in reached)
        return reached

    def __iter__(self) -> Iterator[str]:
        # Hidden ancestry is resolved up front: a commit reachable from a
        # hidden tip must never be yielded, whichever side reaches it first.
        seen = self._closure(self._hidden)
        stack = [oid for oid in reversed(self._pushed) if oid not in seen]
        while stack:
            oid = stack.pop()
            if oid in seen:
                continue
            seen.add(oid)
            parents = self._lookup(oid)
            yield oid
            stack.extend(parent for parent in parents if parent not in seen)


def first_unhidden(parents: ParentLookup, push: Iterable[str], hide: Iterable[str]) -> str | None:
    """Return any commit reachable from ``push`` but not from ``hide``.

    Example:
        >>> graph = {"b": ("a",), "a": ()}
        >>> first_unhidden(graph.__getitem__, ["b"], ["b"]) is None
        True
    """
    walk = RevWalk(parents)
    walk.push_all(push)
    walk.hide_all(hide)
    return next(iter(walk), None)
