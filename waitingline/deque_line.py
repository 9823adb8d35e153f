"""Waiting line backed by :class:`collections.deque`, with a membership index.

Representation: ``self._store`` holds the entries front to back;
``self._index`` counts them for ``contains``.

    enqueue, dequeue, length   O(1)
    contains                   O(1) expected for hashable entries,
                               O(|this|) once an unhashable entry is present
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import Self, TypeVar

from .index import EntryIndex
from .secondary import WaitingLineSecondary

T = TypeVar("T")


class DequeWaitingLine(WaitingLineSecondary[T]):

    def __init__(self, *, check_preconditions: bool | None = None) -> None:
        super().__init__(check_preconditions=check_preconditions)
        self._store: deque[T] = deque()
        self._index = EntryIndex()

    def _push_back(self, x: T) -> None:
        self._store.append(x)
        self._index.add(x)

    def _pop_front(self) -> T:
        x = self._store.popleft()
        self._index.discard(x)
        return x

    def _entries(self) -> Iterable[T]:
        return self._store

    def _reset(self) -> None:
        self._store = deque()
        self._index = EntryIndex()

    def _take_representation(self, source: Self) -> None:
        self._store = source._store
        self._index = source._index

    def length(self) -> int:
        return len(self._store)

    def contains(self, x: T) -> bool:
        found = self._index.lookup(x)
        if found is not None:
            return found
        return any(y == x for y in self._store)
