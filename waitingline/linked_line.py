"""Waiting line backed by singly linked nodes, with a membership index.

Representation:

    self._pre_front   sentinel node; its ``next`` is the front entry
    self._rear        last node (the sentinel when empty)
    self._length      number of entry nodes
    self._index       counts of the entries, see :class:`EntryIndex`

Convention: walking ``next`` from ``_pre_front`` visits exactly
``_length`` entry nodes and ends at ``_rear``.

    enqueue, dequeue, length   O(1)
    contains                   O(1) expected for hashable entries,
                               O(|this|) once an unhashable entry is present
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Self, TypeVar

from .index import EntryIndex
from .secondary import WaitingLineSecondary

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("data", "next")

    def __init__(self, data: T | None = None) -> None:
        self.data = data
        self.next: _Node[T] | None = None


class LinkedWaitingLine(WaitingLineSecondary[T]):

    def __init__(self, *, check_preconditions: bool | None = None) -> None:
        super().__init__(check_preconditions=check_preconditions)
        self._create_new_rep()

    def _create_new_rep(self) -> None:
        self._pre_front: _Node[T] = _Node()
        self._rear = self._pre_front
        self._length = 0
        self._index = EntryIndex()

    def _push_back(self, x: T) -> None:
        node = _Node(x)
        self._rear.next = node
        self._rear = node
        self._length += 1
        self._index.add(x)

    def _pop_front(self) -> T:
        node = self._pre_front.next
        assert node is not None
        self._pre_front = node
        self._length -= 1
        x = node.data
        node.data = None
        self._index.discard(x)
        return x  # type: ignore[return-value]

    def _entries(self) -> Iterator[T]:
        node = self._pre_front.next
        while node is not None:
            yield node.data  # type: ignore[misc]
            node = node.next

    def _reset(self) -> None:
        self._create_new_rep()

    def _take_representation(self, source: Self) -> None:
        self._pre_front = source._pre_front
        self._rear = source._rear
        self._length = source._length
        self._index = source._index

    def length(self) -> int:
        return self._length

    def contains(self, x: T) -> bool:
        found = self._index.lookup(x)
        if found is not None:
            return found
        return any(y == x for y in self._entries())
