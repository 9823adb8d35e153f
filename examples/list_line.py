"""A third-party waiting line on a plain Python list.

Only the kernel hooks are written here; every secondary method comes from
WaitingLineSecondary. Check it with:

    waitingline check examples/list_line.py
"""

from typing import Self, TypeVar

from waitingline import WaitingLineSecondary

T = TypeVar("T")


class ListWaitingLine(WaitingLineSecondary[T]):
    """Entries front to back in ``self._items``; dequeue is O(|this|)."""

    def __init__(self, *, check_preconditions: bool | None = None) -> None:
        super().__init__(check_preconditions=check_preconditions)
        self._items: list[T] = []

    def _push_back(self, x: T) -> None:
        self._items.append(x)

    def _pop_front(self) -> T:
        return self._items.pop(0)

    def _entries(self):
        return self._items

    def _reset(self) -> None:
        self._items = []

    def _take_representation(self, source: Self) -> None:
        self._items = source._items

    def length(self) -> int:
        return len(self._items)

    def contains(self, x: T) -> bool:
        return x in self._items
