"""Layered implementations of the secondary waiting-line methods.

Every method here is written against the kernel alone (enqueue, dequeue,
length, contains, iteration and the Standard methods) and never touches a
backing store, so any store that implements the kernel inherits all of
them unchanged.

Execution-time performance, counting kernel calls as O(1):

    front, replace_front, flip, position, remove    O(|this|)
    append                                          O(|q|)
    sort                                            O(|this| log |this|)
    rotate                                          O(distance mod |this|)

With precondition checks enabled, ``enqueue`` of a caller-supplied entry
also pays for ``contains``; entries that merely travel around the same
line are not re-checked.
"""

from __future__ import annotations

import itertools
import logging
from typing import TypeVar

from .errors import (
    AbsentEntryError,
    AmbiguousEntryError,
    DuplicateEntryError,
    EmptyLineError,
    PreconditionError,
)
from .kernel import WaitingLineKernel
from .order import Comparator

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HASH_SAMPLES = 2
_HASH_A = 37
_HASH_B = 17


class WaitingLineSecondary(WaitingLineKernel[T]):
    """:class:`WaitingLineKernel` enhanced with secondary methods.

    IS_SORTED(s, r) holds when r(x, y) for every adjacent pair <x, y> of s.
    """

    # -- common methods -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, WaitingLineKernel):
            return NotImplemented
        if self.length() != other.length():
            return False
        return all(a == b for a, b in zip(self, other, strict=True))

    def __hash__(self) -> int:
        # O(1): equal lines agree on their leading entries.
        result = 0
        for x in itertools.islice(self, _HASH_SAMPLES):
            result = _HASH_A * result + _HASH_B * hash(x)
        return result

    def __str__(self) -> str:
        return "<" + ",".join(str(x) for x in self) + ">"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    # -- helpers ------------------------------------------------------------

    def _cycle(self, count: int) -> None:
        """Move ``count`` entries from the front to the back, one at a time."""
        for _ in range(count):
            self._enqueue_unchecked(self.dequeue())

    def _drain(self, source: WaitingLineKernel[T]) -> None:
        while source.length() != 0:
            self._enqueue_unchecked(source.dequeue())

    def _scan(self, entry: T) -> tuple[int, int]:
        """One full cycle; returns (number of entries equal to ``entry``, first index).

        The line is back in its original order when this returns.
        """
        count = 0
        first = -1
        for i in range(self.length()):
            x = self.dequeue()
            self._enqueue_unchecked(x)
            if x == entry:
                if count == 0:
                    first = i
                count += 1
        return count, first

    def _locate(self, operation: str, entry: T) -> int:
        count, first = self._scan(entry)
        if count == 0:
            raise AbsentEntryError(operation, entry)
        if count > 1 and self._check:
            raise AmbiguousEntryError(operation, entry, count)
        return first

    # -- secondary methods --------------------------------------------------

    def front(self) -> T:
        """Reports the front of this line.

        requires this /= <>
        ensures  <front> is prefix of this
        """
        if self.length() == 0:
            raise EmptyLineError("front")
        x = self.dequeue()
        rest = self.length()
        self._enqueue_unchecked(x)
        self._cycle(rest)
        return x

    def replace_front(self, x: T) -> T:
        """Replaces the front of this line with ``x`` and returns the old front.

        requires this /= <>  and  x is not in #this[1, |#this|)
        ensures  <replace_front> is prefix of #this  and
                 this = <x> * #this[1, |#this|)

        The line is rotated a counted number of times rather than until an
        entry equal to ``x`` reappears at the front, so a stray equal entry
        cannot end the rotation early. With checks enabled such an entry is
        rejected before anything moves.
        """
        if self.length() == 0:
            raise EmptyLineError("replace_front")
        if self._check:
            count, first = self._scan(x)
            if count > 1 or (count == 1 and first != 0):
                raise DuplicateEntryError("replace_front", x)
        old = self.dequeue()
        rest = self.length()
        self._enqueue_unchecked(x)
        self._cycle(rest)
        return old

    def append(self, q: WaitingLineKernel[T]) -> None:
        """Concatenates ``q`` to the end of this line and clears ``q``.

        ensures this = #this * #q  and  q = <>
        """
        if q is self:
            raise PreconditionError("append", "cannot append a line to itself")
        if self._check:
            for x in q:
                if self.contains(x):
                    raise DuplicateEntryError("append", x)
        moved = q.length()
        self._drain(q)
        logger.debug("append moved %d entries", moved)

    def flip(self) -> None:
        """Reverses this line.

        ensures this = rev(#this)
        """
        stack: list[T] = []
        while self.length() != 0:
            stack.append(self.dequeue())
        while stack:
            self._enqueue_unchecked(stack.pop())

    def sort(self, order: Comparator[T]) -> None:
        """Sorts this line by ``order``; stable.

        requires IS_TOTAL_PREORDER(order)
        ensures  perms(this, #this)  and  IS_SORTED(this, order)

        The entries are split into two fresh lines of the same kind, each half
        is sorted recursively, and the halves are merged back. A comparator
        that is not a total preorder gives an unspecified order, but the
        result is always a permutation of the original entries. If ``order``
        raises, every entry is put back into this line (in unspecified order)
        before the exception propagates.
        """
        n = self.length()
        if n <= 1:
            return
        left = self.new_instance()
        right = self.new_instance()
        for _ in range(n // 2):
            left._enqueue_unchecked(self.dequeue())
        right.transfer_from(self)
        logger.debug("sort split %d entries into %d + %d", n, left.length(), right.length())

        try:
            left.sort(order)
            right.sort(order)
            self._merge(left, right, order)
        except BaseException:
            self._drain(left)
            self._drain(right)
            logger.debug("sort of %d entries aborted; entries restored", n)
            raise

    def _merge(
        self,
        left: WaitingLineKernel[T],
        right: WaitingLineKernel[T],
        order: Comparator[T],
    ) -> None:
        a = left.dequeue()
        b = right.dequeue()
        while True:
            try:
                b_first = order(b, a) < 0
            except BaseException:
                self._enqueue_unchecked(a)
                self._enqueue_unchecked(b)
                raise
            if b_first:
                self._enqueue_unchecked(b)
                if right.length() == 0:
                    self._enqueue_unchecked(a)
                    break
                b = right.dequeue()
            else:
                self._enqueue_unchecked(a)
                if left.length() == 0:
                    self._enqueue_unchecked(b)
                    break
                a = left.dequeue()
        self._drain(left)
        self._drain(right)

    def rotate(self, distance: int) -> None:
        """Rotates this line left by ``distance``.

        ensures if #this = <> then this = #this
                else this = #this[d, |#this|) * #this[0, d)  where d = distance mod |#this|
        """
        n = self.length()
        if n == 0:
            return
        effective = distance % n
        logger.debug("rotate %d normalised to %d over %d entries", distance, effective, n)
        self._cycle(effective)

    def remove(self, value: T) -> T:
        """Removes the single entry equal to ``value`` and returns it.

        requires value is in this, exactly once
        ensures  this = #this with that one entry removed, order otherwise kept
        """
        pos = self._locate("remove", value)
        n = self.length()
        self._cycle(pos)
        removed = self.dequeue()
        self._cycle(n - pos - 1)
        return removed

    def position(self, entry: T) -> int:
        """Reports the zero-based index of ``entry`` from the front.

        requires entry is in this, exactly once

        An absent entry always raises. Several equal entries raise when
        precondition checks are on; otherwise the first one wins.
        """
        return self._locate("position", entry)
