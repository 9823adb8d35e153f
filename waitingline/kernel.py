"""Kernel of the waiting line: the primitive FIFO operations.

A waiting line is modelled by a string of T with no two entries equal:

    initially   this = <>
    enqueue(x)  requires x is not in this;  ensures this = #this * <x>
    dequeue()   requires this /= <>;        ensures #this = <dequeue> * this
    length()    ensures length = |this|
    contains(x) ensures contains = (x is in this)

plus the Standard methods every component carries:

    new_instance()        a fresh empty line of the same concrete type
    clear()               this = <>
    transfer_from(src)    this = #src and src = <>

A backing store subclasses :class:`WaitingLineKernel` (usually through
:class:`~waitingline.secondary.WaitingLineSecondary`) and implements only
the underscore hooks plus ``length`` and ``contains``. Precondition checks,
mutation tracking and fail-fast iteration live here, once, for every store.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Generic, Self, TypeVar

from .config import get_settings
from .errors import (
    ConcurrentModificationError,
    DuplicateEntryError,
    EmptyLineError,
    PreconditionError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WaitingLineKernel(ABC, Generic[T]):
    """First-in-first-out waiting line kernel with primary methods.

    Entries are held by reference; ``enqueue`` hands the caller's object to
    the line. Iterators are fail-fast: any mutation of the line while a
    traversal is in progress makes that traversal raise
    :class:`~waitingline.errors.ConcurrentModificationError` on its next step.
    """

    def __init__(self, *, check_preconditions: bool | None = None) -> None:
        if check_preconditions is None:
            check_preconditions = get_settings().check_preconditions
        self._check = check_preconditions
        self._version = 0

    # -- store hooks --------------------------------------------------------

    @abstractmethod
    def _push_back(self, x: T) -> None:
        """Append ``x`` to the store; no checks."""

    @abstractmethod
    def _pop_front(self) -> T:
        """Remove and return the front of a non-empty store."""

    @abstractmethod
    def _entries(self) -> Iterable[T]:
        """Front-to-back view of the store."""

    @abstractmethod
    def _reset(self) -> None:
        """Rebind the store to a new empty one.

        Must not empty the old store in place: ``transfer_from`` resets the
        source after the receiver has adopted its store.
        """

    @abstractmethod
    def _take_representation(self, source: Self) -> None:
        """Adopt ``source``'s store; ``source`` is reset afterwards by the caller."""

    # -- kernel -------------------------------------------------------------

    @abstractmethod
    def length(self) -> int: ...

    @abstractmethod
    def contains(self, x: T) -> bool: ...

    def enqueue(self, x: T) -> None:
        """Adds ``x`` to the end of this line."""
        if self._check and self.contains(x):
            raise DuplicateEntryError("enqueue", x)
        self._enqueue_unchecked(x)

    def dequeue(self) -> T:
        """Removes and returns the entry at the front of this line."""
        if self.length() == 0:
            raise EmptyLineError("dequeue")
        self._version += 1
        return self._pop_front()

    def _enqueue_unchecked(self, x: T) -> None:
        # Only for entries that are known not to be present, e.g. one just
        # dequeued from this same line.
        self._version += 1
        self._push_back(x)

    def __iter__(self) -> Iterator[T]:
        return self._traverse(self._version)

    def _traverse(self, version: int) -> Iterator[T]:
        it = iter(self._entries())
        while True:
            if self._version != version:
                raise ConcurrentModificationError(
                    f"{type(self).__name__} was modified during iteration"
                )
            try:
                x = next(it)
            except StopIteration:
                return
            yield x

    # -- Standard -----------------------------------------------------------

    @property
    def checks_preconditions(self) -> bool:
        return self._check

    def new_instance(self) -> Self:
        return type(self)(check_preconditions=self._check)

    def clear(self) -> None:
        self._version += 1
        self._reset()

    def transfer_from(self, source: Self) -> None:
        """Moves the contents of ``source`` into this line, leaving ``source`` empty."""
        if source is self:
            raise PreconditionError("transfer_from", "source must not be the receiver")
        if type(source) is not type(self):
            raise PreconditionError(
                "transfer_from",
                f"source is a {type(source).__name__}, expected {type(self).__name__}",
            )
        self._version += 1
        source._version += 1
        self._take_representation(source)
        source._reset()
        logger.debug("transfer_from moved %d entries", self.length())
