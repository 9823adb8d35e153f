"""Membership index shared by the shipped stores.

Hashable entries are counted in a :class:`collections.Counter`; entries
that cannot be hashed are only counted, so a lookup falls back to an
equality scan once one of them is present.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable


def hashable(x: object) -> bool:
    if not isinstance(x, Hashable):
        return False
    try:
        hash(x)
    except TypeError:
        return False
    return True


class EntryIndex:
    __slots__ = ("counts", "unhashable")

    def __init__(self) -> None:
        self.counts: Counter[Hashable] = Counter()
        self.unhashable = 0

    def add(self, x: object) -> None:
        if hashable(x):
            self.counts[x] += 1  # type: ignore[index]
        else:
            self.unhashable += 1

    def discard(self, x: object) -> None:
        if hashable(x):
            self.counts[x] -= 1  # type: ignore[index]
            if self.counts[x] <= 0:  # type: ignore[index]
                del self.counts[x]  # type: ignore[arg-type]
        else:
            self.unhashable -= 1

    def lookup(self, x: object) -> bool | None:
        """True or False when the index alone decides; None when a scan is needed."""
        if not hashable(x):
            return None
        if x in self.counts:
            return True
        return False if self.unhashable == 0 else None
