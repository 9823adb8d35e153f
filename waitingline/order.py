"""Comparators for :meth:`WaitingLineSecondary.sort`.

A comparator ``order(a, b)`` returns a negative number when ``a`` goes
strictly before ``b``, zero when neither does, and a positive number when
``b`` goes strictly before ``a``. ``sort`` requires the relation it induces
to be a total preorder:

    for all x, y, z:  (x <= y or y <= x)  and  (x <= y and y <= z  implies  x <= z)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeAlias, TypeVar

T = TypeVar("T")

E = TypeVar("E")

Comparator: TypeAlias = Callable[[E, E], int]


def natural_order(a: Any, b: Any) -> int:
    """Order by the entries' own ``<``."""
    return (a > b) - (a < b)


def reverse_order(order: Comparator[T]) -> Comparator[T]:
    def reversed_(a: T, b: T) -> int:
        return order(b, a)

    return reversed_


def by_key(key: Callable[[T], Any], order: Comparator[Any] = natural_order) -> Comparator[T]:
    """Compare entries by ``order`` applied to ``key(entry)``."""

    def keyed(a: T, b: T) -> int:
        return order(key(a), key(b))

    return keyed
