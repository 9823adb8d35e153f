"""Conformance checks for waiting-line implementations.

``check_kernel(cls)`` builds fresh lines from ``cls`` and runs every law in
:data:`CHECKS` against them: the kernel contract, the Standard methods,
fail-fast iteration, and each derived operation. Failures never propagate;
each becomes a :class:`Diagnostic` so that one broken primitive does not
hide the rest of the report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from .errors import (
    AbsentEntryError,
    ConcurrentModificationError,
    DuplicateEntryError,
    EmptyLineError,
    PreconditionError,
)
from .order import natural_order, reverse_order
from .secondary import WaitingLineSecondary

logger = logging.getLogger(__name__)

LineClass: TypeAlias = type[WaitingLineSecondary[Any]]


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    message: str


@dataclass(frozen=True)
class CheckResult:
    impl_name: str
    checks_run: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def failed_checks(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(d.check for d in self.errors))

    @property
    def is_conforming(self) -> bool:
        return len(self.errors) == 0


class _CheckFailed(Exception):
    pass


@dataclass
class CheckContext:
    cls: LineClass
    check: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.diagnostics.append(Diagnostic(self.check, Severity.ERROR, message))

    def warning(self, message: str) -> None:
        self.diagnostics.append(Diagnostic(self.check, Severity.WARNING, message))

    def line(self, entries: Iterable[Any] = ()) -> WaitingLineSecondary[Any]:
        q = self.cls(check_preconditions=True)
        for x in entries:
            q.enqueue(x)
        return q

    def expect(self, condition: bool, message: str) -> None:
        """Record an error and stop the current check when ``condition`` is false."""
        if not condition:
            self.error(message)
            raise _CheckFailed(message)

    def expect_contents(self, q: WaitingLineSecondary[Any], expected: list[Any], what: str) -> None:
        actual = list(q)
        self.expect(
            actual == expected and q.length() == len(expected),
            f"{what}: expected <{_render(expected)}> (length {len(expected)}), "
            f"got {q} (length {q.length()})",
        )

    def expect_raises(
        self, exc: type[BaseException], fn: Callable[[], object], what: str
    ) -> None:
        try:
            fn()
        except exc:
            return
        except Exception as e:
            self.expect(False, f"{what}: expected {exc.__name__}, got {type(e).__name__}: {e}")
            return
        self.expect(False, f"{what}: expected {exc.__name__}, nothing was raised")


def _render(entries: list[Any]) -> str:
    return ",".join(str(x) for x in entries)


# ---------------------------------------------------------------------------
# Kernel and Standard methods
# ---------------------------------------------------------------------------


def check_initially_empty(ctx: CheckContext) -> None:
    q = ctx.line()
    ctx.expect_contents(q, [], "new line")
    ctx.expect(not q.contains(1), "new line claims to contain 1")


def check_fifo_order(ctx: CheckContext) -> None:
    q = ctx.line(["a", "b", "c"])
    got = [q.dequeue(), q.dequeue(), q.dequeue()]
    ctx.expect(got == ["a", "b", "c"], f"dequeue order {got}, expected ['a', 'b', 'c']")
    ctx.expect(q.length() == 0, f"length {q.length()} after dequeuing everything")


def check_length_and_contains(ctx: CheckContext) -> None:
    q = ctx.line()
    for i in range(1, 6):
        q.enqueue(i)
        ctx.expect(q.length() == i, f"length {q.length()} after {i} enqueues")
    ctx.expect(q.contains(3) and not q.contains(6), "contains disagrees with contents")
    q.dequeue()
    ctx.expect(not q.contains(1), "contains still reports a dequeued entry")


def check_unhashable_entries(ctx: CheckContext) -> None:
    q = ctx.line([[1], [2]])
    ctx.expect(q.contains([2]), "contains misses an unhashable entry")
    ctx.expect(q.dequeue() == [1], "unhashable entries dequeued out of order")
    ctx.expect(not q.contains([1]), "contains still reports a dequeued unhashable entry")


def check_dequeue_empty(ctx: CheckContext) -> None:
    q = ctx.line()
    ctx.expect_raises(EmptyLineError, q.dequeue, "dequeue on <>")


def check_enqueue_duplicate(ctx: CheckContext) -> None:
    q = ctx.line([1, 2])
    ctx.expect_raises(DuplicateEntryError, lambda: q.enqueue(2), "enqueue of a present entry")
    ctx.expect_contents(q, [1, 2], "line after rejected enqueue")


def check_iteration(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    ctx.expect(list(q) == [1, 2, 3], f"iteration yields {list(q)}")
    ctx.expect(list(q) == [1, 2, 3], "second iteration differs from the first")
    ctx.expect(q.length() == 3, "iteration changed the length")


def check_iteration_fail_fast(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    it = iter(q)
    next(it)
    q.enqueue(4)
    ctx.expect_raises(ConcurrentModificationError, lambda: next(it), "iterator after enqueue")

    early = ctx.line([1, 2, 3])
    untouched = iter(early)
    early.dequeue()
    ctx.expect_raises(
        ConcurrentModificationError,
        lambda: next(untouched),
        "iterator taken before dequeue",
    )


def check_standard(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    fresh = q.new_instance()
    ctx.expect(type(fresh) is type(q), f"new_instance returned {type(fresh).__name__}")
    ctx.expect_contents(fresh, [], "new_instance")

    fresh.enqueue(9)
    fresh.transfer_from(q)
    ctx.expect_contents(fresh, [1, 2, 3], "receiver after transfer_from")
    ctx.expect_contents(q, [], "source after transfer_from")
    q.enqueue(4)
    ctx.expect_contents(fresh, [1, 2, 3], "receiver after enqueue on emptied source")

    fresh.clear()
    ctx.expect_contents(fresh, [], "clear")
    ctx.expect_raises(PreconditionError, lambda: q.transfer_from(q), "transfer_from self")


# ---------------------------------------------------------------------------
# Derived operations
# ---------------------------------------------------------------------------


def check_front(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    ctx.expect(q.front() == 1, "front of <1,2,3> is not 1")
    ctx.expect_contents(q, [1, 2, 3], "line after front")
    ctx.expect_raises(EmptyLineError, ctx.line().front, "front on <>")


def check_replace_front(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    old = q.replace_front(9)
    ctx.expect(old == 1, f"replace_front returned {old}, expected 1")
    ctx.expect_contents(q, [9, 2, 3], "replace_front(9) on <1,2,3>")
    ctx.expect_raises(
        DuplicateEntryError, lambda: q.replace_front(3), "replace_front with a present entry"
    )
    ctx.expect_contents(q, [9, 2, 3], "line after rejected replace_front")


def check_append(ctx: CheckContext) -> None:
    q = ctx.line([1, 2])
    other = ctx.line([3, 4])
    q.append(other)
    ctx.expect_contents(q, [1, 2, 3, 4], "receiver after append")
    ctx.expect_contents(other, [], "argument after append")
    ctx.expect_raises(PreconditionError, lambda: q.append(q), "append to itself")


def check_flip(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3])
    q.flip()
    ctx.expect_contents(q, [3, 2, 1], "flip of <1,2,3>")
    q.flip()
    ctx.expect_contents(q, [1, 2, 3], "flip twice")


def check_rotate(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3, 4, 5])
    q.rotate(2)
    ctx.expect_contents(q, [3, 4, 5, 1, 2], "rotate(2) of <1,2,3,4,5>")
    q.rotate(-2)
    ctx.expect_contents(q, [1, 2, 3, 4, 5], "rotate(-2) after rotate(2)")
    q.rotate(0)
    q.rotate(5)
    ctx.expect_contents(q, [1, 2, 3, 4, 5], "rotate(0) and rotate(length)")
    empty = ctx.line()
    empty.rotate(7)
    ctx.expect_contents(empty, [], "rotate on <>")


def check_position_and_remove(ctx: CheckContext) -> None:
    q = ctx.line([1, 2, 3, 4])
    pos = q.position(3)
    ctx.expect(pos == 2, f"position(3) in <1,2,3,4> is {pos}, expected 2")
    ctx.expect_contents(q, [1, 2, 3, 4], "line after position")
    ctx.expect_raises(AbsentEntryError, lambda: q.position(7), "position of an absent entry")
    q.remove(3)
    ctx.expect_contents(q, [1, 2, 4], "remove(3) from <1,2,3,4>")


def check_sort(ctx: CheckContext) -> None:
    q = ctx.line([3, 1, 2])
    q.sort(natural_order)
    ctx.expect_contents(q, [1, 2, 3], "sort of <3,1,2>")

    entries = [(i * 7919) % 31 for i in range(31)]
    big = ctx.line(entries)
    big.sort(reverse_order(natural_order))
    ctx.expect_contents(big, sorted(entries, reverse=True), "descending sort of 31 entries")

    for entries in ([], [5]):
        small = ctx.line(entries)
        small.sort(natural_order)
        ctx.expect_contents(small, entries, "sort of a trivially sorted line")

    mixed = ctx.line([3, "a", 1, 2])
    ctx.expect_raises(TypeError, lambda: mixed.sort(natural_order), "sort of incomparable entries")
    ctx.expect(
        sorted(mixed, key=repr) == sorted([3, "a", 1, 2], key=repr),
        f"sort lost entries when the comparator raised: {_render(list(mixed))}",
    )


def check_sort_stability(ctx: CheckContext) -> None:
    entries = [("b", 1), ("a", 1), ("b", 2), ("a", 2), ("c", 1), ("a", 3)]
    q = ctx.line(entries)
    q.sort(lambda x, y: natural_order(x[0], y[0]))
    ctx.expect_contents(
        q, sorted(entries, key=lambda e: e[0]), "sort keeps equal entries in order"
    )


def check_common_methods(ctx: CheckContext) -> None:
    a = ctx.line([1, 2, 3])
    b = ctx.line([1, 2, 3])
    ctx.expect(a == b, "equal lines compare unequal")
    ctx.expect(hash(a) == hash(b), "equal lines hash differently")
    ctx.expect(a != ctx.line([1, 2]), "lines of different length compare equal")
    ctx.expect(str(a) == "<1,2,3>", f"str gives {str(a)!r}, expected '<1,2,3>'")
    ctx.expect(str(ctx.line()) == "<>", "str of an empty line is not '<>'")


CHECKS: tuple[tuple[str, Callable[[CheckContext], None]], ...] = (
    ("initially_empty", check_initially_empty),
    ("fifo_order", check_fifo_order),
    ("length_and_contains", check_length_and_contains),
    ("unhashable_entries", check_unhashable_entries),
    ("dequeue_empty", check_dequeue_empty),
    ("enqueue_duplicate", check_enqueue_duplicate),
    ("iteration", check_iteration),
    ("iteration_fail_fast", check_iteration_fail_fast),
    ("standard", check_standard),
    ("front", check_front),
    ("replace_front", check_replace_front),
    ("append", check_append),
    ("flip", check_flip),
    ("rotate", check_rotate),
    ("position_and_remove", check_position_and_remove),
    ("sort", check_sort),
    ("sort_stability", check_sort_stability),
    ("common_methods", check_common_methods),
)


def check_kernel(cls: LineClass, only: Iterable[str] | None = None) -> CheckResult:
    """Run the conformance checks against ``cls`` and collect diagnostics."""
    wanted = set(only) if only is not None else None
    ctx = CheckContext(cls=cls)
    ran: list[str] = []

    for name, fn in CHECKS:
        if wanted is not None and name not in wanted:
            continue
        ctx.check = name
        ran.append(name)
        try:
            fn(ctx)
        except _CheckFailed as e:
            logger.warning("FAILED check %r on %s: %s", name, cls.__name__, e)
        except Exception as e:
            ctx.error(f"raised {type(e).__name__}: {e}")
            logger.warning(
                "FAILED check %r on %s: raised %s", name, cls.__name__, type(e).__name__
            )
        else:
            logger.debug("Check %r passed on %s", name, cls.__name__)

    if wanted is not None:
        for name in sorted(wanted - set(ran)):
            ctx.check = name
            ctx.warning("no such check")

    return CheckResult(
        impl_name=cls.__name__,
        checks_run=tuple(ran),
        diagnostics=tuple(ctx.diagnostics),
    )
