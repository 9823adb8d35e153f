"""Exception taxonomy for waiting lines.

Every caller contract violation is a :class:`PreconditionError`. Operations
raise before mutating wherever the violation can be detected up front, so a
caught error never leaves a line half-updated.
"""

from __future__ import annotations


class PreconditionError(Exception):
    """A caller violated the requires-clause of an operation."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class EmptyLineError(PreconditionError):
    """dequeue/front/replace_front on a line with no entries."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "line is empty")


class DuplicateEntryError(PreconditionError):
    """enqueue of an entry that is already present."""

    def __init__(self, operation: str, entry: object) -> None:
        super().__init__(operation, f"entry {entry!r} is already in the line")
        self.entry = entry


class AbsentEntryError(PreconditionError):
    """position/remove of an entry that is not present."""

    def __init__(self, operation: str, entry: object) -> None:
        super().__init__(operation, f"entry {entry!r} is not in the line")
        self.entry = entry


class AmbiguousEntryError(PreconditionError):
    """position/remove where several entries compare equal to the probe."""

    def __init__(self, operation: str, entry: object, count: int) -> None:
        super().__init__(
            operation, f"{count} entries compare equal to {entry!r}, expected exactly 1"
        )
        self.entry = entry
        self.count = count


class ConcurrentModificationError(RuntimeError):
    """A line was mutated while one of its iterators was still in progress."""
