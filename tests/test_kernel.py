"""Tests for the kernel primitives and Standard methods of both shipped stores."""

import pytest

from waitingline import (
    ConcurrentModificationError,
    DequeWaitingLine,
    DuplicateEntryError,
    EmptyLineError,
    LinkedWaitingLine,
    PreconditionError,
)

KERNELS = [DequeWaitingLine, LinkedWaitingLine]


def make(cls, *entries, **kwargs):
    q = cls(**kwargs)
    for x in entries:
        q.enqueue(x)
    return q


@pytest.mark.parametrize("cls", KERNELS)
class TestKernel:
    def test_initially_empty(self, cls) -> None:
        q = cls()
        assert q.length() == 0
        assert list(q) == []
        assert not q.contains(1)

    def test_fifo_order(self, cls) -> None:
        q = make(cls, "a", "b", "c")
        assert q.dequeue() == "a"
        assert q.dequeue() == "b"
        assert q.dequeue() == "c"
        assert q.length() == 0

    def test_enqueued_entry_comes_out_last(self, cls) -> None:
        q = make(cls, 1, 2, 3)
        q.enqueue(4)
        out = [q.dequeue() for _ in range(4)]
        assert out[-1] == 4

    def test_entries_are_held_by_reference(self, cls) -> None:
        entry = {"id": 1}
        q = make(cls, entry)
        assert q.dequeue() is entry

    def test_length_and_contains(self, cls) -> None:
        q = make(cls, 1, 2, 3)
        assert q.length() == 3
        assert q.contains(2)
        assert not q.contains(4)
        q.dequeue()
        assert not q.contains(1)

    def test_dequeue_empty_raises(self, cls) -> None:
        q = cls()
        with pytest.raises(EmptyLineError) as excinfo:
            q.dequeue()
        assert excinfo.value.operation == "dequeue"

    def test_enqueue_duplicate_raises_without_mutating(self, cls) -> None:
        q = make(cls, 1, 2)
        with pytest.raises(DuplicateEntryError):
            q.enqueue(1)
        assert list(q) == [1, 2]

    def test_duplicate_check_can_be_disabled(self, cls) -> None:
        q = make(cls, 1, check_preconditions=False)
        q.enqueue(1)
        assert list(q) == [1, 1]

    def test_disabled_by_environment(self, cls, monkeypatch: pytest.MonkeyPatch) -> None:
        from waitingline.config import get_settings

        monkeypatch.setenv("WAITINGLINE_CHECK_PRECONDITIONS", "off")
        get_settings.cache_clear()
        q = make(cls, 1)
        assert not q.checks_preconditions
        q.enqueue(1)
        assert q.length() == 2

    def test_unhashable_entries(self, cls) -> None:
        q = make(cls, [1], [2])
        assert q.contains([2])
        assert not q.contains([3])
        with pytest.raises(DuplicateEntryError):
            q.enqueue([1])
        assert q.dequeue() == [1]
        assert not q.contains([1])

    def test_iteration_is_restartable(self, cls) -> None:
        q = make(cls, 1, 2, 3)
        assert list(q) == [1, 2, 3]
        assert list(q) == [1, 2, 3]
        assert q.length() == 3

    def test_iteration_is_lazy(self, cls) -> None:
        q = make(cls, 1, 2, 3)
        it = iter(q)
        assert next(it) == 1
        assert next(it) == 2

    @pytest.mark.parametrize("mutate", ["enqueue", "dequeue", "clear"])
    def test_iteration_fails_fast(self, cls, mutate: str) -> None:
        q = make(cls, 1, 2, 3)
        it = iter(q)
        next(it)
        match mutate:
            case "enqueue":
                q.enqueue(4)
            case "dequeue":
                q.dequeue()
            case "clear":
                q.clear()
        with pytest.raises(ConcurrentModificationError):
            next(it)

    def test_iterator_taken_before_mutation_fails_fast(self, cls) -> None:
        q = make(cls, 1, 2, 3)
        it = iter(q)
        q.enqueue(4)
        with pytest.raises(ConcurrentModificationError):
            next(it)

    def test_new_instance(self, cls) -> None:
        q = make(cls, 1, check_preconditions=False)
        fresh = q.new_instance()
        assert type(fresh) is cls
        assert fresh.length() == 0
        assert not fresh.checks_preconditions

    def test_clear(self, cls) -> None:
        q = make(cls, 1, 2)
        q.clear()
        assert q.length() == 0
        q.enqueue(1)
        assert list(q) == [1]

    def test_transfer_from(self, cls) -> None:
        q = make(cls, 9)
        source = make(cls, 1, 2, 3)
        q.transfer_from(source)
        assert list(q) == [1, 2, 3]
        assert source.length() == 0
        assert not source.contains(1)
        source.enqueue(4)
        assert list(q) == [1, 2, 3]
        assert list(source) == [4]

    def test_transfer_from_self_rejected(self, cls) -> None:
        q = make(cls, 1)
        with pytest.raises(PreconditionError):
            q.transfer_from(q)
        assert list(q) == [1]

    def test_transfer_from_other_store_rejected(self, cls) -> None:
        other_cls = LinkedWaitingLine if cls is DequeWaitingLine else DequeWaitingLine
        q = cls()
        with pytest.raises(PreconditionError):
            q.transfer_from(make(other_cls, 1))


class Tracked:
    """Hashable entry that counts how often it is compared for equality."""

    comparisons = 0

    def __init__(self, key: int) -> None:
        self.key = key

    def __hash__(self) -> int:
        return hash(("tracked", self.key))

    def __eq__(self, other: object) -> bool:
        Tracked.comparisons += 1
        return isinstance(other, Tracked) and other.key == self.key


@pytest.mark.parametrize("cls", KERNELS)
def test_index_tracks_repeated_cycles(cls) -> None:
    q = make(cls, 1, 2, 3)
    for _ in range(10):
        q.enqueue(q.dequeue())
    assert q.contains(1) and q.contains(2) and q.contains(3)
    q.dequeue()
    q.dequeue()
    q.dequeue()
    assert not q.contains(1)
    assert q._index.counts == {}


@pytest.mark.parametrize("cls", KERNELS)
def test_mixed_hashable_and_unhashable(cls) -> None:
    q = make(cls, 1, [2], "three")
    assert q.contains([2])
    assert q.contains("three")
    assert q._index.unhashable == 1
    assert q.dequeue() == 1
    assert q.dequeue() == [2]
    assert q._index.unhashable == 0
    assert not q.contains([2])


@pytest.mark.parametrize("cls", KERNELS)
def test_checked_enqueue_does_not_scan(cls) -> None:
    Tracked.comparisons = 0
    q = make(cls, *(Tracked(i) for i in range(200)))
    other = make(cls, *(Tracked(i) for i in range(200, 400)))
    q.append(other)
    assert q.length() == 400
    assert Tracked.comparisons == 0


@pytest.mark.parametrize("cls", KERNELS)
def test_index_follows_transfer_and_clear(cls) -> None:
    q = make(cls, 1, 2)
    receiver = cls()
    receiver.transfer_from(q)
    assert receiver.contains(1)
    assert not q.contains(1)
    q.enqueue(1)
    receiver.clear()
    assert not receiver.contains(1)
    assert q.contains(1)
