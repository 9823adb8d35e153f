"""waitingline: a FIFO waiting line whose rich operations are layered on a four-primitive kernel."""

from .errors import (
    AbsentEntryError,
    AmbiguousEntryError,
    ConcurrentModificationError,
    DuplicateEntryError,
    EmptyLineError,
    PreconditionError,
)
from .kernel import WaitingLineKernel
from .secondary import WaitingLineSecondary
from .deque_line import DequeWaitingLine
from .linked_line import LinkedWaitingLine
from .order import Comparator, by_key, natural_order, reverse_order
from .config import Settings, get_settings
from .result import Ok, Err, Result

KERNELS: dict[str, type[WaitingLineSecondary]] = {
    "deque": DequeWaitingLine,
    "linked": LinkedWaitingLine,
}

__all__ = [
    # Errors
    "AbsentEntryError", "AmbiguousEntryError", "ConcurrentModificationError",
    "DuplicateEntryError", "EmptyLineError", "PreconditionError",
    # Layers
    "WaitingLineKernel", "WaitingLineSecondary",
    # Kernels
    "DequeWaitingLine", "LinkedWaitingLine", "KERNELS",
    # Ordering
    "Comparator", "by_key", "natural_order", "reverse_order",
    # Config
    "Settings", "get_settings",
    # Result
    "Ok", "Err", "Result",
]
