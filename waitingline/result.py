"""Result type for operations that can fail at an I/O boundary."""

from dataclasses import dataclass
from typing import TypeAlias, TypeVar, Generic

T = TypeVar("T")
E = TypeVar("E", bound=Exception)

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def describe(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"

Result: TypeAlias = Ok[T] | Err[E]
