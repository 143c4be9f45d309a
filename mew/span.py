"""Source spans and values annotated with the span they came from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Span:
    """A half-open byte range ``start..end`` into a source text."""

    start: int = 0
    end: int = 0

    def merge(self, other: Span) -> Span:
        """Return the smallest span covering both ``self`` and ``other``."""
        return Span(min(self.start, other.start), max(self.end, other.end))


@dataclass(eq=False)
class Spanned(Generic[T]):
    """A value together with its source span.

    Equality and hashing look only at the value, never at the span.
    """

    value: T
    span: Span = field(default_factory=Span)

    def map(self, func: Callable[[T], U]) -> Spanned[U]:
        """Apply ``func`` to the value, keeping the span."""
        return Spanned(func(self.value), self.span)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Spanned):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)