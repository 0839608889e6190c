"""
Page Value Object

Architectural Intent:
- Immutable result of one list call: the items plus an opaque continuation
  token
- A page without a token is terminal; no further page follows it
"""

from dataclasses import dataclass, field
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One HTTP response's worth of list results."""

    items: tuple[T, ...] = field(default_factory=tuple)
    next_token: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        if self.next_token == "":
            object.__setattr__(self, "next_token", None)

    @property
    def is_terminal(self) -> bool:
        return self.next_token is None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    @staticmethod
    def empty() -> "Page":
        """Return an empty terminal page."""
        return Page(items=(), next_token=None)
