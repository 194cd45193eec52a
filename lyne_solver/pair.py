from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True, order=True)
class Pair(Generic[A, B]):
    first: A
    second: B

    @staticmethod
    def sorted(a: Any, b: Any) -> "Pair":
        """Canonical key for an unordered pair (smaller element first)."""
        if b < a:
            return Pair(b, a)
        return Pair(a, b)

    def opposite(self) -> "Pair[B, A]":
        return Pair(self.second, self.first)

    def __iter__(self):
        yield self.first
        yield self.second
