"""Leftmost-longest, non-overlapping search for a fixed set of literals."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class LiteralMatch(Generic[T]):
    """A literal found at ``data[start:end]`` carrying its associated value."""

    start: int
    end: int
    value: T


class LiteralSet(Generic[T]):
    """A set of byte literals, bucketed by first byte, longest first."""

    def __init__(self, items: Iterable[tuple[str | bytes, T]]) -> None:
        buckets: dict[int, list[tuple[bytes, T]]] = {}
        for literal, value in items:
            raw = literal.encode() if isinstance(literal, str) else bytes(literal)
            if not raw:
                continue
            buckets.setdefault(raw[0], []).append((raw, value))
        for bucket in buckets.values():
            bucket.sort(key=lambda entry: len(entry[0]), reverse=True)
        self._buckets = buckets

    def is_match(self, data: bytes) -> bool:
        """Return whether any literal occurs in ``data``."""
        return next(self.find_iter(data), None) is not None

    def find_iter(self, data: bytes) -> Iterator[LiteralMatch[T]]:
        """Yield non-overlapping matches scanning left to right."""
        data = bytes(data)
        pos = 0
        while pos < len(data):
            found = self._find_at(data, pos)
            if found is None:
                pos += 1
                continue
            yield found
            pos = found.end

    def _find_at(self, data: bytes, pos: int) -> LiteralMatch[T] | None:
        for literal, value in self._buckets.get(data[pos], ()):
            if data.startswith(literal, pos):
                return LiteralMatch(pos, pos + len(literal), value)
        return None