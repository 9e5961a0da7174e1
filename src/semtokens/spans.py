"""Classified spans and zero-based document positions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ClassifiedSpan:
    """A source range tagged with one token type and a set of modifiers.

    ``start`` is an offset into the document text and ``length`` counts
    characters from there. A span never crosses a line boundary.
    """

    start: int
    length: int
    type: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"span start must be non-negative, got {self.start}")
        if self.length < 0:
            raise ValueError(f"span length must be non-negative, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length

    @classmethod
    def of(
        cls, start: int, length: int, type: str, modifiers: Iterable[str] = ()
    ) -> ClassifiedSpan:
        """Build a span from any iterable of modifier names."""
        return cls(start, length, type, frozenset(modifiers))


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based line and character."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open range between two positions."""

    start: Position
    end: Position
