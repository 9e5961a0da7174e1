"""Offset to line/column conversion over a line-start table."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass

from semtokens.spans import Position, Range


@dataclass(frozen=True, slots=True)
class LineTable:
    """Start offset of every line plus the total text length.

    ``line_starts[0]`` is always 0. Line terminators belong to the line
    they end.
    """

    line_starts: tuple[int, ...]
    text_length: int

    def __post_init__(self) -> None:
        if not self.line_starts or self.line_starts[0] != 0:
            raise ValueError("line table must start at offset 0")

    @classmethod
    def from_text(cls, text: str) -> LineTable:
        """Build the table for *text*, recognising \\n, \\r\\n and \\r."""
        starts = [0]
        i = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == "\r":
                if i + 1 < n and text[i + 1] == "\n":
                    i += 1
                starts.append(i + 1)
            elif ch == "\n":
                starts.append(i + 1)
            i += 1
        return cls(tuple(starts), n)

    @classmethod
    def from_starts(cls, line_starts: Sequence[int], text_length: int) -> LineTable:
        return cls(tuple(line_starts), text_length)

    @property
    def line_count(self) -> int:
        return len(self.line_starts)


def convert_offset_to_position(offset: int, lines: LineTable) -> Position:
    """Return the zero-based position of *offset*.

    Offsets past the end of the text clamp to the end of the last line.
    """
    if offset >= lines.text_length:
        last = lines.line_count - 1
        return Position(last, lines.text_length - lines.line_starts[last])
    line = max(bisect_right(lines.line_starts, offset) - 1, 0)
    return Position(line, offset - lines.line_starts[line])


def convert_offsets_to_range(start: int, end: int, lines: LineTable) -> Range:
    return Range(
        convert_offset_to_position(start, lines),
        convert_offset_to_position(end, lines),
    )
