"""Relative delta encoding of semantic tokens."""

from __future__ import annotations

from enum import Enum, auto

from lsprotocol.types import SemanticTokens

from semtokens.errors import BuilderFinalizedError


class BuilderState(Enum):
    EMPTY = auto()
    BUILDING = auto()
    BUILT = auto()


class SemanticTokensBuilder:
    """Accumulate tokens in source order as five-integer delta records.

    Each record is ``(delta_line, delta_start_char, length, type_index,
    modifier_bitmask)`` relative to the previous token's start. The caller
    must push in non-decreasing ``(line, column)`` order; the builder does
    not sort or validate.
    """

    def __init__(self) -> None:
        self._data: list[int] = []
        self._prev_line = 0
        self._prev_column = 0
        self._state = BuilderState.EMPTY
        self._result: tuple[int, ...] | None = None

    @property
    def state(self) -> BuilderState:
        return self._state

    def __len__(self) -> int:
        """Number of tokens pushed so far."""
        if self._result is not None:
            return len(self._result) // 5
        return len(self._data) // 5

    def push(
        self,
        line: int,
        column: int,
        length: int,
        type_index: int,
        modifier_bitmask: int,
    ) -> None:
        if self._state is BuilderState.BUILT:
            raise BuilderFinalizedError()

        # The first token is relative to (0, 0).
        delta_line = line - self._prev_line
        if delta_line == 0:
            delta_char = column - self._prev_column
        else:
            delta_char = column

        self._data.extend((delta_line, delta_char, length, type_index, modifier_bitmask))
        self._prev_line = line
        self._prev_column = column
        self._state = BuilderState.BUILDING

    def build(self) -> list[int]:
        """Finalize and return the flat encoded sequence."""
        if self._result is None:
            self._result = tuple(self._data)
            self._data = []
            self._state = BuilderState.BUILT
        return list(self._result)

    def build_semantic_tokens(self) -> SemanticTokens:
        return SemanticTokens(data=self.build())
