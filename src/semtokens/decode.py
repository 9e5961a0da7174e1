"""Decode the flat delta encoding back into absolute tokens."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from semtokens.legend import LEGEND, Legend


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """One token at its absolute zero-based position."""

    line: int
    character: int
    length: int
    type: str
    modifiers: frozenset[str]


def decode_semantic_tokens(data: Sequence[int], legend: Legend = LEGEND) -> list[DecodedToken]:
    """Reverse the delta accumulation over groups of five integers.

    Raises ValueError if the length is not a multiple of five or a type
    index falls outside the legend.
    """
    if len(data) % 5 != 0:
        raise ValueError(f"encoded length {len(data)} is not a multiple of 5")

    tokens: list[DecodedToken] = []
    line = 0
    character = 0
    for i in range(0, len(data), 5):
        delta_line, delta_char, length, type_index, bits = data[i : i + 5]
        if delta_line:
            line += delta_line
            character = delta_char
        else:
            character += delta_char

        if not 0 <= type_index < len(legend.token_types):
            raise ValueError(f"type index {type_index} outside legend")

        modifiers = frozenset(
            name for bit, name in enumerate(legend.token_modifiers) if bits & (1 << bit)
        )
        tokens.append(
            DecodedToken(line, character, length, legend.token_types[type_index], modifiers)
        )
    return tokens
