"""Interfaces of the analysis collaborators the provider consumes.

The tokenizer, parser, analyzer and classifying walker live outside this
package. Backends implement these protocols; the provider only calls what
is declared here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from semtokens.positions import LineTable
from semtokens.spans import ClassifiedSpan

T_co = TypeVar("T_co", covariant=True)
T = TypeVar("T")


@runtime_checkable
class TokenStream(Protocol[T_co]):
    """Tokenizer output with a count and positional access."""

    @property
    def count(self) -> int: ...

    def get_item_at(self, index: int) -> T_co: ...


class ListTokenStream(Generic[T]):
    """TokenStream over an in-memory sequence."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = items

    @property
    def count(self) -> int:
        return len(self._items)

    def get_item_at(self, index: int) -> T:
        return self._items[index]


@dataclass(frozen=True, slots=True)
class ParseResults:
    """Everything the provider needs from one parsed document snapshot."""

    tokens: TokenStream[Any]
    lines: LineTable
    parse_tree: Any


class ProgramView(Protocol):
    """Access to parse and analysis results for open documents."""

    @property
    def evaluator(self) -> Any: ...

    def get_parse_results(self, uri: str) -> ParseResults | None: ...


class SemanticTokensWalker(Protocol):
    """Visits a parse tree and collects classified spans in ``items``."""

    items: list[ClassifiedSpan]

    def walk(self, tree: Any) -> None: ...


class WalkerFactory(Protocol):
    def __call__(
        self,
        evaluator: Any,
        tokens: list[Any],
        include_syntax_tokens: bool,
    ) -> SemanticTokensWalker: ...
