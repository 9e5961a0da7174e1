"""Compute the encoded semantic tokens for one document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from semtokens.builder import SemanticTokensBuilder
from semtokens.cancellation import CancellationToken, throw_if_cancellation_requested
from semtokens.encoder import encode_token_modifiers, encode_token_type
from semtokens.legend import LEGEND, Legend
from semtokens.positions import LineTable, convert_offsets_to_range
from semtokens.program import ProgramView, WalkerFactory
from semtokens.spans import ClassifiedSpan

logger = logging.getLogger(__name__)


class SemanticTokensProvider:
    """Walk a document's parse tree and delta-encode the classified spans."""

    def __init__(
        self,
        program: ProgramView,
        uri: str,
        token: CancellationToken | None,
        walker_factory: WalkerFactory,
        legend: Legend = LEGEND,
    ) -> None:
        self._program = program
        self._uri = uri
        self._token = token
        self._walker_factory = walker_factory
        self._legend = legend
        self._parse_results = program.get_parse_results(uri)

    def on_semantic_tokens(self) -> list[int]:
        if self._parse_results is None:
            logger.debug("no parse results for %s", self._uri)
            return SemanticTokensBuilder().build()

        stream = self._parse_results.tokens
        tokens: list[Any] = [stream.get_item_at(i) for i in range(stream.count)]

        # Comprehensive mode: syntax tokens as well as resolved symbols.
        walker = self._walker_factory(self._program.evaluator, tokens, True)
        walker.walk(self._parse_results.parse_tree)

        throw_if_cancellation_requested(self._token)

        data = encode_spans(walker.items, self._parse_results.lines, self._legend)
        logger.debug("encoded %d semantic tokens for %s", len(data) // 5, self._uri)
        return data


def encode_spans(
    spans: Iterable[ClassifiedSpan],
    lines: LineTable,
    legend: Legend = LEGEND,
) -> list[int]:
    """Stable-sort *spans* by start offset and encode them."""
    builder = SemanticTokensBuilder()
    for span in sorted(spans, key=lambda s: s.start):
        rng = convert_offsets_to_range(span.start, span.end, lines)
        builder.push(
            rng.start.line,
            rng.start.character,
            span.length,
            encode_token_type(span.type, legend),
            encode_token_modifiers(span.modifiers, legend),
        )
    return builder.build()


def compute_semantic_tokens(
    program: ProgramView,
    uri: str,
    token: CancellationToken | None,
    walker_factory: WalkerFactory,
) -> list[int]:
    """Function form of :meth:`SemanticTokensProvider.on_semantic_tokens`."""
    return SemanticTokensProvider(program, uri, token, walker_factory).on_semantic_tokens()
