"""Semantic token encoding for the Language Server Protocol."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from semtokens.legend import Legend
    from semtokens.positions import LineTable
    from semtokens.spans import ClassifiedSpan

__version__ = "0.1.0"


def encode(
    spans: Iterable[ClassifiedSpan],
    lines: LineTable,
    legend: Legend | None = None,
) -> list[int]:
    """Sort, position, and delta-encode already classified spans."""
    from semtokens.legend import LEGEND
    from semtokens.provider import encode_spans

    return encode_spans(spans, lines, legend if legend is not None else LEGEND)
