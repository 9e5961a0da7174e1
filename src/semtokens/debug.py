"""Human-readable dump of encoded semantic tokens."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from semtokens.decode import decode_semantic_tokens
from semtokens.legend import LEGEND, Legend
from semtokens.positions import LineTable


def dump_tokens(
    data: Sequence[int],
    legend: Legend = LEGEND,
    *,
    source: str | None = None,
    file: TextIO = sys.stderr,
) -> None:
    """Print one line per token to *file*, with its text when *source* is given."""
    lines = LineTable.from_text(source) if source is not None else None
    for tok in decode_semantic_tokens(data, legend):
        mods = ",".join(sorted(tok.modifiers))
        file.write(f"{tok.line + 1}:{tok.character + 1} len={tok.length} {tok.type}")
        if mods:
            file.write(f" [{mods}]")
        if source is not None and lines is not None and tok.line < lines.line_count:
            start = lines.line_starts[tok.line] + tok.character
            text = source[start : start + tok.length]
            file.write(f" {text!r}")
        file.write("\n")


def dump_legend(legend: Legend = LEGEND, *, file: TextIO = sys.stdout) -> None:
    file.write("token types:\n")
    for i, name in enumerate(legend.token_types):
        file.write(f"  {i:>2} {name}\n")
    file.write("token modifiers:\n")
    for i, name in enumerate(legend.token_modifiers):
        file.write(f"  {i:>2} {name} (1<<{i})\n")
