"""Shared test fixtures: a toy word-level backend standing in for real analysis."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import pytest

from semtokens.positions import LineTable
from semtokens.program import ListTokenStream, ParseResults
from semtokens.spans import ClassifiedSpan

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|\d+|\S")
_KEYWORDS = frozenset({"def", "class", "return", "if", "else", "async"})


@dataclass(frozen=True, slots=True)
class FakeToken:
    start: int
    length: int
    text: str


def tokenize(text: str) -> list[FakeToken]:
    return [FakeToken(m.start(), m.end() - m.start(), m.group()) for m in _WORD.finditer(text)]


@dataclass
class FakeProgram:
    """Holds document text by URI; text containing '@@' fails to parse."""

    documents: dict[str, str] = field(default_factory=dict)
    evaluator: Any = "evaluator"

    def get_parse_results(self, uri: str) -> ParseResults | None:
        text = self.documents.get(uri)
        if text is None or "@@" in text:
            return None
        return ParseResults(
            tokens=ListTokenStream(tokenize(text)),
            lines=LineTable.from_text(text),
            parse_tree=text,
        )


class WordWalker:
    """Classifies words: keywords, numbers, def names, self, and variables."""

    def __init__(
        self, evaluator: Any, tokens: list[FakeToken], include_syntax_tokens: bool
    ) -> None:
        self.evaluator = evaluator
        self.tokens = tokens
        self.include_syntax_tokens = include_syntax_tokens
        self.items: list[ClassifiedSpan] = []
        self.walked: Any = None

    def walk(self, tree: Any) -> None:
        self.walked = tree
        # Emit in reverse so the provider has to sort.
        for i in reversed(range(len(self.tokens))):
            prev = self.tokens[i - 1].text if i > 0 else ""
            self.items.append(self._classify(self.tokens[i], prev))

    def _classify(self, tok: FakeToken, prev: str) -> ClassifiedSpan:
        if tok.text in _KEYWORDS:
            return ClassifiedSpan.of(tok.start, tok.length, "keyword")
        if tok.text.isdigit():
            return ClassifiedSpan.of(tok.start, tok.length, "number")
        if tok.text == "self":
            return ClassifiedSpan.of(tok.start, tok.length, "selfParameter")
        if prev == "def":
            return ClassifiedSpan.of(tok.start, tok.length, "function", {"definition"})
        if tok.text[0].isalpha() or tok.text[0] == "_":
            return ClassifiedSpan.of(tok.start, tok.length, "variable")
        return ClassifiedSpan.of(tok.start, tok.length, "operator")


class ScriptedWalker:
    """Returns a fixed list of spans regardless of the tree."""

    def __init__(self, spans: list[ClassifiedSpan]) -> None:
        self._spans = spans
        self.items: list[ClassifiedSpan] = []

    def walk(self, tree: Any) -> None:
        self.items = list(self._spans)


@pytest.fixture
def program() -> FakeProgram:
    return FakeProgram()


@pytest.fixture
def scripted():
    """Return a walker factory that yields the given spans."""

    def _factory(spans: list[ClassifiedSpan]):
        def _make(evaluator: Any, tokens: list[Any], include_syntax_tokens: bool) -> ScriptedWalker:
            return ScriptedWalker(spans)

        return _make

    return _factory
