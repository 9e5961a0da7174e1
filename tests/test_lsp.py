"""Tests for the LSP server: semantic token responses and the advertised legend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest
from lsprotocol.types import (
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    SemanticTokens,
    SemanticTokensLegend,
    TextDocumentItem,
)
from pygls.exceptions import JsonRpcRequestCancelled
from pygls.workspace import Workspace

from semtokens.cancellation import CancellationToken
from semtokens.errors import UnknownTokenType
from semtokens.legend import TOKEN_MODIFIERS, TOKEN_TYPES
from semtokens.lsp import _semantic_tokens, create_server
from semtokens.program import ParseResults
from semtokens.spans import ClassifiedSpan
from tests.conftest import FakeProgram, ScriptedWalker, WordWalker

URI = "file:///test.py"


@dataclass
class WorkspaceProgram:
    """Reads documents from the server workspace."""

    workspace: Workspace
    evaluator: Any = None

    def get_parse_results(self, uri: str) -> ParseResults | None:
        doc = self.workspace.text_documents.get(uri)
        if doc is None:
            return None
        return FakeProgram({uri: doc.source}).get_parse_results(uri)


@pytest.fixture
def lsp_env():
    """Create a server with an initialized workspace and a helper to open documents."""
    ls = create_server(WorkspaceProgram, WordWalker)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    def put(source: str, uri: str = URI) -> None:
        ws.put_text_document(
            TextDocumentItem(uri=uri, language_id="python", version=0, text=source)
        )

    return ls, put


class TestSemanticTokens:
    def test_open_document(self, lsp_env) -> None:
        ls, put = lsp_env
        put("if x:\n  return 1")
        result = _semantic_tokens(ls, URI)
        assert isinstance(result, SemanticTokens)
        assert result.data == [
            0, 0, 2, 10, 0,
            0, 3, 1, 8, 0,
            0, 1, 1, 11, 0,
            1, 2, 6, 10, 0,
            0, 7, 1, 13, 0,
        ]  # fmt: skip

    def test_unknown_document_is_empty(self, lsp_env) -> None:
        ls, _ = lsp_env
        assert _semantic_tokens(ls, "file:///missing.py").data == []

    def test_program_created_once(self, lsp_env) -> None:
        ls, put = lsp_env
        put("x")
        _semantic_tokens(ls, URI)
        program = ls.program
        _semantic_tokens(ls, URI)
        assert ls.program is program
        assert isinstance(program, WorkspaceProgram)

    def test_cancellation_maps_to_request_cancelled(self, lsp_env) -> None:
        ls, put = lsp_env
        put("x")
        token = CancellationToken()
        token.cancel()
        with pytest.raises(JsonRpcRequestCancelled):
            _semantic_tokens(ls, URI, token)

    def test_unknown_type_propagates(self, lsp_env, caplog) -> None:
        ls, put = lsp_env
        put("abc")
        ls.walker_factory = lambda evaluator, tokens, include: ScriptedWalker(
            [ClassifiedSpan.of(0, 3, "widget")]
        )
        with pytest.raises(UnknownTokenType):
            _semantic_tokens(ls, URI)
        assert "classifier and legend disagree" in caplog.text


class TestCapabilities:
    def test_legend_registered(self, lsp_env) -> None:
        ls, _ = lsp_env
        options = ls.protocol.fm.feature_options[TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL]
        assert isinstance(options, SemanticTokensLegend)
        assert options.token_types == list(TOKEN_TYPES)
        assert options.token_modifiers == list(TOKEN_MODIFIERS)
