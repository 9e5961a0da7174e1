"""LSP server answering textDocument/semanticTokens/full."""

from __future__ import annotations

import logging
from collections.abc import Callable

from lsprotocol.types import (
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    SemanticTokens,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.exceptions import JsonRpcRequestCancelled
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from semtokens import __version__
from semtokens.cancellation import CancellationToken
from semtokens.errors import CancelledError, UnknownTokenType
from semtokens.legend import LEGEND
from semtokens.program import ProgramView, WalkerFactory
from semtokens.provider import compute_semantic_tokens

logger = logging.getLogger(__name__)

ProgramFactory = Callable[[Workspace], ProgramView]


class SemanticTokensServer(LanguageServer):
    """Language server bound to one analysis backend."""

    def __init__(self, program_factory: ProgramFactory, walker_factory: WalkerFactory) -> None:
        super().__init__(
            "semtokens-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
        )
        self.program_factory = program_factory
        self.walker_factory = walker_factory
        self._program: ProgramView | None = None

    @property
    def program(self) -> ProgramView:
        """The backend program, created on first use once the workspace exists."""
        if self._program is None:
            self._program = self.program_factory(self.workspace)
        return self._program


def _semantic_tokens(
    ls: SemanticTokensServer, uri: str, token: CancellationToken | None = None
) -> SemanticTokens:
    """Compute the full token set for *uri* and wrap it for the client.

    The served handler passes no *token*: pygls gives synchronous handlers
    no view of $/cancelRequest, so a cancellation check only fires for
    callers that supply their own token.
    """
    try:
        data = compute_semantic_tokens(ls.program, uri, token, ls.walker_factory)
    except CancelledError as exc:
        logger.debug("semantic tokens for %s cancelled", uri)
        raise JsonRpcRequestCancelled(message=exc.message) from exc
    except UnknownTokenType:
        logger.exception("classifier and legend disagree while encoding %s", uri)
        raise
    return SemanticTokens(data=data)


def create_server(
    program_factory: ProgramFactory, walker_factory: WalkerFactory
) -> SemanticTokensServer:
    """Build a server that advertises the legend and serves full token requests."""
    server = SemanticTokensServer(program_factory, walker_factory)

    @server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND.to_lsp())
    def semantic_tokens_full(
        ls: SemanticTokensServer, params: SemanticTokensParams
    ) -> SemanticTokens:
        return _semantic_tokens(ls, params.text_document.uri)

    return server


def main(program_factory: ProgramFactory, walker_factory: WalkerFactory) -> None:
    logger.info("starting semtokens-lsp %s on stdio", __version__)
    create_server(program_factory, walker_factory).start_io()
