"""Token legend: the ordered type and modifier names shared with the client.

Index *i* in each sequence is the wire code for that name, so the order is
fixed for the lifetime of a server session.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from lsprotocol.types import SemanticTokenModifiers, SemanticTokensLegend, SemanticTokenTypes

from semtokens.errors import UnknownTokenType


class CustomTokenTypes(str, Enum):
    SELF_PARAMETER = "selfParameter"
    CLS_PARAMETER = "clsParameter"
    # Standard since LSP 3.18; not present in every lsprotocol release.
    LABEL = "label"


class CustomTokenModifiers(str, Enum):
    BUILTIN = "builtin"


TOKEN_TYPES: tuple[str, ...] = (
    SemanticTokenTypes.Class.value,
    SemanticTokenTypes.Parameter.value,
    SemanticTokenTypes.TypeParameter.value,
    SemanticTokenTypes.Function.value,
    SemanticTokenTypes.Method.value,
    SemanticTokenTypes.Decorator.value,
    SemanticTokenTypes.Property.value,
    SemanticTokenTypes.Namespace.value,
    SemanticTokenTypes.Variable.value,
    SemanticTokenTypes.Type.value,
    SemanticTokenTypes.Keyword.value,
    SemanticTokenTypes.Operator.value,
    SemanticTokenTypes.String.value,
    SemanticTokenTypes.Number.value,
    SemanticTokenTypes.Comment.value,
    SemanticTokenTypes.Regexp.value,
    SemanticTokenTypes.EnumMember.value,
    SemanticTokenTypes.Struct.value,
    SemanticTokenTypes.Event.value,
    SemanticTokenTypes.Interface.value,
    SemanticTokenTypes.Enum.value,
    SemanticTokenTypes.Macro.value,
    CustomTokenTypes.LABEL.value,
    CustomTokenTypes.SELF_PARAMETER.value,
    CustomTokenTypes.CLS_PARAMETER.value,
)

TOKEN_MODIFIERS: tuple[str, ...] = (
    SemanticTokenModifiers.Definition.value,
    SemanticTokenModifiers.Declaration.value,
    SemanticTokenModifiers.Async.value,
    SemanticTokenModifiers.Readonly.value,
    SemanticTokenModifiers.DefaultLibrary.value,
    SemanticTokenModifiers.Modification.value,
    SemanticTokenModifiers.Static.value,
    SemanticTokenModifiers.Abstract.value,
    SemanticTokenModifiers.Deprecated.value,
    SemanticTokenModifiers.Documentation.value,
    CustomTokenModifiers.BUILTIN.value,
)


class Legend:
    """Immutable name-to-index registry for token types and modifiers."""

    __slots__ = ("_token_types", "_token_modifiers", "_type_index", "_modifier_index")

    def __init__(self, token_types: Sequence[str], token_modifiers: Sequence[str]) -> None:
        self._token_types = tuple(token_types)
        self._token_modifiers = tuple(token_modifiers)
        self._type_index = _index_names(self._token_types, "token type")
        self._modifier_index = _index_names(self._token_modifiers, "token modifier")

    @property
    def token_types(self) -> tuple[str, ...]:
        return self._token_types

    @property
    def token_modifiers(self) -> tuple[str, ...]:
        return self._token_modifiers

    def type_index(self, name: str) -> int:
        """Return the wire code for *name*; raise UnknownTokenType if absent."""
        try:
            return self._type_index[name]
        except KeyError:
            raise UnknownTokenType(name) from None

    def modifier_index(self, name: str) -> int | None:
        """Return the bit position for *name*, or None if the legend lacks it."""
        return self._modifier_index.get(name)

    def to_lsp(self) -> SemanticTokensLegend:
        """Return the legend as published in the server capabilities."""
        return SemanticTokensLegend(
            token_types=list(self._token_types),
            token_modifiers=list(self._token_modifiers),
        )

    def __repr__(self) -> str:
        return (
            f"Legend({len(self._token_types)} types, "
            f"{len(self._token_modifiers)} modifiers)"
        )


def _index_names(names: tuple[str, ...], kind: str) -> dict[str, int]:
    index: dict[str, int] = {}
    for i, name in enumerate(names):
        if name in index:
            raise ValueError(f"duplicate {kind} in legend: {name!r}")
        index[name] = i
    return index


LEGEND = Legend(TOKEN_TYPES, TOKEN_MODIFIERS)
