"""Error types raised while computing semantic tokens."""

from __future__ import annotations


class SemanticTokensError(Exception):
    """Base class for all semtokens errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownTokenType(SemanticTokensError):
    """Raised when a span carries a type name absent from the legend.

    This means the classifier and the legend have drifted apart, so the
    request fails rather than emitting a wrong type code.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown token type: {name!r}")


class CancelledError(SemanticTokensError):
    """Raised when the client cancelled the request before encoding."""

    def __init__(self, message: str = "request cancelled") -> None:
        super().__init__(message)


class BuilderFinalizedError(SemanticTokensError, RuntimeError):
    """Raised on push() after the builder has been built."""

    def __init__(self) -> None:
        super().__init__("cannot push tokens after build()")


class ConfigError(SemanticTokensError):
    """Raised on invalid configuration values or backend references."""
