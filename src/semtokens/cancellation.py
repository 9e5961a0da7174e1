"""Cooperative cancellation for long-running requests."""

from __future__ import annotations

import threading

from semtokens.errors import CancelledError


class CancellationToken:
    """Flag that another thread may set to abandon a request."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()


def throw_if_cancellation_requested(token: CancellationToken | None) -> None:
    """Raise CancelledError if *token* has been cancelled."""
    if token is not None and token.is_cancellation_requested:
        raise CancelledError()
