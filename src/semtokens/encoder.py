"""Map token type names and modifier sets to their wire encoding."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from semtokens.legend import LEGEND, Legend

logger = logging.getLogger(__name__)


def encode_token_type(name: str, legend: Legend = LEGEND) -> int:
    """Return the legend index of *name*. Raises UnknownTokenType."""
    return legend.type_index(name)


def encode_token_modifiers(names: Iterable[str], legend: Legend = LEGEND) -> int:
    """Fold modifier names into a bitmask, skipping names the legend lacks."""
    mask = 0
    for name in names:
        idx = legend.modifier_index(name)
        if idx is None:
            logger.debug("ignoring unknown token modifier %r", name)
            continue
        mask |= 1 << idx
    return mask
