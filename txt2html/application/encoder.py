"""HTML entity encoding for titles and preformatted bodies."""
from __future__ import annotations

from typing import Tuple


# ``&`` goes first so the entities introduced afterwards are not re-escaped.
ENTITY_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def encode_entities(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"``; every other character is kept."""
    for raw, entity in ENTITY_REPLACEMENTS:
        text = text.replace(raw, entity)
    return text


__all__ = ["ENTITY_REPLACEMENTS", "encode_entities"]
