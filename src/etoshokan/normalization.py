from __future__ import annotations

import unicodedata

__all__ = ["normalize_key"]


def normalize_key(text: str) -> str:
    """Return the index key for ``text``: surrounding whitespace removed, NFC composed."""
    return unicodedata.normalize("NFC", text.strip())
