from __future__ import annotations

import re
from typing import Optional

_PUNTUACION_Y_ESPACIOS_RE = re.compile(r"[\W_]+")


def normalize_search_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = value.strip()
    return text or None


def contains_casefold(haystack: Optional[str], needle: str) -> bool:
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()


def compact_token(value: Optional[str]) -> str:
    """Quita espacios y puntuación y pasa a minúsculas ("21 04 090" -> "2104090")."""
    if not value:
        return ""
    return _PUNTUACION_Y_ESPACIOS_RE.sub("", value).casefold()
