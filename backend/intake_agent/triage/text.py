"""Keyword helpers shared by the emergency and complexity checks."""
from __future__ import annotations

import re
from typing import Iterable


def normalize_text(text: str | None) -> str:
    lowered = (text or "").lower()
    normalized_spaces = re.sub(r"\s+", " ", lowered)
    return normalized_spaces.strip()


def matched_phrases(normalized_text: str, phrases: Iterable[str]) -> tuple[str, ...]:
    """
    Return the phrases found in already-normalized text, in vocabulary order.

    Plain substring matching: "severe headache" also matches "severe headaches".
    """
    if not normalized_text:
        return ()
    return tuple(phrase for phrase in phrases if phrase.lower() in normalized_text)


def contains_any(normalized_text: str, phrases: Iterable[str]) -> bool:
    return bool(matched_phrases(normalized_text, phrases))
