# stc_utils/text.py
# Purpose: tokenization and the one ratio helper every score goes through.

from __future__ import annotations

import math
import re
from typing import List

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """
    Lowercase, turn punctuation into spaces, collapse whitespace, split.

    Empty (or punctuation-only) text yields [""]: a document with no
    informative tokens. Callers that count tokens must ignore "".
    """
    cleaned = _NON_WORD.sub(" ", (text or "").lower())
    cleaned = _SPACES.sub(" ", cleaned).strip()
    return cleaned.split(" ")


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """numerator / denominator, or fallback when the result would not be finite."""
    if not denominator:
        return fallback
    result = numerator / denominator
    if not math.isfinite(result):
        return fallback
    return result
