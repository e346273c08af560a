from __future__ import annotations
"""Delimiter-based tokenization for sentence-level matching.

Tokens are the atomic comparison units in sentence mode. No stemming,
case folding or Unicode normalization is applied: a token is exactly the
text between two separator characters.
"""

import re
from functools import lru_cache
from typing import List

DEFAULT_SEPARATORS = " .,;:"


@lru_cache(maxsize=256)
def _separator_pattern(separators: str) -> "re.Pattern[str]":
    # Separators are literal characters, never regex syntax
    return re.compile("[" + "".join(re.escape(ch) for ch in separators) + "]+")


def tokenize(text: str, separators: str = DEFAULT_SEPARATORS) -> List[str]:
    """Split ``text`` on any character in ``separators``.

    Runs of separators and leading/trailing separators never yield empty
    tokens, so ``tokenize("a,b;;c", ",;") == ["a", "b", "c"]`` and an empty
    string yields ``[]``.

    Args:
        text: Text to split
        separators: Set of delimiter characters (order irrelevant)

    Returns:
        List of non-empty tokens in their original order
    """
    if not text:
        return []
    if not separators:
        return [text]
    return [tok for tok in _separator_pattern(separators).split(text) if tok]


__all__ = ["DEFAULT_SEPARATORS", "tokenize"]
