"""Length-only similarity bound used to prune distance computations."""

from __future__ import annotations
from typing import Sized


def max_similarity(x: Sized, y: Sized) -> float:
    """Best normalized similarity two sequences can reach given their lengths.

    Transforming the shorter sequence into the longer needs at least
    ``|len(x) - len(y)|`` insertions, so the true similarity never exceeds
    ``1 - |len(x) - len(y)| / max(len(x), len(y))``. Two empty sequences
    are identical (1.0).
    """
    x_len = len(x)
    y_len = len(y)
    longest = max(x_len, y_len)
    if longest == 0:
        return 1.0
    return (longest - abs(x_len - y_len)) / longest


def normalized_similarity(distance: int, x_len: int, y_len: int) -> float:
    """Turn an edit distance into a similarity in [0, 1]."""
    longest = max(x_len, y_len)
    if longest == 0:
        return 1.0
    return (longest - distance) / longest


__all__ = ["max_similarity", "normalized_similarity"]
