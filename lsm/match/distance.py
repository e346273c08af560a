from __future__ import annotations
"""Edit distance between two sequences of comparable units.

Word mode compares characters (``str``), sentence mode compares tokens
(``list`` of ``str``). The same routine serves both: it only relies on
``len()``, indexing and ``==`` between elements.
"""

from enum import Enum
from typing import Callable, Sequence, TypeVar

from rapidfuzz.distance import Levenshtein

T = TypeVar("T")

DistanceFunction = Callable[[Sequence, Sequence], int]


class DistanceBackend(str, Enum):
    NATIVE = "native"
    RAPIDFUZZ = "rapidfuzz"


def levenshtein_distance(x: Sequence[T], y: Sequence[T]) -> int:
    """Unit-cost Levenshtein distance using two DP rows of width ``len(y)+1``.

    Callers pass the shorter sequence first to keep the loop body small,
    but the result does not depend on argument order.
    """
    m = len(x)
    n = len(y)
    if n == 0:
        return m
    if m == 0:
        return n

    previous = list(range(n + 1))
    current = [0] * (n + 1)
    for i in range(1, m + 1):
        current[0] = i
        x_unit = x[i - 1]
        for j in range(1, n + 1):
            cost = 0 if x_unit == y[j - 1] else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous, current = current, previous
    return previous[n]


def rapidfuzz_distance(x: Sequence[T], y: Sequence[T]) -> int:
    """Levenshtein distance computed by rapidfuzz (strings or token lists)."""
    return Levenshtein.distance(x, y, weights=(1, 1, 1))


_BACKENDS = {
    DistanceBackend.NATIVE: levenshtein_distance,
    DistanceBackend.RAPIDFUZZ: rapidfuzz_distance,
}


def get_distance_function(backend: DistanceBackend | str = DistanceBackend.NATIVE) -> DistanceFunction:
    """Resolve a backend name to its distance function.

    Raises:
        ValueError: If the backend name is unknown
    """
    try:
        return _BACKENDS[DistanceBackend(backend)]
    except ValueError:
        valid = ", ".join(b.value for b in DistanceBackend)
        raise ValueError(f"Unknown distance backend '{backend}' (expected one of: {valid})") from None


__all__ = [
    "DistanceBackend",
    "DistanceFunction",
    "levenshtein_distance",
    "rapidfuzz_distance",
    "get_distance_function",
]
