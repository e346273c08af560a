"""Edit-distance scoring of one (source, candidate) pair.

This module defines the request configuration and the scorer that turns a
pair of texts into a normalized similarity. It does NOT iterate candidates
or touch any record store; the streaming engine feeds it already-extracted
text.

Scoring steps:
- Derive comparison units (characters in word mode, tokens in sentence mode)
- Prune with the length-only bound when it cannot beat the threshold
- Otherwise compute the edit distance and normalize by the longer length
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..errors import ConfigurationError
from .distance import DistanceFunction, levenshtein_distance
from .similarity import max_similarity, normalized_similarity
from .tokenizer import DEFAULT_SEPARATORS, tokenize

# --- Request configuration -------------------------------------------------

class MatchMode(str, Enum):
    WORD = "word"
    SENTENCE = "sentence"


@dataclass(frozen=True)
class MatchConfig:
    """One matching request; immutable once built.

    The pre-filter keeps a candidate only when its bound is strictly greater
    than ``threshold`` while final acceptance is ``score >= threshold``.
    """
    source_term: str
    threshold: float
    field: str
    mode: MatchMode = MatchMode.WORD
    separators: str = DEFAULT_SEPARATORS
    limit: Optional[int] = None
    output_field: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.source_term, str):
            raise ConfigurationError("source_term must be a string")
        if not isinstance(self.field, str) or not self.field:
            raise ConfigurationError("field must be a non-empty string")
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise ConfigurationError("threshold must be a number")
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"threshold must be within [0, 1], got {self.threshold}")
        if self.limit is not None:
            if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0:
                raise ConfigurationError(f"limit must be a non-negative integer, got {self.limit!r}")
        if self.output_field is not None and not isinstance(self.output_field, str):
            raise ConfigurationError("output_field must be a string")
        if not isinstance(self.separators, str):
            raise ConfigurationError("separators must be a string")
        # Accept plain strings ("word"/"sentence") for convenience
        try:
            mode = MatchMode(self.mode)
        except ValueError:
            raise ConfigurationError(f"mode must be 'word' or 'sentence', got {self.mode!r}") from None
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "threshold", float(self.threshold))

    @property
    def is_sentence(self) -> bool:
        return self.mode is MatchMode.SENTENCE

    @property
    def has_limit(self) -> bool:
        return self.limit is not None

# --- Score result ----------------------------------------------------------

@dataclass(frozen=True)
class PairScore:
    score: float
    distance: int
    max_similarity: float
    pruned: bool = False

# --- Core scoring ----------------------------------------------------------

def comparison_units(text: str, config: MatchConfig) -> Sequence:
    """Characters (word mode) or tokens (sentence mode) of ``text``."""
    if config.is_sentence:
        return tokenize(text, config.separators)
    return text


def score_units(
    source_units: Sequence,
    candidate_units: Sequence,
    threshold: float,
    distance_fn: DistanceFunction = levenshtein_distance,
) -> PairScore:
    """Score two prepared unit sequences.

    When the bound is not strictly above ``threshold`` the distance is never
    computed and ``(score, distance) == (0.0, 0)``. A candidate whose bound
    equals the threshold is therefore pruned even if its true score would
    equal it.
    """
    bound = max_similarity(candidate_units, source_units)
    if bound <= threshold:
        return PairScore(score=0.0, distance=0, max_similarity=bound, pruned=True)

    if len(candidate_units) > len(source_units):
        distance = distance_fn(source_units, candidate_units)
    else:
        distance = distance_fn(candidate_units, source_units)

    score = normalized_similarity(distance, len(source_units), len(candidate_units))
    return PairScore(score=score, distance=distance, max_similarity=bound)


def score_pair(
    source: str,
    candidate_text: str,
    config: MatchConfig,
    distance_fn: DistanceFunction = levenshtein_distance,
) -> PairScore:
    """Compute the similarity of ``candidate_text`` against ``source``.

    Args:
        source: Source term or sentence
        candidate_text: Comparison text of one candidate
        config: Request configuration (mode, separators, threshold)
        distance_fn: Distance backend

    Returns:
        PairScore with score, distance, bound and whether the pair was pruned
    """
    return score_units(
        comparison_units(source, config),
        comparison_units(candidate_text, config),
        config.threshold,
        distance_fn,
    )


__all__ = [
    "MatchMode",
    "MatchConfig",
    "PairScore",
    "comparison_units",
    "score_units",
    "score_pair",
]
